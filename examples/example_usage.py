"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.worktime.worktime.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    print(container.session_service.get_status())
    print(container.stats_service.get_monthly_stats())


if __name__ == "__main__":
    main()
