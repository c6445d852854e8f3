"""Development entry point: ``python app.py`` (or ``flask --app app run``)."""

import os

from src.worktime.worktime.main import create_app

app = create_app()

if __name__ == "__main__":
    # The reloader would start a second reminder scheduler in the child process.
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "8080")), use_reloader=False)
