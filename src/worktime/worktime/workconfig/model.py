from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_CONFIG_ID, STANDARD_WORK_MINUTES


@dataclass(frozen=True)
class WorkConfig:
    """Domain entity: the singleton work configuration."""

    default_work_minutes: int = STANDARD_WORK_MINUTES
    check_in_api_url: str = ""
    auto_fetch_enabled: bool = False
    p_auth: str = ""
    p_rtoken: str = ""
    check_in_webhook_url: str = ""
    check_out_webhook_url: str = ""
    config_id: str = DEFAULT_CONFIG_ID

    @property
    def has_api_config(self) -> bool:
        return bool(self.check_in_api_url and self.p_auth and self.p_rtoken)

    @property
    def should_auto_fetch(self) -> bool:
        return self.auto_fetch_enabled and self.has_api_config


@dataclass(frozen=True)
class ConfigUpdate:
    """Incoming configuration change.

    ``work_minutes`` is applied only when positive; every other field
    overwrites the stored value, so an empty string clears it.
    """

    work_minutes: int = 0
    check_in_api_url: str = ""
    auto_fetch_enabled: bool = False
    p_auth: str = ""
    p_rtoken: str = ""
    check_in_webhook_url: str = ""
    check_out_webhook_url: str = ""
