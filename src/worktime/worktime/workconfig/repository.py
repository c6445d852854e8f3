from __future__ import annotations

from typing import Protocol

from .model import WorkConfig


class WorkConfigRepository(Protocol):
    def get_config(self) -> WorkConfig:
        raise NotImplementedError

    def save_config(self, config: WorkConfig) -> None:
        """Upsert the singleton row."""

        raise NotImplementedError
