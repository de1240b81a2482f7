from __future__ import annotations

from typing import Optional, Protocol


class ConfigRepository(Protocol):
    """Key/value system configuration kept in the record store."""

    def get_value(self, key: str) -> Optional[str]:
        raise NotImplementedError
