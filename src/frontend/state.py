"""State container for config loading and dirty tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ConfigState:
    data: dict[str, Any] | None = None
    dirty: bool = False
    error: str | None = None

    def channels(self) -> list[str]:
        """Channel map entries, or an empty list when the section is unusable."""
        channels = (self.data or {}).get("channels")
        if isinstance(channels, list):
            return channels
        return []
