"""Shared constants for the Textual UI."""

from __future__ import annotations

from pathlib import Path

import settings

REDMINE_RED = "#B32024"
# Same file the bot reads on every message.
CONFIG_PATH = Path(settings.CONFIG_PATH)
