"""Configuration loading for redscope.

All user-editable settings (channel map, tracker access, logging) live in a
single JSON file for quick edits without touching Python. The file is read
again for every resolution so changes apply to the next message without a
restart.
"""

import json
import os
from typing import Optional

from dotenv import load_dotenv

from core.config import DEFAULT_REVISION_PROJECT, DEFAULT_TIMEOUT_SECONDS, HttpConfig, TrackerConfig, build_selectors

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Channel map, tracker and logging settings are loaded from config.json so
# users can point chats at trackers without editing code.
CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")

# Password fallback so the secret can stay in .env instead of config.json.
PASSWORD_ENV = "REDMINE_BASIC_AUTH_PASSWORD"


def load_json_config(path: Optional[str] = None) -> dict:
    """Load config.json with a flat, user-friendly schema."""

    path = path or CONFIG_PATH
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as handle:
        loaded = json.load(handle)
    if not isinstance(loaded, dict):
        raise ValueError("config root must be an object")
    return loaded


def save_json_config(data: dict, path: Optional[str] = None) -> None:
    """Write config.json back in the layout users edit by hand."""

    path = path or CONFIG_PATH
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(data, handle, indent=2, ensure_ascii=True)
        handle.write("\n")


def _normalize_channels(raw_channels) -> tuple[str, ...]:
    """Keep non-empty string entries in their configured order."""

    if not isinstance(raw_channels, list):
        raise ValueError("channels must be a list of '<channel>:<url>' strings")
    return tuple(entry.strip() for entry in raw_channels if isinstance(entry, str) and entry.strip())


def build_tracker_config(raw: dict) -> TrackerConfig:
    """Turn the raw JSON document into an immutable snapshot."""

    tracker = raw.get("tracker", {}) or {}
    password = tracker.get("basic_auth_password") or ""
    if not password:
        load_dotenv()
        password = os.getenv(PASSWORD_ENV, "")

    try:
        timeout = float(tracker.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS))
    except (TypeError, ValueError) as exc:
        raise ValueError("tracker.timeout_seconds must be a number") from exc

    http = HttpConfig(
        use_https=bool(tracker.get("https", False)),
        use_basic_auth=bool(tracker.get("basic_auth", False)),
        basic_auth_username=str(tracker.get("basic_auth_username") or ""),
        basic_auth_password=str(password),
        timeout_seconds=timeout,
    )
    return TrackerConfig(
        channel_map=_normalize_channels(raw.get("channels", [])),
        http=http,
        revision_project=str(tracker.get("revision_project") or DEFAULT_REVISION_PROJECT),
        selectors=build_selectors(tracker.get("selectors")),
    )


def load_tracker_config(path: Optional[str] = None) -> TrackerConfig:
    """Read config.json from disk and return a fresh snapshot."""

    return build_tracker_config(load_json_config(path))


def load_logging_config(path: Optional[str] = None) -> dict:
    """Logging configuration (optional)."""

    return load_json_config(path).get("logging", {}) or {}
