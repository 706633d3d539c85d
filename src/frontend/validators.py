"""Validation helpers for config editing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from core.channel_map import parse_channel_entry


@dataclass
class ChannelEntryInfo:
    normalized: str | None
    channel: str | None
    base_url: str | None
    error: str | None = None


@dataclass
class ChannelMapReport:
    entries: int
    problems: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.problems


def parse_channel_key(raw_value: str) -> tuple[str | None, str | None]:
    """Return (normalized_key, error) for an @username or chat_id:<n> key."""

    raw_value = raw_value.strip()
    if raw_value.startswith("@"):
        username = raw_value[1:]
        if not username or not username.replace("_", "a").isalnum():
            return None, "username is invalid"
        return f"@{username.lower()}", None

    if raw_value.startswith("chat_id:"):
        chat_value = raw_value[len("chat_id:") :]
        if not chat_value or not _is_int(chat_value):
            return None, "chat_id must be numeric"
        return f"chat_id:{int(chat_value)}", None

    return None, "channel must start with @ or chat_id:"


def parse_channel_entry_input(channel: str, base_url: str) -> ChannelEntryInfo:
    """Validate a channel + base URL pair coming from the form."""

    key, error = parse_channel_key(channel)
    if error or key is None:
        return ChannelEntryInfo(None, None, None, error or "channel is required")

    base_url = base_url.strip()
    if not base_url.startswith(("http://", "https://")):
        return ChannelEntryInfo(None, key, None, "base URL must start with http:// or https://")
    if base_url.endswith("/"):
        return ChannelEntryInfo(None, key, None, "base URL must not end with a slash")
    if any(ch.isspace() for ch in base_url):
        return ChannelEntryInfo(None, key, None, "base URL must not contain spaces")
    if not _has_host(base_url):
        return ChannelEntryInfo(None, key, None, "base URL is not a valid URL")
    return ChannelEntryInfo(f"{key}:{base_url}", key, base_url)


def split_entry(entry: str) -> ChannelEntryInfo:
    """Parse an existing config entry for display in the table."""

    parsed = parse_channel_entry(entry)
    if parsed is None:
        return ChannelEntryInfo(None, None, None, "entry must look like <channel>:<url>")
    return parse_channel_entry_input(*parsed)


def check_channel_map(channels: list[Any]) -> ChannelMapReport:
    """Check the whole map the way the bot reads it.

    The bot uses the first entry for a chat, so a repeated channel is
    reported as shadowed by the earlier one.
    """

    report = ChannelMapReport(entries=len(channels))
    first_seen: dict[str, int] = {}
    for position, entry in enumerate(channels, start=1):
        if not isinstance(entry, str):
            report.problems.append(f"entry {position}: not a string")
            continue
        info = split_entry(entry)
        if info.error or info.channel is None:
            report.problems.append(f"entry {position}: {info.error or 'invalid entry'}")
            continue
        if info.channel in first_seen:
            report.problems.append(
                f"entry {position}: {info.channel} is shadowed by entry {first_seen[info.channel]}"
            )
            continue
        first_seen[info.channel] = position
    return report


def _has_host(url: str) -> bool:
    try:
        return bool(httpx.URL(url).host)
    except httpx.InvalidURL:
        return False


def _is_int(value: str) -> bool:
    try:
        int(value)
    except ValueError:
        return False
    return True
