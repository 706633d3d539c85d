"""Helpers for working with the channel -> tracker base URL map.

Entries are plain strings of the form ``<channel>:<base url>``, for example
``@puppet_dev:https://projects.example.com`` or
``chat_id:-100123:http://redmine.local``.
"""

from __future__ import annotations

from typing import Iterable, Optional, Tuple


def resolve_base_url(channel: str, channel_map: Iterable[str]) -> Optional[str]:
    """Return the base URL of the first entry for ``channel``, if any."""

    prefix = f"{channel}:"
    for entry in channel_map:
        if entry.startswith(prefix):
            return entry[len(prefix) :]
    return None


def parse_channel_entry(entry: str) -> Optional[Tuple[str, str]]:
    """Split an entry into (channel, base_url).

    Channel keys can contain colons themselves, so we split on the start of
    the URL scheme rather than on the first colon.
    """

    channel, sep, rest = entry.partition(":http")
    if not sep or not channel:
        return None
    return channel, f"http{rest}"
