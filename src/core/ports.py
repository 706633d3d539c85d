"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for HTTP and chat adapters so that the
core can be reused with different backends.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from core.config import HttpConfig
from core.models import MessageContext


@dataclass(frozen=True)
class PageResponse:
    """What the verifier needs to know about one HTTP response."""

    status_code: int
    reason: str
    body: str


class FetchFailed(Exception):
    """Raised by fetchers when no HTTP response was received at all."""


class PageFetcher(Protocol):
    """Blocking single-GET page fetch."""

    def fetch(self, url: str, http_config: HttpConfig) -> PageResponse:
        ...


class ReplierPort(Protocol):
    """Chat reply operation required by the core pipeline."""

    async def reply(self, context: MessageContext, text: str) -> None:
        ...
