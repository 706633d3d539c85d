from __future__ import annotations

from typing import Optional, Union

import pytest

from core.config import HttpConfig, TrackerConfig
from core.models import MessageContext
from core.ports import PageResponse


class FakeFetcher:
    """Serve canned responses keyed by URL and record every request."""

    def __init__(self, pages: Optional[dict[str, Union[PageResponse, Exception]]] = None) -> None:
        self.pages = dict(pages or {})
        self.calls: list[tuple[str, HttpConfig]] = []

    def fetch(self, url: str, http_config: HttpConfig) -> PageResponse:
        self.calls.append((url, http_config))
        page = self.pages.get(url)
        if page is None:
            return PageResponse(status_code=404, reason="Not Found", body="")
        if isinstance(page, Exception):
            raise page
        return page

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]


class FakeReplier:
    def __init__(self) -> None:
        self.sent: list[tuple[MessageContext, str]] = []

    async def reply(self, context: MessageContext, text: str) -> None:
        self.sent.append((context, text))

    @property
    def lines(self) -> list[str]:
        return [text for _, text in self.sent]


def ok(body: str = "<html><body></body></html>") -> PageResponse:
    return PageResponse(status_code=200, reason="OK", body=body)


def make_context(
    text: str,
    *,
    channel: str = "@dev",
    sender_nick: str = "@alice",
    addressed: bool = False,
    is_private: bool = False,
) -> MessageContext:
    return MessageContext(
        channel=channel,
        chat_id=-100123,
        message_id=42,
        sender_nick=sender_nick,
        text=text,
        addressed=addressed,
        is_private=is_private,
    )


@pytest.fixture
def tracker_config() -> TrackerConfig:
    return TrackerConfig(channel_map=("@dev:http://tracker",))


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def fake_replier() -> FakeReplier:
    return FakeReplier()

