from __future__ import annotations

import base64

import httpx
import pytest

from adapters.http_fetcher import HttpxPageFetcher, target_url
from core.config import HttpConfig
from core.ports import FetchFailed


def _recording_transport(status_code: int = 200, text: str = "<html></html>", headers=None):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status_code, text=text, headers=headers or {})

    return httpx.MockTransport(handler), seen


def test_scheme_follows_https_flag() -> None:
    assert str(target_url("https://tracker/issues/show/1", HttpConfig(use_https=False))) == (
        "http://tracker/issues/show/1"
    )
    assert str(target_url("http://tracker:3000/wiki/Foo", HttpConfig(use_https=True))) == (
        "https://tracker/wiki/Foo"
    )


def test_fetch_returns_status_and_body() -> None:
    transport, seen = _recording_transport(text="<h2 class='summary'>x</h2>")
    response = HttpxPageFetcher(transport=transport).fetch("http://tracker/issues/show/1", HttpConfig())

    assert response.status_code == 200
    assert response.reason == "OK"
    assert "summary" in response.body
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert "authorization" not in seen[0].headers


def test_fetch_sends_basic_auth_when_enabled() -> None:
    transport, seen = _recording_transport()
    http = HttpConfig(use_basic_auth=True, basic_auth_username="bot", basic_auth_password="s3cret")
    HttpxPageFetcher(transport=transport).fetch("http://tracker/issues/show/1", http)

    expected = base64.b64encode(b"bot:s3cret").decode("ascii")
    assert seen[0].headers["authorization"] == f"Basic {expected}"


def test_redirects_are_not_followed() -> None:
    transport, seen = _recording_transport(302, headers={"Location": "http://tracker/login"})
    response = HttpxPageFetcher(transport=transport).fetch("http://tracker/issues/show/1", HttpConfig())

    assert response.status_code == 302
    assert len(seen) == 1


@pytest.mark.parametrize(
    "error,expected",
    [
        (httpx.ConnectTimeout, "timed out after 2.5s"),
        (httpx.ConnectError, "connection refused"),
    ],
)
def test_transport_errors_become_fetch_failed(error, expected: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise error("connection refused", request=request)

    fetcher = HttpxPageFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(FetchFailed) as excinfo:
        fetcher.fetch("http://tracker/issues/show/1", HttpConfig(timeout_seconds=2.5))
    assert str(excinfo.value) == expected


@pytest.mark.parametrize(
    "url",
    [
        "http://[::1/issues/show/45",
        "tracker.local/issues/show/45",
    ],
)
def test_malformed_urls_become_fetch_failed(url: str) -> None:
    transport, seen = _recording_transport()
    with pytest.raises(FetchFailed) as excinfo:
        HttpxPageFetcher(transport=transport).fetch(url, HttpConfig())
    assert str(excinfo.value).startswith("invalid URL (")
    assert seen == []
