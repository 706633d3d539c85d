"""httpx page fetch adapter.

Implements the core PageFetcher port with one blocking GET per call.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from core.config import HttpConfig
from core.ports import FetchFailed, PageResponse

LOGGER = logging.getLogger(__name__)

USER_AGENT = "redscope/1.0 (+Redmine reference bot)"


def target_url(url: str, http_config: HttpConfig) -> httpx.URL:
    """Apply the configured scheme; the port follows it (443 or 80)."""

    scheme = "https" if http_config.use_https else "http"
    request_url = httpx.URL(url).copy_with(scheme=scheme, port=None)
    if not request_url.host:
        raise httpx.InvalidURL(f"no host in {url!r}")
    return request_url


class HttpxPageFetcher:
    """Fetcher adapter backed by a short-lived httpx.Client per request."""

    def __init__(self, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._transport = transport

    def fetch(self, url: str, http_config: HttpConfig) -> PageResponse:
        """GET ``url`` without following redirects."""

        auth = None
        if http_config.use_basic_auth:
            LOGGER.debug("Using HTTP basic auth as %s", http_config.basic_auth_username)
            auth = httpx.BasicAuth(http_config.basic_auth_username, http_config.basic_auth_password)

        try:
            request_url = target_url(url, http_config)
        except (httpx.InvalidURL, ValueError) as exc:
            # A malformed base URL in config.json surfaces here.
            raise FetchFailed(f"invalid URL ({exc})") from exc

        LOGGER.debug("Fetching %s (https=%s)", request_url, http_config.use_https)
        try:
            with httpx.Client(
                timeout=http_config.timeout_seconds,
                follow_redirects=False,
                headers={"User-Agent": USER_AGENT},
                transport=self._transport,
            ) as client:
                response = client.get(request_url, auth=auth)
        except httpx.TimeoutException as exc:
            raise FetchFailed(f"timed out after {http_config.timeout_seconds}s") from exc
        except httpx.HTTPError as exc:
            raise FetchFailed(str(exc) or "request failed") from exc

        return PageResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            body=response.text,
        )
