"""Page verification and title extraction (core domain)."""

from __future__ import annotations

import logging
import re
from typing import Mapping, Optional

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from core.config import HttpConfig
from core.models import (
    FetchError,
    ParseError,
    RefKind,
    RemoteStatus,
    VerificationResult,
    Verified,
)
from core.ports import FetchFailed, PageFetcher

LOGGER = logging.getLogger(__name__)


def _collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def extract_title(body: str, selector: str) -> Optional[str]:
    """Return the normalized text of the first element matching ``selector``.

    Raises ParserRejectedMarkup when the body cannot be parsed.
    """

    soup = BeautifulSoup(body, "html.parser")
    element = soup.select_one(selector)
    if element is None:
        return None
    return _collapse_whitespace(element.get_text())


def verify(
    url: str,
    kind: RefKind,
    http_config: HttpConfig,
    fetcher: PageFetcher,
    selectors: Mapping[RefKind, Optional[str]],
) -> VerificationResult:
    """Fetch ``url`` once and pull out a title according to ``kind``.

    Any non-200 answer is a failure. A page where the selector finds nothing
    still verifies, just without a title.
    """

    try:
        response = fetcher.fetch(url, http_config)
    except FetchFailed as exc:
        LOGGER.error("Error while fetching URL %s: %s", url, exc)
        return FetchError(url=url, cause=str(exc) or "connection failed")

    LOGGER.debug("Got %s %s for %s", response.status_code, response.reason, url)
    if response.status_code != 200:
        return RemoteStatus(url=url, status_code=response.status_code, reason=response.reason)

    selector = selectors.get(kind)
    if selector is None:
        # Existence check only.
        return Verified()

    try:
        title = extract_title(response.body, selector)
    except ParserRejectedMarkup:
        LOGGER.warning("Could not parse response body for %s", url)
        return ParseError(url=url)

    if title is None:
        LOGGER.warning("Didn't find '%s' in response for %s", selector, url)
        return Verified()

    LOGGER.debug("Found '%s' with '%s'", title, selector)
    return Verified(title=title or None)
