"""Resolve-and-verify coordinator.

This is the single entry point shared by passive scanning and explicit
queries. Every failure is turned into one human-readable message here; the
callers decide whether to show it.
"""

from __future__ import annotations

import logging

from core.channel_map import resolve_base_url
from core.config import TrackerConfig
from core.models import (
    ClassificationError,
    FetchError,
    ParseError,
    RemoteStatus,
    Resolved,
    ResolvedOutcome,
    ResolveFailed,
    VerificationFailure,
    Verified,
)
from core.ports import PageFetcher
from core.references import build_url
from core.verifier import verify

LOGGER = logging.getLogger(__name__)

CHANNEL_NOT_CONFIGURED = "I don't know about Redmine URLs for this channel"


def describe_failure(raw_token: str, failure: VerificationFailure) -> str:
    """Turn a verification failure into a chat-safe message."""

    if isinstance(failure, RemoteStatus):
        return (
            f"I'm afraid I can't find a page for '{raw_token}': "
            f"{failure.url} returned {failure.status_code} {failure.reason}.  Sorry."
        )
    if isinstance(failure, FetchError):
        return (
            f"{failure.url} {failure.cause} - "
            "An error occurred while I was trying to look up the URL.  Sorry."
        )
    if isinstance(failure, ParseError):
        return f"{failure.url} - I couldn't make sense of the page I got back.  Sorry."
    raise TypeError(f"Unsupported verification failure: {failure!r}")


def resolve_and_verify(
    raw_token: str,
    channel: str,
    config: TrackerConfig,
    fetcher: PageFetcher,
) -> ResolvedOutcome:
    """Expand ``raw_token`` into a verified URL for the tracker of ``channel``."""

    LOGGER.debug("Expanding reference %s in %s", raw_token, channel)
    base_url = resolve_base_url(channel, config.channel_map)
    if base_url is None:
        return ResolveFailed(CHANNEL_NOT_CONFIGURED)
    LOGGER.debug("Base URL for %s is %s", channel, base_url)

    built = build_url(raw_token, base_url, config.revision_project)
    if isinstance(built, ClassificationError):
        LOGGER.info("Unrecognized reference syntax: %r", raw_token)
        return ResolveFailed(f"I'm afraid I don't understand '{raw_token}'.  Sorry.")

    result = verify(built.url, built.kind, config.http, fetcher, config.selectors)
    if isinstance(result, Verified):
        return Resolved(url=built.url, title=result.title)

    LOGGER.info("Reference %s in %s failed verification: %r", raw_token, channel, result)
    return ResolveFailed(describe_failure(raw_token, result))
