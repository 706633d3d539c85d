"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class RefKind(str, Enum):
    """Kind of tracker item a reference points at."""

    REVISION = "revision"
    TICKET = "ticket"
    WIKI = "wiki"


@dataclass(frozen=True)
class Reference:
    """A classified reference token."""

    raw_token: str
    kind: RefKind
    identifier: str


@dataclass(frozen=True)
class BuiltUrl:
    url: str
    kind: RefKind


@dataclass(frozen=True)
class ClassificationError:
    """The token matched none of the known reference shapes."""

    token: str


@dataclass(frozen=True)
class MessageContext:
    """Minimal message context used by the core processing pipeline."""

    channel: str
    chat_id: int
    message_id: int
    sender_nick: str
    text: str
    addressed: bool
    is_private: bool


# Verification outcomes


@dataclass(frozen=True)
class Verified:
    title: Optional[str] = None


@dataclass(frozen=True)
class RemoteStatus:
    """The fetch worked but the tracker answered with something other than 200."""

    url: str
    status_code: int
    reason: str


@dataclass(frozen=True)
class FetchError:
    """Transport-level failure: connection, TLS or timeout."""

    url: str
    cause: str


@dataclass(frozen=True)
class ParseError:
    """The response body could not be read as markup."""

    url: str


VerificationFailure = Union[RemoteStatus, FetchError, ParseError]
VerificationResult = Union[Verified, VerificationFailure]


# Externally visible result of one reference


@dataclass(frozen=True)
class Resolved:
    url: str
    title: Optional[str] = None


@dataclass(frozen=True)
class ResolveFailed:
    message: str


ResolvedOutcome = Union[Resolved, ResolveFailed]
