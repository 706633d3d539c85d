"""Reference extraction and URL building (core domain)."""

from __future__ import annotations

import re
from typing import Iterator, Union

from core.models import BuiltUrl, ClassificationError, Reference, RefKind

# A reference must not touch a word character on either side, so "abc#12" or
# "r10abc" are never picked up.
_REFERENCE_RE = re.compile(
    r"(?<!\w)(\[\d+\]|r\d+|\#\d+|wiki:\w+(?:\#\w+)?|changeset:\w+)(?!\w)"
)

# Order matters only for readability; the shapes are mutually exclusive.
_CLASSIFIERS = (
    (re.compile(r"\[(\d+)\]"), RefKind.REVISION),
    (re.compile(r"r(\d+)"), RefKind.REVISION),
    (re.compile(r"changeset:(\w+)"), RefKind.REVISION),
    (re.compile(r"\#(\d+)"), RefKind.TICKET),
    (re.compile(r"wiki:(\w+(?:\#\w+)?)"), RefKind.WIKI),
)


def extract_references(text: str) -> Iterator[str]:
    """Yield raw reference tokens in the order they appear.

    Duplicates are kept; callers decide what to do with repeated tokens.
    """

    for match in _REFERENCE_RE.finditer(text):
        yield match.group(1)


def classify(token: str) -> Union[Reference, ClassificationError]:
    """Classify a raw token by which literal form it takes."""

    candidate = token.strip()
    for pattern, kind in _CLASSIFIERS:
        match = pattern.fullmatch(candidate)
        if match:
            return Reference(raw_token=token, kind=kind, identifier=match.group(1))
    return ClassificationError(token)


def revision_url(base_url: str, project: str, identifier: str) -> str:
    return f"{base_url}/repositories/revision/{project}/{identifier}"


def ticket_url(base_url: str, identifier: str) -> str:
    return f"{base_url}/issues/show/{identifier}"


def wiki_url(base_url: str, page: str) -> str:
    # Anchors ("Page#Section") are passed through untouched.
    return f"{base_url}/wiki/{page}"


def build_url(token: str, base_url: str, revision_project: str) -> Union[BuiltUrl, ClassificationError]:
    """Return the tracker URL for a token, or a ClassificationError."""

    reference = classify(token)
    if isinstance(reference, ClassificationError):
        return reference

    if reference.kind is RefKind.REVISION:
        url = revision_url(base_url, revision_project, reference.identifier)
    elif reference.kind is RefKind.TICKET:
        url = ticket_url(base_url, reference.identifier)
    else:
        url = wiki_url(base_url, reference.identifier)
    return BuiltUrl(url=url, kind=reference.kind)
