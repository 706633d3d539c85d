"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely. A fresh
snapshot is built for every resolution so edits to config.json are picked up
without a restart.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from core.models import RefKind

LOGGER = logging.getLogger(__name__)

DEFAULT_REVISION_PROJECT = "puppet"
DEFAULT_TIMEOUT_SECONDS = 10.0

# Wiki pages are only checked for existence, so they never carry a selector.
DEFAULT_SELECTORS: Mapping[RefKind, Optional[str]] = MappingProxyType(
    {
        RefKind.TICKET: "h2.summary",
        RefKind.REVISION: "#searchable p",
        RefKind.WIKI: None,
    }
)


def build_selectors(overrides: Optional[Mapping[str, str]] = None) -> Mapping[RefKind, Optional[str]]:
    """Merge user selector overrides onto the defaults, one rule per kind."""

    selectors = dict(DEFAULT_SELECTORS)
    for key, selector in (overrides or {}).items():
        try:
            kind = RefKind(key)
        except ValueError:
            LOGGER.warning("Ignoring selector for unknown reference kind %r", key)
            continue
        if kind is RefKind.WIKI:
            LOGGER.warning("Wiki pages are existence-checked only; ignoring selector %r", selector)
            continue
        if not selector:
            continue
        selectors[kind] = selector
    return MappingProxyType(selectors)


@dataclass(frozen=True)
class HttpConfig:
    """How the verifier talks to the tracker."""

    use_https: bool = False
    use_basic_auth: bool = False
    basic_auth_username: str = ""
    basic_auth_password: str = field(default="", repr=False)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TrackerConfig:
    """Read-only configuration snapshot consumed by one resolution."""

    channel_map: Tuple[str, ...] = ()
    http: HttpConfig = field(default_factory=HttpConfig)
    revision_project: str = DEFAULT_REVISION_PROJECT
    selectors: Mapping[RefKind, Optional[str]] = field(default_factory=lambda: DEFAULT_SELECTORS)
