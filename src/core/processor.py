"""Core message processing pipeline.

This module is integration-agnostic. It only relies on ports for HTTP and
chat replies, enabling other chat frontends without changes here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional

from core.config import TrackerConfig
from core.models import MessageContext, ResolvedOutcome, ResolveFailed
from core.ports import PageFetcher, ReplierPort
from core.references import extract_references
from core.replies import (
    PRIVATE_QUERY_REFUSAL,
    format_failure,
    format_resolved,
    help_text,
    pick_addressee,
)
from core.resolver import resolve_and_verify

LOGGER = logging.getLogger(__name__)


class ReferenceProcessor:
    """Runs the passive scan and the explicit query against one chat."""

    def __init__(
        self,
        fetcher: PageFetcher,
        replier: ReplierPort,
        config_provider: Callable[[], TrackerConfig],
    ) -> None:
        self._fetcher = fetcher
        self._replier = replier
        self._config_provider = config_provider

    async def _resolve(self, token: str, channel: str, config: TrackerConfig) -> ResolvedOutcome:
        # Fetches are blocking; keep them off the event loop but still run
        # one at a time.
        return await asyncio.to_thread(resolve_and_verify, token, channel, config, self._fetcher)

    async def handle(self, context: MessageContext) -> None:
        """Watch an ordinary chat message for references."""

        # We're a conversation watcher; messages aimed at us are commands.
        if context.addressed or context.is_private:
            return
        if not context.text.strip():
            return

        tokens = list(extract_references(context.text))
        if not tokens:
            return

        config = self._config_provider()
        addressee = pick_addressee(context.text, context.sender_nick)
        lines: List[str] = []
        for token in tokens:
            LOGGER.debug("Handling reference %s in %s", token, context.channel)
            outcome = await self._resolve(token, context.channel, config)
            # One bad reference silences the whole message.
            if isinstance(outcome, ResolveFailed):
                LOGGER.info(
                    "Dropping %s reference(s) from %s after failure on %s",
                    len(tokens),
                    context.channel,
                    token,
                )
                return
            lines.append(format_resolved(addressee, token, outcome.url, outcome.title))

        for line in lines:
            await self._replier.reply(context, line)
        LOGGER.info("Sent %s reference(s) in %s", len(lines), context.channel)

    async def handle_query(self, context: MessageContext, ref: Optional[str]) -> None:
        """Answer an explicit lookup; the requester always gets a reply."""

        if context.is_private:
            await self._replier.reply(context, PRIVATE_QUERY_REFUSAL)
            return
        if not ref or not ref.strip():
            await self._replier.reply(context, help_text("queries"))
            return

        ref = ref.strip()
        config = self._config_provider()
        outcome = await self._resolve(ref, context.channel, config)
        if isinstance(outcome, ResolveFailed):
            await self._replier.reply(context, format_failure(context.sender_nick, outcome.message))
            return
        await self._replier.reply(
            context,
            format_resolved(context.sender_nick, ref, outcome.url, outcome.title),
        )

    async def handle_help(self, context: MessageContext, topic: Optional[str]) -> None:
        await self._replier.reply(context, help_text(topic or ""))
