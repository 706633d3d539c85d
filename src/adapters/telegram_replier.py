"""Telegram reply adapter.

Posts reply lines back into the chat the reference was seen in.
"""

from __future__ import annotations

from core.models import MessageContext


class TelegramReplier:
    """Replier adapter that answers in the originating chat."""

    def __init__(self, client) -> None:
        self._client = client

    async def reply(self, context: MessageContext, text: str) -> None:
        """Send ``text`` as a reply to the triggering message."""

        # Plain text on purpose: titles come from arbitrary tracker pages.
        await self._client.send_message(
            context.chat_id,
            text,
            reply_to=context.message_id,
            parse_mode=None,
            link_preview=False,
        )
