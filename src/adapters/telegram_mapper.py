"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the core pipeline.
"""

from __future__ import annotations

from typing import Any, Optional

from telethon.tl.custom import Message

from core.models import MessageContext

FALLBACK_NICK = "someone"


def channel_key_from_message(message: Message) -> str:
    """Normalize a channel key using a single rule enforced across the app."""

    chat = getattr(message, "chat", None)
    username = getattr(chat, "username", None)

    if isinstance(username, str) and username:
        return f"@{username.lower()}"

    # Fallback: always stable and universal
    return f"chat_id:{message.chat_id}"


def nick_for_sender(sender: Optional[Any]) -> str:
    """Return how the sender should be addressed in a reply."""

    username = getattr(sender, "username", None)
    if isinstance(username, str) and username:
        return f"@{username}"
    first_name = getattr(sender, "first_name", None)
    if isinstance(first_name, str) and first_name:
        return first_name
    # Channels post as themselves and only carry a title.
    title = getattr(sender, "title", None)
    if isinstance(title, str) and title:
        return title
    return FALLBACK_NICK


def is_addressed(message: Message) -> bool:
    """True when the message is aimed at the bot rather than the room."""

    # Telethon counts replies to our own messages as mentions too.
    if getattr(message, "mentioned", False):
        return True
    text = message.raw_text or ""
    return text.lstrip().startswith("/")


async def build_context(message: Message) -> MessageContext:
    """Build a core MessageContext from a Telethon Message."""

    sender = await message.get_sender()
    return MessageContext(
        channel=channel_key_from_message(message),
        chat_id=message.chat_id,
        message_id=message.id,
        sender_nick=nick_for_sender(sender),
        text=message.raw_text or "",
        addressed=is_addressed(message),
        is_private=bool(getattr(message, "is_private", False)),
    )
