from __future__ import annotations

import asyncio

from adapters.telegram_mapper import FALLBACK_NICK, build_context, nick_for_sender


class DummyChat:
    def __init__(self, username: "str | None" = None) -> None:
        self.username = username


class DummySender:
    def __init__(self, username: "str | None" = None, first_name: "str | None" = None) -> None:
        self.username = username
        self.first_name = first_name


class DummyMessage:
    def __init__(
        self,
        *,
        text: str,
        chat: "DummyChat | None" = None,
        sender: "DummySender | None" = None,
        mentioned: bool = False,
        is_private: bool = False,
    ) -> None:
        self.chat_id = -100123
        self.id = 7
        self.raw_text = text
        self.chat = chat
        self.mentioned = mentioned
        self.is_private = is_private
        self._sender = sender

    async def get_sender(self):
        return self._sender


def test_context_for_public_group() -> None:
    message = DummyMessage(
        text="see #12",
        chat=DummyChat(username="Puppet_Dev"),
        sender=DummySender(username="alice"),
    )
    context = asyncio.run(build_context(message))

    assert context.channel == "@puppet_dev"
    assert context.sender_nick == "@alice"
    assert context.chat_id == -100123
    assert context.message_id == 7
    assert context.addressed is False
    assert context.is_private is False


def test_context_for_private_group_uses_chat_id() -> None:
    message = DummyMessage(text="#12", chat=DummyChat(username=None), sender=DummySender(first_name="Bob"))
    context = asyncio.run(build_context(message))

    assert context.channel == "chat_id:-100123"
    assert context.sender_nick == "Bob"


def test_mentions_and_commands_are_addressed() -> None:
    mentioned = asyncio.run(build_context(DummyMessage(text="hey #12", mentioned=True)))
    command = asyncio.run(build_context(DummyMessage(text=" /redmineinfo #12")))

    assert mentioned.addressed is True
    assert command.addressed is True


def test_nick_fallbacks() -> None:
    assert nick_for_sender(None) == FALLBACK_NICK
    assert nick_for_sender(DummySender()) == FALLBACK_NICK
