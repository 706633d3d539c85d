"""Reply formatting and help text.

Keeping formatting here prevents drift between the passive scanner, the
query command and the shell lookup.
"""

from __future__ import annotations

import re
from typing import Optional

# "bob: see #12" or "bob, see #12" addresses bob. The separator must be
# followed by whitespace so "wiki:Foo" is not read as an addressee.
_ADDRESSEE_RE = re.compile(r"^([^\s:,]+)[:,](?:\s|$)")

PRIVATE_QUERY_REFUSAL = "I can't do redmineinfo in private yet"

HELP_TOPICS = {
    "": (
        "redscope: convert common Redmine references into URLs. I will watch the "
        "chat for likely references (see /redminehelp general), and also respond "
        "to specific requests (see /redminehelp queries)."
    ),
    "general": (
        "I can convert common references into URLs when I see them mentioned in "
        "conversation. Currently supports [NNN], rNNN => revision URL; "
        "changeset:NNN|SHA => revision URL; #NN => bug URL; wiki:CamelCase => wiki URL. "
        "URLs are verified before they're sent to the chat, to limit noise. "
        "I will not respond to general references if you are talking to me directly! "
        "See /redminehelp queries for help with direct querying."
    ),
    "queries": (
        "You can ask me to look up some info about a Redmine bug, changeset, or wiki "
        "page. I'll give you the URL and the title of the bug or page, or the commit "
        "message of a changeset. Example: '/redmineinfo #93' will produce a URL and "
        "the ticket's title."
    ),
}


def help_text(topic: str = "") -> str:
    topic = topic.strip().lower()
    if topic in HELP_TOPICS:
        return HELP_TOPICS[topic]
    topics = ", ".join(name for name in HELP_TOPICS if name)
    return f"No help for '{topic}'. Topics: {topics}"


def pick_addressee(text: str, sender_nick: str) -> str:
    """Reply to whoever the message was addressed to, else to the sender."""

    match = _ADDRESSEE_RE.match(text)
    if match:
        return match.group(1)
    return sender_nick


def format_resolved(addressee: str, token: str, url: str, title: Optional[str]) -> str:
    line = f"{addressee}: {token} is {url}"
    if title:
        line += f' "{title}"'
    return line


def format_failure(nick: str, message: str) -> str:
    return f"{nick}: {message}"
