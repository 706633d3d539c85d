"""Guide tab showing the bot's help topics."""

from __future__ import annotations

from textual.containers import ScrollableContainer
from textual.widgets import Static

from core.replies import HELP_TOPICS


class GuideTab(ScrollableContainer):
    def compose(self):
        for topic, text in HELP_TOPICS.items():
            heading = f"/redminehelp {topic}".strip()
            yield Static(heading, classes="guide-heading")
            yield Static(text, classes="guide-body")
