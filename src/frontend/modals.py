"""Modal dialogs for the Textual config panel."""

from __future__ import annotations

from typing import Sequence

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .validators import ChannelMapReport, parse_channel_entry_input

# (choice, label, button variant)
Choice = tuple[str, str, str]


class ChoiceScreen(ModalScreen[str]):
    """Ask a question and dismiss with the chosen key, or "cancel"."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, title: str, body: str, choices: Sequence[Choice]) -> None:
        super().__init__()
        self._title = title
        self._body = body
        self._choices = list(choices)

    def compose(self) -> ComposeResult:
        buttons = [Button(label, id=f"choice-{key}", variant=variant) for key, label, variant in self._choices]
        buttons.append(Button("Cancel", id="choice-cancel"))
        yield Container(
            Static(self._title, classes="modal-title"),
            Static(self._body, classes="modal-body"),
            Horizontal(*buttons, classes="modal-actions"),
            classes="modal-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss((event.button.id or "choice-cancel").removeprefix("choice-"))

    def action_cancel(self) -> None:
        self.dismiss("cancel")


def unsaved_changes_prompt() -> ChoiceScreen:
    return ChoiceScreen(
        "Unsaved changes",
        "Save config.json before exit?",
        [("save", "Save", "success"), ("discard", "Discard", "error")],
    )


def reload_prompt() -> ChoiceScreen:
    return ChoiceScreen(
        "Reload config?",
        "Edits made here will be lost.",
        [("save", "Save first", "default"), ("reload", "Reload", "warning")],
    )


def delete_channel_prompt(entry: str) -> ChoiceScreen:
    return ChoiceScreen("Delete channel mapping?", entry, [("delete", "Delete", "error")])


def channel_problems_prompt(report: ChannelMapReport) -> ChoiceScreen:
    """Shown on save when some entries would never resolve."""

    shown = report.problems[:6]
    if len(report.problems) > len(shown):
        shown.append(f"... and {len(report.problems) - len(shown)} more")
    return ChoiceScreen(
        "Channel map has problems",
        "\n".join(shown),
        [("save", "Save anyway", "warning")],
    )


class AddChannelScreen(ModalScreen[str | None]):
    """Modal form for mapping a chat to a tracker base URL."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Add channel", classes="modal-title"),
            Static("", id="add-error", classes="modal-error"),
            Static("channel", classes="form-label"),
            Input(placeholder="@group or chat_id:-100123", id="add-channel"),
            Static("base URL (no trailing slash)", classes="form-label"),
            Input(placeholder="https://projects.example.com", id="add-base-url"),
            Horizontal(
                Button("Add", id="add-confirm", variant="success"),
                Button("Cancel", id="add-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-confirm":
            self._submit()
        else:
            self.dismiss(None)

    def on_input_submitted(self) -> None:
        self._submit()

    def action_cancel(self) -> None:
        self.dismiss(None)

    def _submit(self) -> None:
        info = parse_channel_entry_input(
            self.query_one("#add-channel", Input).value,
            self.query_one("#add-base-url", Input).value,
        )
        if info.error or info.normalized is None:
            self.query_one("#add-error", Static).update(info.error or "invalid entry")
            return
        self.dismiss(info.normalized)
