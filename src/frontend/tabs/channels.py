"""Channels tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Static

from ..modals import AddChannelScreen, delete_channel_prompt
from ..validators import parse_channel_entry_input, split_entry


class ChannelsTab(Container):
    """Channels tab for editing config.channels.

    The map is ordered: the first entry for a chat wins, so rows can be moved
    up and down.
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False
        self._current_index: Optional[int] = None
        self._table_ready = False

    def compose(self):
        with Vertical(id="channels-panel"):
            with Horizontal(id="channels-body"):
                with Container(id="channels-left"):
                    yield DataTable(id="channels-table", cursor_type="row")
                with Container(id="channels-right"):
                    yield Static("Channel details", id="channels-title")
                    yield Static("channel", classes="form-label")
                    yield Input(placeholder="@group or chat_id:-100123", id="channel-input")
                    yield Static("base URL", classes="form-label")
                    yield Input(placeholder="https://projects.example.com", id="base-url-input")
                    yield Static("", id="channel-error", classes="settings-error")
                    yield Static("Press Enter in a field to apply.", classes="subtle")
            with Horizontal(id="channels-actions"):
                yield Button("Add", id="add-channel", variant="success")
                yield Button("Up", id="move-up")
                yield Button("Down", id="move-down")
                yield Button("Delete", id="delete-channel", variant="error")

    def on_mount(self) -> None:
        table = self.query_one("#channels-table", DataTable)
        table.add_column("#", key="position", width=4)
        table.add_column("channel", key="channel", width=28)
        table.add_column("base URL", key="base_url", width=40)
        table.add_column("status", key="status", width=24)
        table.zebra_stripes = True
        self._table_ready = True
        self.reload_from_config()
        self._set_form_state(None)

    def reload_from_config(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#channels-table", DataTable)
        table.clear()
        for index, entry in enumerate(self._get_channels()):
            info = split_entry(str(entry))
            table.add_row(
                str(index + 1),
                info.channel or str(entry),
                info.base_url or "",
                info.error or "ok",
                key=str(index),
            )
        self._update_action_state()

    def _get_channels(self) -> list[str]:
        return self.app.config_state.channels()

    def _set_channels(self, channels: list[str]) -> None:
        self.app.update_config_section("channels", channels)

    def _update_action_state(self) -> None:
        selected = self._current_index is not None
        count = len(self._get_channels())
        self.query_one("#delete-channel", Button).disabled = not selected
        self.query_one("#move-up", Button).disabled = not selected or self._current_index == 0
        self.query_one("#move-down", Button).disabled = not selected or self._current_index == count - 1

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self._current_index = int(self._coerce_row_key(event.row_key))
        self._set_form_state(self._current_index)
        self._update_action_state()

    @on(Input.Submitted, "#channel-input")
    @on(Input.Submitted, "#base-url-input")
    def _on_entry_submitted(self) -> None:
        if self._loading_form or self._current_index is None:
            return
        channels = self._get_channels()
        if self._current_index >= len(channels):
            return
        info = parse_channel_entry_input(
            self.query_one("#channel-input", Input).value,
            self.query_one("#base-url-input", Input).value,
        )
        if info.error or info.normalized is None:
            self._set_error(info.error or "invalid entry")
            return
        self._set_error("")
        channels[self._current_index] = info.normalized
        self._set_channels(channels)
        self.reload_from_config()

    @on(Button.Pressed, "#add-channel")
    def _on_add_channel(self) -> None:
        self.app.push_screen(AddChannelScreen(), self._handle_add_channel)

    @on(Button.Pressed, "#delete-channel")
    def _on_delete_channel(self) -> None:
        channels = self._get_channels()
        if self._current_index is None or self._current_index >= len(channels):
            return
        self.app.push_screen(
            delete_channel_prompt(str(channels[self._current_index])),
            self._handle_delete_channel,
        )

    @on(Button.Pressed, "#move-up")
    def _on_move_up(self) -> None:
        self._move(-1)

    @on(Button.Pressed, "#move-down")
    def _on_move_down(self) -> None:
        self._move(1)

    def _move(self, offset: int) -> None:
        channels = self._get_channels()
        index = self._current_index
        if index is None:
            return
        target = index + offset
        if target < 0 or target >= len(channels):
            return
        channels[index], channels[target] = channels[target], channels[index]
        self._set_channels(channels)
        self._current_index = target
        self.reload_from_config()
        self.query_one("#channels-table", DataTable).move_cursor(row=target)

    def _handle_add_channel(self, entry: str | None) -> None:
        if not entry:
            return
        channels = self._get_channels()
        channels.append(entry)
        self._set_channels(channels)
        self.reload_from_config()

    def _handle_delete_channel(self, choice: str | None) -> None:
        if choice != "delete" or self._current_index is None:
            return
        channels = self._get_channels()
        if self._current_index >= len(channels):
            return
        channels.pop(self._current_index)
        self._set_channels(channels)
        self._current_index = None
        self.reload_from_config()
        self._set_form_state(None)

    def _set_form_state(self, index: Optional[int]) -> None:
        self._loading_form = True
        channel_input = self.query_one("#channel-input", Input)
        base_input = self.query_one("#base-url-input", Input)
        self._set_error("")
        channels = self._get_channels()
        if index is None or index >= len(channels):
            channel_input.value = ""
            base_input.value = ""
            channel_input.disabled = True
            base_input.disabled = True
        else:
            info = split_entry(str(channels[index]))
            channel_input.value = info.channel or ""
            base_input.value = info.base_url or ""
            channel_input.disabled = False
            base_input.disabled = False
            if info.error:
                self._set_error(info.error)
        self._loading_form = False

    def _set_error(self, message: str) -> None:
        self.query_one("#channel-error", Static).update(message)

    @staticmethod
    def _coerce_row_key(value: Any) -> str:
        if hasattr(value, "value"):
            return str(value.value)
        return str(value)
