"""Main Textual app for the redscope config panel.

The panel edits config.json in memory and writes it on save. The running bot
re-reads the file for every message, so saved changes apply without a
restart.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Static, TabbedContent, TabPane

import settings

from .constants import CONFIG_PATH, REDMINE_RED
from .modals import channel_problems_prompt, reload_prompt, unsaved_changes_prompt
from .state import ConfigState
from .tabs.channels import ChannelsTab
from .tabs.guide import GuideTab
from .tabs.settings import SettingsTab
from .validators import check_channel_map


class ConfigPanelApp(App):
    """Config panel over a single config.json document."""

    CSS_PATH = "app.tcss"

    BINDINGS = [
        ("ctrl+s", "save_config", "Save"),
        ("ctrl+r", "reload_config", "Reload"),
        ("q", "request_quit", "Quit"),
        ("ctrl+c", "request_quit", "Quit"),
    ]

    def __init__(self, config_path: Path = CONFIG_PATH, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.config_path = config_path
        self.config_state = ConfigState()

    def compose(self) -> ComposeResult:
        with Horizontal(id="header"):
            with Vertical(id="header-left"):
                yield Static(Text.assemble(("RED", REDMINE_RED), ("SCOPE > Config Panel", "bold")), id="title")
                yield Static(str(self.config_path), classes="subtle")
            with Vertical(id="header-right"):
                yield Static("", id="header-status")
                yield Static("", id="header-channels")
                yield Horizontal(
                    Button("Save", id="save-btn"),
                    Button("Reload", id="reload-btn"),
                    id="header-actions",
                )

        with TabbedContent(id="content", initial="channels"):
            with TabPane("Channels", id="channels"):
                yield ChannelsTab()
            with TabPane("Settings", id="settings"):
                yield SettingsTab()
            with TabPane("Guide", id="guide"):
                yield GuideTab()
        yield Footer()

    def on_mount(self) -> None:
        self._load_config()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save-btn":
            self.action_save_config()
        elif event.button.id == "reload-btn":
            self.action_reload_config()

    def action_save_config(self) -> None:
        self._save(then=None)

    def action_reload_config(self) -> None:
        if not self.config_state.dirty:
            self._load_config()
            return

        def chosen(choice: str | None) -> None:
            if choice == "save":
                self._save(then=self._load_config)
            elif choice == "reload":
                self._load_config()

        self.push_screen(reload_prompt(), chosen)

    def action_request_quit(self) -> None:
        if not self.config_state.dirty:
            self.exit()
            return

        def chosen(choice: str | None) -> None:
            if choice == "save":
                self._save(then=self.exit)
            elif choice == "discard":
                self.exit()

        self.push_screen(unsaved_changes_prompt(), chosen)

    def update_config_section(self, section: str, value: Any) -> None:
        """Update a config section in memory and mark dirty."""
        if self.config_state.data is None:
            self.config_state.data = {}
        self.config_state.data[section] = value
        self.config_state.dirty = True
        self.config_state.error = None
        self._refresh_header()

    def _load_config(self) -> None:
        state = self.config_state
        try:
            state.data = settings.load_json_config(str(self.config_path))
            state.error = None
        except FileNotFoundError:
            # Saving creates the file.
            state.data = {"channels": []}
            state.error = None
        except ValueError as exc:
            state.data = None
            state.error = f"{self.config_path.name}: {exc}"
        state.dirty = False
        self._refresh_header()
        for tab in self.query(ChannelsTab):
            tab.reload_from_config()
        for tab in self.query(SettingsTab):
            tab.reload_from_config()

    def _save(self, then: Optional[Callable[[], None]]) -> None:
        """Write the document once it loads as a tracker snapshot.

        Channel-map problems do not block saving, but need confirmation.
        """

        state = self.config_state
        if state.data is None:
            self._show_error("nothing to save")
            return
        try:
            settings.build_tracker_config(state.data)
        except ValueError as exc:
            self._show_error(str(exc))
            return

        def write() -> None:
            if self._write_config() and then is not None:
                then()

        report = check_channel_map(state.channels())
        if report.ok:
            write()
            return
        self.push_screen(
            channel_problems_prompt(report),
            lambda choice: write() if choice == "save" else None,
        )

    def _write_config(self) -> bool:
        state = self.config_state
        try:
            settings.save_json_config(state.data or {}, str(self.config_path))
        except OSError as exc:
            self._show_error(f"save failed: {exc.strerror or exc}")
            return False
        state.dirty = False
        state.error = None
        self._refresh_header()
        return True

    def _show_error(self, message: str) -> None:
        self.config_state.error = message
        self._refresh_header()

    def _refresh_header(self) -> None:
        state = self.config_state
        status = self.query_one("#header-status", Static)
        status.remove_class("status-loaded", "status-modified", "status-error")
        if state.error:
            status.update(f"config: {state.error}")
            status.add_class("status-error")
        elif state.dirty:
            status.update("config: modified *")
            status.add_class("status-modified")
        else:
            status.update("config: saved")
            status.add_class("status-loaded")

        report = check_channel_map(state.channels())
        channels = self.query_one("#header-channels", Static)
        if report.ok:
            channels.update(f"{report.entries} channel(s), all valid")
        else:
            channels.update(f"{report.entries} channel(s), {len(report.problems)} problem(s)")
        channels.set_class(not report.ok, "status-modified")

        self.query_one("#save-btn", Button).disabled = state.data is None or not state.dirty
