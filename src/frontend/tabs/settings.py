"""Settings tab implementation."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, ScrollableContainer, Vertical
from textual.widgets import ContentSwitcher, DataTable, Input, Select, Static, Switch, TextArea

from core.config import DEFAULT_REVISION_PROJECT, DEFAULT_SELECTORS
from core.models import RefKind


class SettingsTab(Container):
    """Settings tab for editing tracker access, selectors and logging."""

    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

    SECTION_LABELS = [
        ("tracker", "Tracker", "HTTPS, basic auth, timeout"),
        ("selectors", "Selectors", "Where titles live in the page"),
        ("logging", "Logging", "Console/file logging + redaction"),
    ]

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._loading_form = False
        self._current_section: Optional[str] = None

    def compose(self):
        with Vertical(id="settings-panel"):
            with Horizontal(id="settings-body"):
                with Container(id="settings-left"):
                    yield DataTable(id="settings-table", cursor_type="row")
                with Container(id="settings-right"):
                    with ContentSwitcher(id="settings-forms"):
                        with ScrollableContainer(id="settings-tracker"):
                            yield Static("Tracker", id="settings-title")
                            yield Static("https", classes="form-label")
                            yield Switch(id="tracker-https")
                            yield Static("basic_auth", classes="form-label")
                            yield Switch(id="tracker-basic-auth")
                            yield Static("basic_auth_username", classes="form-label")
                            yield Input(placeholder="bot", id="tracker-username")
                            yield Static("basic_auth_password (blank = use .env)", classes="form-label")
                            yield Input(password=True, id="tracker-password")
                            yield Static("timeout_seconds", classes="form-label")
                            yield Input(placeholder="10", id="tracker-timeout")
                            yield Static("revision_project", classes="form-label")
                            yield Input(placeholder=DEFAULT_REVISION_PROJECT, id="tracker-project")
                            yield Static("", id="tracker-error", classes="settings-error")

                        with Container(id="settings-selectors"):
                            yield Static("Selectors", id="settings-title")
                            yield Static("ticket", classes="form-label")
                            yield Input(placeholder=DEFAULT_SELECTORS[RefKind.TICKET], id="selector-ticket")
                            yield Static("revision", classes="form-label")
                            yield Input(placeholder=DEFAULT_SELECTORS[RefKind.REVISION], id="selector-revision")
                            yield Static("wiki pages are only checked for existence", classes="subtle")

                        with ScrollableContainer(id="settings-logging"):
                            yield Static("Logging", id="settings-title")
                            yield Static("enabled", classes="form-label")
                            yield Switch(id="logging-enabled")
                            yield Static("level", classes="form-label")
                            yield Select(
                                [(level, level) for level in self.LOG_LEVELS],
                                id="logging-level",
                                allow_blank=False,
                            )
                            yield Static("console", classes="form-label")
                            yield Switch(id="logging-console")
                            yield Static("file.enabled", classes="form-label")
                            yield Switch(id="logging-file-enabled")
                            yield Static("file.path", classes="form-label")
                            yield Input(placeholder="logs/redscope.log", id="logging-file-path")
                            yield Static("redact.enabled", classes="form-label")
                            yield Switch(id="logging-redact-enabled")
                            yield Static("redact.patterns (one env var per line)", classes="form-label")
                            yield TextArea(id="logging-redact-patterns")
                            yield Static("", id="logging-error", classes="settings-error")

    def on_mount(self) -> None:
        table = self.query_one("#settings-table", DataTable)
        table.add_column("section", key="section", width=18)
        table.add_column("description", key="description", width=34)
        for key, label, description in self.SECTION_LABELS:
            table.add_row(label, description, key=key)
        table.zebra_stripes = True
        self._select_section("tracker")
        self.reload_from_config()

    def reload_from_config(self) -> None:
        self._loading_form = True
        self._load_tracker()
        self._load_selectors()
        self._load_logging()
        self._loading_form = False

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        row_key = event.row_key
        self._select_section(str(row_key.value if hasattr(row_key, "value") else row_key))

    def _select_section(self, section_id: str) -> None:
        self._current_section = section_id
        switcher = self.query_one("#settings-forms", ContentSwitcher)
        switcher.current = f"settings-{section_id}"

    def _get_section(self, key: str) -> dict[str, Any]:
        data = self.app.config_state.data or {}
        section = data.get(key)
        if isinstance(section, dict):
            return section
        return {}

    def _update_section(self, key: str, section: dict[str, Any]) -> None:
        self.app.update_config_section(key, section)

    def _set_tracker_value(self, key: str, value: Any) -> None:
        if self._loading_form:
            return
        tracker = self._get_section("tracker")
        tracker[key] = value
        self._update_section("tracker", tracker)

    def _load_tracker(self) -> None:
        tracker = self._get_section("tracker")
        basic_auth = bool(tracker.get("basic_auth", False))
        self.query_one("#tracker-https", Switch).value = bool(tracker.get("https", False))
        self.query_one("#tracker-basic-auth", Switch).value = basic_auth
        self.query_one("#tracker-username", Input).value = str(tracker.get("basic_auth_username") or "")
        self.query_one("#tracker-password", Input).value = str(tracker.get("basic_auth_password") or "")
        self.query_one("#tracker-timeout", Input).value = str(tracker.get("timeout_seconds", 10))
        self.query_one("#tracker-project", Input).value = str(
            tracker.get("revision_project") or DEFAULT_REVISION_PROJECT
        )
        self._apply_auth_state(basic_auth)
        self._set_error("tracker-error", "")

    def _load_selectors(self) -> None:
        selectors = self._get_subdict(self._get_section("tracker"), "selectors")
        self.query_one("#selector-ticket", Input).value = str(selectors.get("ticket") or "")
        self.query_one("#selector-revision", Input).value = str(selectors.get("revision") or "")

    def _load_logging(self) -> None:
        logging = self._get_section("logging")
        file_cfg = self._get_subdict(logging, "file")
        redact_cfg = self._get_subdict(logging, "redact")
        level = logging.get("level", "INFO")
        select = self.query_one("#logging-level", Select)
        if level in self.LOG_LEVELS:
            select.value = level
            self._set_error("logging-error", "")
        else:
            select.value = "INFO"
            self._set_error("logging-error", f"Invalid value: {level}")
        self.query_one("#logging-enabled", Switch).value = bool(logging.get("enabled", False))
        self.query_one("#logging-console", Switch).value = bool(logging.get("console", True))
        self.query_one("#logging-file-enabled", Switch).value = bool(file_cfg.get("enabled", False))
        self.query_one("#logging-file-path", Input).value = str(file_cfg.get("path", "logs/redscope.log"))
        self.query_one("#logging-redact-enabled", Switch).value = bool(redact_cfg.get("enabled", False))
        self.query_one("#logging-redact-patterns", TextArea).text = "\n".join(redact_cfg.get("patterns", []) or [])

    def _set_error(self, error_id: str, message: str) -> None:
        self.query_one(f"#{error_id}", Static).update(message)

    def _apply_auth_state(self, basic_auth: bool) -> None:
        self.query_one("#tracker-username", Input).disabled = not basic_auth
        self.query_one("#tracker-password", Input).disabled = not basic_auth

    @on(Switch.Changed, "#tracker-https")
    def _on_https_changed(self, event: Switch.Changed) -> None:
        self._set_tracker_value("https", bool(event.value))

    @on(Switch.Changed, "#tracker-basic-auth")
    def _on_basic_auth_changed(self, event: Switch.Changed) -> None:
        self._set_tracker_value("basic_auth", bool(event.value))
        self._apply_auth_state(bool(event.value))

    @on(Input.Changed, "#tracker-username")
    def _on_username_changed(self, event: Input.Changed) -> None:
        self._set_tracker_value("basic_auth_username", event.value.strip())

    @on(Input.Changed, "#tracker-password")
    def _on_password_changed(self, event: Input.Changed) -> None:
        self._set_tracker_value("basic_auth_password", event.value)

    @on(Input.Changed, "#tracker-project")
    def _on_project_changed(self, event: Input.Changed) -> None:
        self._set_tracker_value("revision_project", event.value.strip() or DEFAULT_REVISION_PROJECT)

    @on(Input.Changed, "#tracker-timeout")
    def _on_timeout_changed(self, event: Input.Changed) -> None:
        if self._loading_form:
            return
        stripped = event.value.strip()
        try:
            timeout = float(stripped)
        except ValueError:
            self._set_error("tracker-error", "Enter a number of seconds")
            return
        if timeout <= 0:
            self._set_error("tracker-error", "Timeout must be positive")
            return
        self._set_error("tracker-error", "")
        self._set_tracker_value("timeout_seconds", timeout)

    @on(Input.Changed, "#selector-ticket")
    def _on_ticket_selector(self, event: Input.Changed) -> None:
        self._update_selector("ticket", event.value)

    @on(Input.Changed, "#selector-revision")
    def _on_revision_selector(self, event: Input.Changed) -> None:
        self._update_selector("revision", event.value)

    def _update_selector(self, kind: str, value: str) -> None:
        if self._loading_form:
            return
        tracker = self._get_section("tracker")
        selectors = self._get_subdict(tracker, "selectors")
        if value.strip():
            selectors[kind] = value.strip()
        else:
            selectors.pop(kind, None)
        tracker["selectors"] = selectors
        self._update_section("tracker", tracker)

    @on(Switch.Changed, "#logging-enabled")
    def _on_logging_enabled(self, event: Switch.Changed) -> None:
        self._update_logging(("enabled",), bool(event.value))

    @on(Select.Changed, "#logging-level")
    def _on_logging_level(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        self._update_logging(("level",), event.value)

    @on(Switch.Changed, "#logging-console")
    def _on_logging_console(self, event: Switch.Changed) -> None:
        self._update_logging(("console",), bool(event.value))

    @on(Switch.Changed, "#logging-file-enabled")
    def _on_logging_file_enabled(self, event: Switch.Changed) -> None:
        self._update_logging(("file", "enabled"), bool(event.value))

    @on(Input.Changed, "#logging-file-path")
    def _on_logging_file_path(self, event: Input.Changed) -> None:
        self._update_logging(("file", "path"), event.value)

    @on(Switch.Changed, "#logging-redact-enabled")
    def _on_logging_redact_enabled(self, event: Switch.Changed) -> None:
        self._update_logging(("redact", "enabled"), bool(event.value))

    @on(TextArea.Changed, "#logging-redact-patterns")
    def _on_logging_redact_patterns(self, event: TextArea.Changed) -> None:
        patterns = [line.strip() for line in event.text_area.text.splitlines() if line.strip()]
        self._update_logging(("redact", "patterns"), patterns)

    def _update_logging(self, path: tuple[str, ...], value: Any) -> None:
        if self._loading_form:
            return
        logging = self._get_section("logging")
        if len(path) == 1:
            logging[path[0]] = value
        else:
            nested = self._get_subdict(logging, path[0])
            nested[path[1]] = value
            logging[path[0]] = nested
        self._update_section("logging", logging)

    @staticmethod
    def _get_subdict(parent: dict[str, Any], key: str) -> dict[str, Any]:
        value = parent.get(key)
        if isinstance(value, dict):
            return value
        return {}
