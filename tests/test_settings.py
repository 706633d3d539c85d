from __future__ import annotations

import json
from pathlib import Path

import pytest

import settings
from core.config import DEFAULT_SELECTORS
from core.models import RefKind


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "load_dotenv", lambda: None)
    monkeypatch.delenv(settings.PASSWORD_ENV, raising=False)


def _write(tmp_path: Path, payload: dict) -> str:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_defaults_for_minimal_config(tmp_path: Path) -> None:
    config = settings.load_tracker_config(_write(tmp_path, {"channels": ["@dev:http://tracker"]}))

    assert config.channel_map == ("@dev:http://tracker",)
    assert config.http.use_https is False
    assert config.http.use_basic_auth is False
    assert config.http.timeout_seconds == 10.0
    assert config.revision_project == "puppet"
    assert dict(config.selectors) == dict(DEFAULT_SELECTORS)


def test_tracker_section(tmp_path: Path) -> None:
    payload = {
        "channels": ["@a:http://one", " ", "@b:https://two"],
        "tracker": {
            "https": True,
            "basic_auth": True,
            "basic_auth_username": "bot",
            "basic_auth_password": "pw",
            "timeout_seconds": "3",
            "revision_project": "facter",
            "selectors": {"ticket": "div.subject h3"},
        },
    }
    config = settings.load_tracker_config(_write(tmp_path, payload))

    assert config.channel_map == ("@a:http://one", "@b:https://two")
    assert config.http.use_https is True
    assert config.http.basic_auth_username == "bot"
    assert config.http.basic_auth_password == "pw"
    assert config.http.timeout_seconds == 3.0
    assert config.revision_project == "facter"
    assert config.selectors[RefKind.TICKET] == "div.subject h3"


def test_password_falls_back_to_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(settings.PASSWORD_ENV, "from-env")
    config = settings.load_tracker_config(_write(tmp_path, {"tracker": {"basic_auth": True}}))
    assert config.http.basic_auth_password == "from-env"
    assert "from-env" not in repr(config)


def test_each_load_reads_the_file_again(tmp_path: Path) -> None:
    path = _write(tmp_path, {"channels": []})
    assert settings.load_tracker_config(path).channel_map == ()
    _write(tmp_path, {"channels": ["@dev:http://tracker"]})
    assert settings.load_tracker_config(path).channel_map == ("@dev:http://tracker",)


def test_missing_and_invalid_config(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        settings.load_tracker_config(str(tmp_path / "absent.json"))
    with pytest.raises(ValueError):
        settings.load_tracker_config(_write(tmp_path, {"channels": "@dev:http://tracker"}))
    with pytest.raises(ValueError):
        settings.load_tracker_config(_write(tmp_path, {"tracker": {"timeout_seconds": "soon"}}))


def test_logging_section(tmp_path: Path) -> None:
    path = _write(tmp_path, {"logging": {"enabled": True, "level": "DEBUG"}})
    assert settings.load_logging_config(path) == {"enabled": True, "level": "DEBUG"}


def test_saved_config_loads_back(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    data = {"channels": ["@dev:http://tracker"], "tracker": {"https": True}}
    settings.save_json_config(data, str(path))

    assert path.read_text(encoding="utf-8").endswith("}\n")
    assert settings.load_json_config(str(path)) == data
    assert settings.load_tracker_config(str(path)).channel_map == ("@dev:http://tracker",)
