from __future__ import annotations

import pytest

from frontend.validators import check_channel_map, parse_channel_entry_input, parse_channel_key, split_entry


def test_channel_keys_are_normalized() -> None:
    assert parse_channel_key("@Puppet_Dev") == ("@puppet_dev", None)
    assert parse_channel_key(" chat_id:-100123 ") == ("chat_id:-100123", None)
    assert parse_channel_key("chat_id:abc")[1] == "chat_id must be numeric"
    assert parse_channel_key("#irc")[1] == "channel must start with @ or chat_id:"


def test_valid_entry() -> None:
    info = parse_channel_entry_input("@Dev", "https://projects.example.com")
    assert info.error is None
    assert info.normalized == "@dev:https://projects.example.com"


@pytest.mark.parametrize(
    "base_url,error",
    [
        ("https://projects.example.com/", "base URL must not end with a slash"),
        ("projects.example.com", "base URL must start with http:// or https://"),
        ("http://a b", "base URL must not contain spaces"),
        ("http://[::1", "base URL is not a valid URL"),
    ],
)
def test_invalid_base_urls(base_url: str, error: str) -> None:
    info = parse_channel_entry_input("@dev", base_url)
    assert info.normalized is None
    assert info.error == error


def test_split_existing_entry() -> None:
    info = split_entry("chat_id:-100123:http://redmine.local")
    assert info.channel == "chat_id:-100123"
    assert info.base_url == "http://redmine.local"
    assert split_entry("garbage").error == "entry must look like <channel>:<url>"


def test_channel_map_report_accepts_a_clean_map() -> None:
    report = check_channel_map(["@dev:http://tracker", "chat_id:-100123:https://redmine.local"])
    assert report.ok
    assert report.entries == 2


def test_channel_map_report_lists_problems_by_position() -> None:
    report = check_channel_map(
        [
            "@dev:http://tracker",
            "garbage",
            "@Dev:http://other",
            "@ops:http://[::1",
            42,
        ]
    )
    assert not report.ok
    assert report.problems == [
        "entry 2: entry must look like <channel>:<url>",
        "entry 3: @dev is shadowed by entry 1",
        "entry 4: base URL is not a valid URL",
        "entry 5: not a string",
    ]
