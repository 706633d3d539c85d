from __future__ import annotations

import pytest

from core.models import BuiltUrl, ClassificationError, RefKind
from core.references import build_url, classify, extract_references


def test_extract_keeps_order_and_duplicates() -> None:
    assert list(extract_references("see [123] and #45")) == ["[123]", "#45"]
    assert list(extract_references("#45 again #45")) == ["#45", "#45"]


def test_extract_all_shapes() -> None:
    text = "r10, changeset:abc123 (wiki:FooBar#Usage) [7]; #8"
    assert list(extract_references(text)) == [
        "r10",
        "changeset:abc123",
        "wiki:FooBar#Usage",
        "[7]",
        "#8",
    ]


@pytest.mark.parametrize("text", ["abc#12", "r10abc", "xr10", "foo[12]", "#12b", "wiki:"])
def test_extract_respects_word_boundaries(text: str) -> None:
    assert list(extract_references(text)) == []


def test_extract_is_restartable() -> None:
    text = "r1 r2"
    assert list(extract_references(text)) == list(extract_references(text)) == ["r1", "r2"]


def test_extract_stops_wiki_at_trailing_hash() -> None:
    assert list(extract_references("see wiki:Foo# now")) == ["wiki:Foo"]


@pytest.mark.parametrize(
    "token,kind,identifier",
    [
        ("[123]", RefKind.REVISION, "123"),
        ("r99", RefKind.REVISION, "99"),
        ("changeset:deadbeef", RefKind.REVISION, "deadbeef"),
        ("#45", RefKind.TICKET, "45"),
        ("wiki:FooBar", RefKind.WIKI, "FooBar"),
        ("wiki:FooBar#Intro", RefKind.WIKI, "FooBar#Intro"),
    ],
)
def test_classify(token: str, kind: RefKind, identifier: str) -> None:
    reference = classify(token)
    assert reference.kind is kind
    assert reference.identifier == identifier
    assert reference.raw_token == token


def test_build_ticket_url() -> None:
    assert build_url("#45", "http://tracker", "puppet") == BuiltUrl(
        "http://tracker/issues/show/45", RefKind.TICKET
    )


def test_build_wiki_url_keeps_anchor() -> None:
    assert build_url("wiki:FooBar", "http://tracker", "puppet") == BuiltUrl(
        "http://tracker/wiki/FooBar", RefKind.WIKI
    )
    assert build_url("wiki:FooBar#Intro", "http://tracker", "puppet").url == "http://tracker/wiki/FooBar#Intro"


def test_build_revision_url_uses_project() -> None:
    assert build_url("r10", "http://tracker", "facter").url == "http://tracker/repositories/revision/facter/10"
    assert build_url("[10]", "http://tracker", "puppet").url == "http://tracker/repositories/revision/puppet/10"
    assert (
        build_url("changeset:abc", "http://tracker", "puppet").url
        == "http://tracker/repositories/revision/puppet/abc"
    )


@pytest.mark.parametrize("token", ["zzz", "#abc", "r", "[12", "wiki:Foo Bar", ""])
def test_build_rejects_unknown_shapes(token: str) -> None:
    assert build_url(token, "http://tracker", "puppet") == ClassificationError(token)


def test_construction_agrees_with_classification() -> None:
    text = "[1] r2 changeset:c3 #4 wiki:Five wiki:Six#Seven"
    for token in extract_references(text):
        built = build_url(token, "http://tracker", "puppet")
        assert isinstance(built, BuiltUrl)
        assert classify(token).kind is built.kind
