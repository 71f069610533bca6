"""Layer 1: parse_event_chunk field handling."""

import pytest

from ssestream.core.events import MessageEvent
from ssestream.core.parser import parse_event_chunk, split_field


def test_named_event_with_id():
    event = parse_event_chunk("id: 5\nevent: update\ndata: hello")

    assert isinstance(event, MessageEvent)
    assert event.type == "update"
    assert event.id == "5"
    assert event.data == "hello"


def test_data_lines_are_joined_with_newline():
    event = parse_event_chunk("data: hello\ndata: world")

    assert event.data == "hello\nworld"


@pytest.mark.parametrize("chunk", ["", "   ", "\n", "\r\n\t"])
def test_blank_record_yields_nothing(chunk):
    assert parse_event_chunk(chunk) is None


def test_none_yields_nothing():
    assert parse_event_chunk(None) is None


def test_comment_lines_contribute_nothing():
    event = parse_event_chunk(":comment\ndata: x\n: another: one")

    assert event.type == "message"
    assert event.data == "x"
    assert event.id is None


def test_comment_only_record_is_a_default_message():
    event = parse_event_chunk(":comment")

    assert event.type == "message"
    assert event.data == ""
    assert event.id is None


def test_defaults_when_fields_absent():
    event = parse_event_chunk("retry: 3000")

    assert event.type == "message"
    assert event.data == ""
    assert event.id is None
    assert event.retry == "3000"


def test_empty_event_name_falls_back_to_message():
    assert parse_event_chunk("event:\ndata: x").type == "message"


def test_only_one_leading_space_is_stripped():
    event = parse_event_chunk("data:  two spaces\ndata:none")

    assert event.data == " two spaces\nnone"


def test_value_keeps_later_colons():
    event = parse_event_chunk('data: {"a": 1}')

    assert event.data == '{"a": 1}'


def test_bare_field_name_has_empty_value():
    event = parse_event_chunk("data\ndata\nid")

    assert event.data == "\n"
    assert event.id == ""


def test_unknown_fields_are_ignored():
    event = parse_event_chunk("foo: bar\nDATA: shout\ndata: kept")

    assert event.data == "kept"
    assert not hasattr(event, "foo")


def test_last_write_wins_for_non_data_fields():
    event = parse_event_chunk("event: a\nid: 1\nevent: b\nid: 2\ndata: x")

    assert event.type == "b"
    assert event.id == "2"


@pytest.mark.parametrize("newline", ["\n", "\r\n", "\r"])
def test_every_line_ending_is_accepted(newline):
    event = parse_event_chunk(newline.join(["event: tick", "data: a", "data: b"]))

    assert event.type == "tick"
    assert event.data == "a\nb"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("data: x", ("data", "x")),
        ("data:x", ("data", "x")),
        ("data", ("data", "")),
        ("data:", ("data", "")),
        (": note", None),
        (":", None),
    ],
)
def test_split_field(line, expected):
    assert split_field(line) == expected
