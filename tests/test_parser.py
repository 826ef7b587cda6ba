"""Tests for marker scanning and ticket parsing."""

from datetime import datetime, timezone

import pytest

from textobj.errors import ParseError
from textobj.marker import MarkerConfig
from textobj.parser import parse_ticket, parse_timestamp, remove_markers, scan_text


def test_parse_simple():
    ticket = parse_ticket("key1:value1|key2:value2")
    assert ticket.values == {"key1": "value1", "key2": "value2"}


def test_parse_strips_markers():
    ticket = parse_ticket("[[key1:value1|key2:value2]]")
    assert ticket.values == {"key1": "value1", "key2": "value2"}


def test_parse_with_meta_data():
    content = "id:test_id|key1:value1|key2:value2|updated:2018-01-01 00:00:00|store_info:store_info|store_id:store_id"
    ticket = parse_ticket(content)
    assert ticket.ticket_id == "test_id"
    assert ticket.values == {"key1": "value1", "key2": "value2"}
    assert ticket.updated == datetime(2018, 1, 1, tzinfo=timezone.utc)
    assert ticket.store_url == "store_id"
    assert ticket.store_info == "store_info"


def test_parse_with_missing_values():
    content = "id:test_id|key1:|key2|:value1|updated:2018-01-01 00:00:00|store_info:store_info"
    ticket = parse_ticket(content)
    assert ticket.ticket_id == "test_id"
    assert ticket.values == {"key1": "", "key2": "", "value1": ""}
    assert ticket.updated.date() == datetime(2018, 1, 1).date()
    assert ticket.store_url is None
    assert ticket.store_info == "store_info"


def test_parse_empty_key_becomes_key():
    ticket = parse_ticket(":value_with_no_key")
    assert ticket.values == {"value_with_no_key": ""}


def test_parse_skips_empty_entries():
    ticket = parse_ticket("a:1||:|b:2")
    assert ticket.values == {"a": "1", "b": "2"}


def test_parse_value_keeps_value_separator():
    ticket = parse_ticket("url:https://example.com/a:b")
    assert ticket.values == {"url": "https://example.com/a:b"}


def test_parse_keeps_interior_spaces():
    ticket = parse_ticket("title:a long  title|note: padded ")
    assert ticket.values == {"title": "a long  title", "note": "padded"}


def test_parse_printed_form():
    ticket = parse_ticket("[[id: abc12 | k: v | updated: 2018-01-01 00:00:00 | store_info: /s.db | store_id: home]]")
    assert ticket.ticket_id == "abc12"
    assert ticket.values == {"k": "v"}
    assert ticket.updated == datetime(2018, 1, 1, tzinfo=timezone.utc)
    assert ticket.store_info == "/s.db"
    assert ticket.store_url == "home"


def test_parse_blank_entries_dropped():
    ticket = parse_ticket("a:1|  | : |b:2")
    assert ticket.values == {"a": "1", "b": "2"}


def test_parse_duplicate_key_overwrites_in_place():
    ticket = parse_ticket("a:1|b:2|a:3")
    assert list(ticket.values.items()) == [("a", "3"), ("b", "2")]


def test_parse_reserved_keys_never_in_values():
    ticket = parse_ticket("id:x|updated:2020-02-02 10:11:12|store_id:u|store_info:i|k:v")
    assert set(ticket.values) == {"k"}


def test_parse_generates_id_when_absent():
    ticket = parse_ticket("k:v")
    assert len(ticket.ticket_id) == 5


def test_parse_empty_id_is_replaced():
    ticket = parse_ticket("id:|k:v")
    assert ticket.ticket_id


def test_parse_bad_timestamp_raises():
    with pytest.raises(ParseError) as exc_info:
        parse_ticket("id:1|updated:yesterday")
    assert exc_info.value.value == "yesterday"


def test_parse_timestamp_is_utc():
    assert parse_timestamp("2019-05-06 07:08:09") == datetime(2019, 5, 6, 7, 8, 9, tzinfo=timezone.utc)


def test_parse_custom_date_format():
    ticket = parse_ticket("updated:06/05/2019", date_format="%d/%m/%Y")
    assert ticket.updated == datetime(2019, 5, 6, tzinfo=timezone.utc)


def test_scan_one_mark():
    result = scan_text("[[id:1]]")
    assert len(result) == 1
    assert result[0].ticket_id == "1"


def test_scan_two_marks_same_line():
    result = scan_text("[[id:1]][[id:2]]")
    assert [t.ticket_id for t in result] == ["1", "2"]


def test_scan_two_marks_different_lines():
    result = scan_text("[[id:1]]\n[[id:2]]")
    assert [t.ticket_id for t in result] == ["1", "2"]


def test_scan_three_lines():
    result = scan_text("[[id:1]]\n[[id:2]]\n[[id:3]]")
    assert [t.ticket_id for t in result] == ["1", "2", "3"]
    assert [t.position.line for t in result] == [0, 1, 2]


def test_scan_position():
    result = scan_text("12345[[id:1]]")
    assert len(result) == 1
    pos = result[0].position
    assert pos.line == 0
    assert pos.column == 5
    assert pos.length == 8
    assert pos.raw_text == "[[id:1]]"


def test_scan_position_second_line():
    result = scan_text("\n12345[[id:1]]")
    assert len(result) == 1
    assert result[0].position.line == 1
    assert result[0].position.column == 5
    assert result[0].position.length == len("[[id:1]]")


def test_scan_empty_text():
    assert scan_text("") == []


def test_scan_no_markers():
    assert scan_text("plain prose\nwith [single] brackets") == []


def test_scan_marker_does_not_span_lines():
    assert scan_text("[[id:1\n]]") == []


def test_scan_lazy_match():
    result = scan_text("[[a]] and [[b]]")
    assert [list(t.values) for t in result] == [["a"], ["b"]]


def test_scan_crlf_lines():
    result = scan_text("[[id:1]]\r\n x [[id:2]]\r\n")
    assert [t.ticket_id for t in result] == ["1", "2"]
    assert result[1].position.column == 3


def test_scan_tag_style_marker():
    result = scan_text("[[IMPORTANT|RELEVANT|THIS is something that blahblah]]")
    assert len(result) == 1
    assert list(result[0].values) == ["IMPORTANT", "RELEVANT", "THIS is something that blahblah"]


def test_scan_custom_marker():
    marker = MarkerConfig(left_marker="{{", right_marker="}}", value_entry_separator=";", value_separator="=")
    result = scan_text("see {{id=abc;page=4}} and [[id:ignored]]", marker)
    assert len(result) == 1
    assert result[0].ticket_id == "abc"
    assert result[0].values == {"page": "4"}
    assert result[0].marker is marker


def test_scan_propagates_parse_error():
    with pytest.raises(ParseError):
        scan_text("ok [[id:1]]\nbad [[id:2|updated:2018-13-45 00:00:00]]")


def test_remove_markers():
    text = "a [[id:1]] b [[id:2]]\nc[[x]]"
    assert remove_markers(text, scan_text(text)) == "a  b \nc"
