"""Tests for 'textobj scan' and 'textobj tags'."""

import json
from io import StringIO

import pytest

from textobj.cli.scan import scan, tags
from textobj.git import write_git_config_key


def test_scan(empty_repo, note_file, make_args, capsys):
    args = make_args(empty_repo, file=str(note_file), minimal=False)
    assert scan(args) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("2:19  [[id: abc12 | page: 4 | updated: ")
    assert lines[1].startswith("3:9  [[id: zzz99 | updated: ")
    assert lines[2].startswith("3:26  [[id: ")


def test_scan_minimal(empty_repo, note_file, make_args, capsys):
    args = make_args(empty_repo, file=str(note_file), minimal=True)
    assert scan(args) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "2:19  [[id: abc12]]"
    assert lines[1] == "3:9  [[id: zzz99]]"


def test_scan_json(empty_repo, note_file, make_args, capsys):
    args = make_args(empty_repo, file=str(note_file), minimal=False, json=True)
    assert scan(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert len(data) == 3
    assert data[0]["ticket_id"] == "abc12"
    assert data[0]["values"] == {"page": "4"}
    assert data[0]["position"] == {"line": 2, "column": 19, "length": 19, "raw_text": "[[id:abc12|page:4]]"}


def test_scan_stdin(empty_repo, make_args, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", StringIO("12345[[id:1]]"))
    args = make_args(empty_repo, file=None, minimal=True)
    assert scan(args) == 0
    assert capsys.readouterr().out == "0:5  [[id: 1]]\n"


def test_scan_uses_configured_marker(empty_repo, make_args, capsys, monkeypatch):
    write_git_config_key(empty_repo, "left-marker", "{{")
    write_git_config_key(empty_repo, "right-marker", "}}")
    monkeypatch.setattr("sys.stdin", StringIO("{{id:1}} [[id:2]]"))
    args = make_args(empty_repo, file="-", minimal=True)
    assert scan(args) == 0
    assert capsys.readouterr().out == "0:0  {{id: 1}}\n"


def test_scan_bad_timestamp(empty_repo, make_args, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", StringIO("[[id:1|updated:soon]]"))
    args = make_args(empty_repo, file=None, minimal=False)
    with pytest.raises(SystemExit, match="1"):
        scan(args)
    assert "error: " in capsys.readouterr().err


def test_scan_missing_file(empty_repo, make_args, capsys):
    args = make_args(empty_repo, file=str(empty_repo / "nope.md"), minimal=False, json=True)
    with pytest.raises(SystemExit, match="1"):
        scan(args)
    assert "error" in json.loads(capsys.readouterr().err)


def test_tags(empty_repo, note_file, make_args, capsys):
    args = make_args(empty_repo, file=str(note_file), clean=False)
    assert tags(args) == 0

    lines = capsys.readouterr().out.splitlines()
    assert "[[page]]" in lines
    assert "[[IMPORTANT|RELEVANT]]" in lines


def test_tags_clean(empty_repo, note_file, make_args, capsys):
    args = make_args(empty_repo, file=str(note_file), clean=True)
    assert tags(args) == 0
    assert capsys.readouterr().out == "# Reading notes\n\nWhales are mammals .\nSee also  and .\n"


def test_tags_json(empty_repo, make_args, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", StringIO("keep [[A|B|C]] this"))
    args = make_args(empty_repo, file=None, clean=False, json=True)
    assert tags(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["tags"] == [{"key": "A", "value": "B", "note": "C"}]
    assert data["cleaned_text"] == "keep  this"
