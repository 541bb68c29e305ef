"""Tests for the directory loaders."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from msgpick.errors import LoadError
from msgpick.loader import _channel_label, detect_format, iter_units
from msgpick.store import MessageStore


def _write_package(root: Path, index: dict, channels: dict) -> None:
    messages = root / "messages"
    messages.mkdir(parents=True)
    (messages / "index.json").write_text(json.dumps(index), encoding="utf-8")
    for channel_id, rows in channels.items():
        d = messages / f"c{channel_id}"
        d.mkdir()
        (d / "messages.json").write_text(json.dumps(rows), encoding="utf-8")


def test_text_layout_one_file_per_message_sorted(tmp_path: Path):
    (tmp_path / "b.txt").write_text("second", encoding="utf-8")
    (tmp_path / "a.txt").write_text("first\nwith two lines", encoding="utf-8")
    (tmp_path / "skip.md").write_text("not matched", encoding="utf-8")
    (tmp_path / "sub.txt").mkdir()

    store = MessageStore.load(iter_units(tmp_path))

    assert [m.content for m in store] == ["first\nwith two lines", "second"]
    assert [m.source_label for m in store] == ["a.txt", "b.txt"]


def test_text_layout_custom_pattern(tmp_path: Path):
    (tmp_path / "a.txt").write_text("txt", encoding="utf-8")
    (tmp_path / "b.md").write_text("md", encoding="utf-8")

    store = MessageStore.load(iter_units(tmp_path, "text", "*.md"))
    assert [m.content for m in store] == ["md"]


def test_text_layout_undecodable_file(tmp_path: Path):
    (tmp_path / "a.txt").write_text("ok", encoding="utf-8")
    (tmp_path / "b.txt").write_bytes(b"\xc3\x28")

    with pytest.raises(LoadError) as excinfo:
        MessageStore.load(iter_units(tmp_path))
    assert excinfo.value.unit == "b.txt"


def test_missing_source_directory(tmp_path: Path):
    with pytest.raises(LoadError, match="not found"):
        MessageStore.load(iter_units(tmp_path / "nope"))


def test_unknown_format(tmp_path: Path):
    with pytest.raises(LoadError, match="Unknown source format"):
        MessageStore.load(iter_units(tmp_path, "mbox"))


def test_discord_package_layout(tmp_path: Path):
    _write_package(
        tmp_path,
        {"111": "Direct Message with alice", "222": "general in My Server", "333": "missing"},
        {
            "111": [
                {"ID": 1, "Timestamp": "2021-01-01", "Contents": "hi alice"},
                {"ID": 2, "Timestamp": "2021-01-02", "Contents": ""},
            ],
            "222": [{"ID": "3", "Timestamp": "2021-01-03", "Contents": "multi\nline"}],
        },
    )

    assert detect_format(tmp_path) == "discord"
    store = MessageStore.load(iter_units(tmp_path))

    assert [m.content for m in store] == ["hi alice", "multi\nline"]
    assert [m.source_label for m in store] == ["alice #1", "My Server - general #3"]


def test_discord_index_at_source_root(tmp_path: Path):
    _write_package(tmp_path, {"9": "notes"}, {"9": [{"ID": 5, "Contents": "x"}]})
    store = MessageStore.load(iter_units(tmp_path / "messages", "discord"))
    assert store.get(0).source_label == "notes #5"


def test_discord_malformed_json(tmp_path: Path):
    messages = tmp_path / "messages"
    messages.mkdir()
    (messages / "index.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(LoadError, match="Malformed JSON"):
        MessageStore.load(iter_units(tmp_path))


def test_discord_format_forced_on_plain_directory(tmp_path: Path):
    with pytest.raises(LoadError, match="index.json"):
        MessageStore.load(iter_units(tmp_path, "discord"))


def test_detect_format_plain(tmp_path: Path):
    assert detect_format(tmp_path) == "text"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Direct Message with bob#1234", "bob#1234"),
        ("random in Guild", "Guild - random"),
        ("a in b in c", "c - a in b"),
        ("plain", "plain"),
        ("DM - carol", "carol"),
    ],
)
def test_channel_label(raw, expected):
    assert _channel_label(raw) == expected


def test_discord_lone_surrogate_fails_load(tmp_path: Path):
    _write_package(
        tmp_path,
        {"7": "Direct Message with dave"},
        {"7": [{"ID": 1, "Contents": "ok"}, {"ID": 2, "Contents": "bad \ud83d half emoji"}]},
    )

    with pytest.raises(LoadError) as excinfo:
        MessageStore.load(iter_units(tmp_path))

    assert excinfo.value.unit == "dave #2"
