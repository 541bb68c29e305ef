"""Tests for key translation in the terminal driver."""
from __future__ import annotations

import pytest

from msgpick.tui.events import EventKind, InputEvent, Nav
from msgpick.tui.terminal import build_key_bindings, key_to_event


@pytest.mark.parametrize(
    "key, data, expected",
    [
        ("up", "", InputEvent.move(Nav.UP)),
        ("pagedown", "", InputEvent.move(Nav.PAGE_DOWN)),
        ("end", "", InputEvent.move(Nav.END)),
        ("<any>", ":", InputEvent(EventKind.MODE_TRIGGER)),
        ("<any>", " ", InputEvent.key(" ")),
        ("escape", "", InputEvent(EventKind.CANCEL)),
        ("c-c", "", InputEvent(EventKind.QUIT)),
        ("enter", "\r", None),
        ("<any>", "\x01", None),
    ],
)
def test_key_to_event_browsing(key, data, expected):
    assert key_to_event(key, data, entering=False) == expected


@pytest.mark.parametrize(
    "key, data, expected",
    [
        ("enter", "\r", InputEvent(EventKind.COMMIT)),
        ("backspace", "\x7f", InputEvent(EventKind.BACKSPACE)),
        ("escape", "", InputEvent(EventKind.CANCEL)),
        ("<any>", ":", InputEvent.key(":")),
        ("<any>", "é", InputEvent.key("é")),
        ("up", "", None),
        ("c-c", "", InputEvent(EventKind.QUIT)),
    ],
)
def test_key_to_event_command_entry(key, data, expected):
    assert key_to_event(key, data, entering=True) == expected


def test_build_key_bindings_registers_keys(five, make_session):
    kb = build_key_bindings(make_session(five))
    assert len(kb.bindings) >= 11
