"""Unit tests for Session."""
from __future__ import annotations

from pathlib import Path

from msgpick.commands import Mode
from msgpick.tui.state import Session, Status


def test_session_initial_state(five):
    session = Session.create(five, Path("out.txt"), window=0)

    assert session.cursor.focused_id == 0
    assert session.selection.store is five
    assert session.cursor.store is five
    assert session.interpreter.mode is Mode.BROWSING
    assert session.window == 1
    assert session.running
    assert session.status is None
    assert session.exports == []


def test_session_notify(five):
    session = Session.create(five, Path("out.txt"))

    session.notify("Exported 5 message(s)")
    assert session.status == Status("Exported 5 message(s)", False)

    session.notify("Unknown command: x", is_error=True)
    assert session.status.is_error

    session.notify(None)
    assert session.status is None


def test_sessions_do_not_share_state(make_store):
    a = Session.create(make_store("x"), Path("a.txt"))
    b = Session.create(make_store("y"), Path("b.txt"))

    a.interpreter.begin()
    a.exports.append(Path("a.txt"))

    assert not b.interpreter.entering
    assert b.exports == []
