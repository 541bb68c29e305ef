from __future__ import annotations

import os
import sys

import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `msgpick/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()


@pytest.fixture
def make_store():
    """Factory building a store from plain strings, labelled m0.txt, m1.txt, ..."""
    from msgpick.models import RawUnit
    from msgpick.store import MessageStore

    def _make(*contents: str) -> MessageStore:
        return MessageStore.load(RawUnit(c, f"m{i}.txt") for i, c in enumerate(contents))

    return _make


@pytest.fixture
def five(make_store):
    """Five-message store, all selected."""
    return make_store("zero", "one", "two", "three", "four")


@pytest.fixture
def make_session(tmp_path):
    """Factory wrapping a store in a session that exports under tmp_path."""
    from msgpick.tui.state import Session

    def _make(store, window: int = 3):
        return Session.create(store, tmp_path / "out" / "export.txt", window=window)

    return _make
