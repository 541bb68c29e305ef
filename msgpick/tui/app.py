"""Event handling loop for an interactive session."""
from __future__ import annotations

import logging
from typing import Callable, Iterable

from .components import View, build_view
from .events import EventKind, InputEvent, Nav
from .state import Session

logger = logging.getLogger(__name__)

# Browsing keys that map to plain characters.
TOGGLE_KEYS = {" "}
CHAR_NAV = {"j": Nav.DOWN, "k": Nav.UP, "g": Nav.HOME, "G": Nav.END}


def _navigate(session: Session, nav: Nav) -> None:
    cursor, window = session.cursor, session.window
    if nav is Nav.UP:
        cursor.move_prev(window)
    elif nav is Nav.DOWN:
        cursor.move_next(window)
    elif nav is Nav.PAGE_UP:
        cursor.page_prev(window)
    elif nav is Nav.PAGE_DOWN:
        cursor.page_next(window)
    elif nav is Nav.HOME:
        cursor.move_first(window)
    elif nav is Nav.END:
        cursor.move_last(window)


def _handle_command_entry(session: Session, event: InputEvent) -> None:
    interp = session.interpreter
    if event.kind is EventKind.CHAR and event.char:
        interp.feed(event.char)
    elif event.kind is EventKind.BACKSPACE:
        interp.backspace()
    elif event.kind is EventKind.CANCEL:
        interp.cancel()
    elif event.kind is EventKind.COMMIT:
        result = interp.commit(session)
        session.last_result = result
        if result.artifact is not None:
            session.exports.append(result.artifact)
        session.notify(result.message, result.is_error)
        if result.quit:
            session.running = False


def _handle_browsing(session: Session, event: InputEvent) -> None:
    if event.kind is EventKind.MODE_TRIGGER:
        session.interpreter.begin()
    elif event.kind is EventKind.NAV and event.nav is not None:
        _navigate(session, event.nav)
    elif event.kind is EventKind.CHAR and event.char in TOGGLE_KEYS:
        session.selection.toggle_current(session.cursor)
    elif event.kind is EventKind.CHAR and event.char in CHAR_NAV:
        _navigate(session, CHAR_NAV[event.char])
    elif event.kind is EventKind.CHAR and event.char == ":":
        session.interpreter.begin()
    elif event.kind is EventKind.CANCEL:
        session.running = False


def handle_event(session: Session, event: InputEvent) -> None:
    """Apply one input event to the session.

    Resize and quit work in both modes; everything else depends on whether
    a command line is being typed.
    """
    if event.kind is EventKind.QUIT:
        session.running = False
        return
    if event.kind is EventKind.RESIZE:
        if event.rows:
            session.window = max(1, event.rows)
            session.cursor.reflow(session.window)
        return

    # Status lines are transient: the next keystroke clears them.
    session.status = None
    if session.interpreter.entering:
        _handle_command_entry(session, event)
    else:
        _handle_browsing(session, event)


def run_session(
    session: Session,
    events: Iterable[InputEvent],
    render: Callable[[View], None] | None = None,
) -> Session:
    """Drive a session from an event stream until quit or the stream ends.

    `render` receives one view per tick: the initial frame and one after
    every event.
    """
    if render is not None:
        render(build_view(session))
    for event in events:
        if not session.running:
            break
        handle_event(session, event)
        if render is not None:
            render(build_view(session))
    logger.info(
        "Session ended (%d/%d selected, %d export(s))",
        session.store.count_selected(),
        len(session.store),
        len(session.exports),
    )
    return session
