"""Terminal front-end for msgpick.

Keeps the session, the event loop and rendering apart so the loop can be
driven by a scripted event stream as well as by a real keyboard.
"""
from .app import handle_event, run_session
from .events import EventKind, InputEvent, Nav
from .state import Session, Status

__all__ = ["EventKind", "InputEvent", "Nav", "Session", "Status", "handle_event", "run_session"]
