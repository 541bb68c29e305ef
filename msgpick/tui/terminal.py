"""Full-screen terminal driver built on prompt_toolkit.

prompt_toolkit owns the raw keyboard and the screen; this module only turns
key presses into `InputEvent`s and paints the rich-rendered view.
"""
from __future__ import annotations

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl

from .app import handle_event
from .components import CHROME_ROWS, build_view, render_to_ansi
from .events import EventKind, InputEvent, Nav
from .state import Session

NAV_KEYS = {
    "up": Nav.UP,
    "down": Nav.DOWN,
    "pageup": Nav.PAGE_UP,
    "pagedown": Nav.PAGE_DOWN,
    "home": Nav.HOME,
    "end": Nav.END,
}
NAMED_KEYS = (*NAV_KEYS, "enter", "escape", "backspace", "c-c")


def key_to_event(key: str, data: str, entering: bool) -> InputEvent | None:
    """Translate one key press into an abstract event.

    Args:
        key: Binding name ("up", "enter", ...) or "<any>" for plain input
        data: Characters produced by the key press
        entering: Whether a command line is being typed

    Returns:
        The event, or None when the key means nothing in this mode
    """
    if key == "c-c":
        return InputEvent(EventKind.QUIT)
    if key == "escape":
        return InputEvent(EventKind.CANCEL)

    if entering:
        if key == "enter":
            return InputEvent(EventKind.COMMIT)
        if key == "backspace":
            return InputEvent(EventKind.BACKSPACE)
    else:
        if key in NAV_KEYS:
            return InputEvent.move(NAV_KEYS[key])
        if key == "<any>" and data == ":":
            return InputEvent(EventKind.MODE_TRIGGER)

    if key == "<any>" and len(data) == 1 and data.isprintable():
        return InputEvent.key(data)
    return None


def build_key_bindings(session: Session) -> KeyBindings:
    kb = KeyBindings()

    def _make_handler(name: str):
        def _handler(event):
            ev = key_to_event(name, event.data, session.interpreter.entering)
            if ev is None:
                return
            handle_event(session, ev)
            if not session.running:
                event.app.exit(result=session)

        return _handler

    for name in NAMED_KEYS:
        kb.add(name, eager=(name == "escape"))(_make_handler(name))
    kb.add("<any>")(_make_handler("<any>"))
    return kb


class TerminalUI:
    """Runs one session in the alternate screen until the user quits."""

    def __init__(self, session: Session):
        self.session = session
        self.control = FormattedTextControl(self._render, focusable=True, show_cursor=False)
        self.app: Application = Application(
            layout=Layout(Window(self.control)),
            key_bindings=build_key_bindings(session),
            full_screen=True,
            mouse_support=False,
        )

    def _render(self) -> ANSI:
        size = self.app.output.get_size()
        rows = max(1, size.rows - CHROME_ROWS)
        if rows != self.session.window:
            handle_event(self.session, InputEvent.resize(rows))
        return ANSI(render_to_ansi(build_view(self.session), width=size.columns))

    def run(self) -> Session:
        self.app.run()
        return self.session
