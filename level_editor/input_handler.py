"""
Input handling logic for the Level Editor.
Decodes raw terminal input into key and pointer events and routes them to
the palette and the paint session.
"""

import re
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Dict, Iterator, List, Optional, Tuple, Union

from .models import KeyEvent, PointerButton, PointerEvent, PointerKind

if TYPE_CHECKING:
    from .editor import LevelEditor

# ESC [ < button ; column ; row (M = press/motion, m = release)
SGR_MOUSE = re.compile(r"\x1b\[<(\d+);(\d+);(\d+)([Mm])")
# Any other CSI / SS3 sequence (arrow keys etc.), dropped
OTHER_ESCAPE = re.compile(r"\x1b(\[[0-9;?]*[ -/]*[@-~]|O.|.?)")
# A report cut off at the end of a read: ESC, ESC [, ESC [ < 35 ; 1 ...
PARTIAL_SGR = re.compile(r"\x1b(\[(<\d*(;\d*){0,2})?)?\Z")

MOTION_BIT = 32
WHEEL_BIT = 64

InputEvent = Union[KeyEvent, PointerEvent]


def decode_mouse(btn: int, col: int, row: int, final: str) -> Optional[PointerEvent]:
    """Turn one SGR report into a PointerEvent with 0-based coordinates."""
    if btn & WHEEL_BIT:
        return None
    x, y = col - 1, row - 1
    if final == "m":
        return PointerEvent(PointerKind.UP, x, y, _button(btn))
    if btn & MOTION_BIT:
        return PointerEvent(PointerKind.MOVE, x, y, _button(btn))
    return PointerEvent(PointerKind.DOWN, x, y, _button(btn))


def _button(btn: int) -> Optional[PointerButton]:
    low = btn & 3
    # 3 means "no button" on motion reports
    return PointerButton(low) if low != 3 else None


def parse_input(chunk: str) -> List[InputEvent]:
    """Split a chunk read from the terminal into events, in arrival order."""
    events: List[InputEvent] = []
    i = 0
    while i < len(chunk):
        if chunk[i] == "\x1b":
            m = SGR_MOUSE.match(chunk, i)
            if m:
                event = decode_mouse(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4))
                if event:
                    events.append(event)
                i = m.end()
                continue
            other = OTHER_ESCAPE.match(chunk, i)
            i = other.end() if other and other.end() > i else i + 1
            continue
        events.append(KeyEvent(chunk[i]))
        i += 1
    return events


class PointerBus:
    """
    Window-wide pointer listeners. Whatever is listening for UP hears every
    release, including ones outside the grid.
    """

    def __init__(self):
        self._listeners: Dict[PointerKind, List[Callable[[PointerEvent], None]]] = {}

    def add_listener(self, kind: PointerKind, callback: Callable[[PointerEvent], None]):
        self._listeners.setdefault(kind, []).append(callback)

    def remove_listener(self, kind: PointerKind, callback: Callable[[PointerEvent], None]):
        listeners = self._listeners.get(kind, [])
        if callback in listeners:
            listeners.remove(callback)

    @contextmanager
    def listening(self, kind: PointerKind, callback: Callable[[PointerEvent], None]) -> Iterator[None]:
        self.add_listener(kind, callback)
        try:
            yield
        finally:
            self.remove_listener(kind, callback)

    def listener_count(self, kind: PointerKind) -> int:
        return len(self._listeners.get(kind, []))

    def emit(self, event: PointerEvent):
        for callback in list(self._listeners.get(event.kind, [])):
            callback(event)


class InputHandler:
    def __init__(self, editor: "LevelEditor"):
        self.editor = editor
        self.hover_cell: Optional[Tuple[int, int]] = None
        self._pending = ""

    def handle_input(self, chunk: str) -> bool:
        """
        Process everything read in one poll.
        Returns False if the editor should exit, True otherwise.
        """
        chunk = self._pending + chunk
        partial = PARTIAL_SGR.search(chunk)
        if partial:
            self._pending = chunk[partial.start() :]
            chunk = chunk[: partial.start()]
        else:
            self._pending = ""

        for event in parse_input(chunk):
            if isinstance(event, PointerEvent):
                self.handle_pointer(event)
            elif not self.handle_key(event.key):
                return False
        return True

    def handle_key(self, k: str) -> bool:
        if k.lower() == "q" or k == "\x03":
            return False

        symbol = self.editor.palette.brush_for_key(k)
        if symbol is not None:
            self.editor.select_brush(symbol)
        return True

    def handle_pointer(self, event: PointerEvent):
        editor = self.editor
        cell = editor.cell_at(event.x, event.y)

        if event.kind == PointerKind.UP:
            editor.pointer_bus.emit(event)
            return

        if event.kind == PointerKind.MOVE:
            if cell != self.hover_cell:
                self.hover_cell = cell
                if cell is not None:
                    editor.session.pointer_enter(*cell)
            return

        # DOWN
        if event.button is None:
            return
        if cell is not None:
            self.hover_cell = cell
            editor.session.pointer_down(cell[0], cell[1], event.button)
            return
        symbol = editor.palette_at(event.x, event.y)
        if symbol is not None and event.button == PointerButton.PRIMARY:
            editor.select_brush(symbol)
