"""
Terminal rendering engine for the Level Editor.
Double-buffered: only the terminal columns that changed since the last
flush are written. Buffers are numpy arrays of glyphs and RGB colours.
"""

import sys
import numpy as np
from typing import Optional, TextIO, Tuple

Colour = Optional[Tuple[int, int, int]]

DEFAULT = (-1, -1, -1)


class Renderer:
    def __init__(self, cols: int, rows: int, out: Optional[TextIO] = None):
        self.cols = cols
        self.rows = rows
        self.out = out if out is not None else sys.stdout

        shape = (rows, cols)
        self.screen_buffer = np.full(shape, " ", dtype=object)
        self.fg_buffer = np.full((*shape, 3), -1, dtype=np.int16)
        self.bg_buffer = np.full((*shape, 3), -1, dtype=np.int16)

        # Something no real cell can hold, so the first flush paints everything
        self._prev_screen = np.full(shape, "", dtype=object)
        self._prev_fg = np.full((*shape, 3), -1, dtype=np.int16)
        self._prev_bg = np.full((*shape, 3), -1, dtype=np.int16)

    def clear(self):
        self.screen_buffer.fill(" ")
        self.fg_buffer.fill(-1)
        self.bg_buffer.fill(-1)

    def invalidate(self):
        """Forget what is on screen; the next flush redraws every cell."""
        self._prev_screen.fill("")

    def set_cell(self, x: int, y: int, char: str, fg: Colour = None, bg: Colour = None):
        if 0 <= y < self.rows and 0 <= x < self.cols:
            self.screen_buffer[y, x] = char
            self.fg_buffer[y, x] = fg if fg is not None else DEFAULT
            self.bg_buffer[y, x] = bg if bg is not None else DEFAULT

    def draw_text(self, x: int, y: int, text: str, fg: Colour = (255, 255, 255), bg: Colour = None):
        for i, char in enumerate(text):
            self.set_cell(x + i, y, char, fg, bg)

    def draw_tile(self, x: int, y: int, glyph: str, width: int, fg: Colour, bg: Colour):
        """Draw a tile `width` columns wide with its glyph in the first column."""
        self.set_cell(x, y, glyph, fg, bg)
        for i in range(1, width):
            self.set_cell(x + i, y, " ", fg, bg)

    def draw_box(self, x: int, y: int, w: int, h: int, fg: Colour = (100, 100, 100)):
        for i in range(1, w - 1):
            self.set_cell(x + i, y, "-", fg)
            self.set_cell(x + i, y + h - 1, "-", fg)
        for j in range(1, h - 1):
            self.set_cell(x, y + j, "|", fg)
            self.set_cell(x + w - 1, y + j, "|", fg)
        for cx, cy in ((x, y), (x + w - 1, y), (x, y + h - 1), (x + w - 1, y + h - 1)):
            self.set_cell(cx, cy, "+", fg)

    def render_to_string(self) -> str:
        """Build the escape sequence stream for every changed cell."""
        output_parts = []
        last_fg = DEFAULT
        last_bg = DEFAULT
        cursor = None

        for y in range(self.rows):
            for x in range(self.cols):
                char = str(self.screen_buffer[y, x])
                fg = tuple(int(v) for v in self.fg_buffer[y, x])
                bg = tuple(int(v) for v in self.bg_buffer[y, x])

                if (
                    char == self._prev_screen[y, x]
                    and fg == tuple(self._prev_fg[y, x])
                    and bg == tuple(self._prev_bg[y, x])
                ):
                    continue

                if cursor != (x, y):
                    output_parts.append(f"\033[{y + 1};{x + 1}H")

                if fg != last_fg:
                    if fg[0] == -1:
                        output_parts.append("\033[39m")
                    else:
                        output_parts.append(f"\033[38;2;{fg[0]};{fg[1]};{fg[2]}m")
                    last_fg = fg

                if bg != last_bg:
                    if bg[0] == -1:
                        output_parts.append("\033[49m")
                    else:
                        output_parts.append(f"\033[48;2;{bg[0]};{bg[1]};{bg[2]}m")
                    last_bg = bg

                output_parts.append(char[:1] or " ")
                cursor = (x + 1, y)

        self._prev_screen[:, :] = self.screen_buffer
        self._prev_fg[:, :] = self.fg_buffer
        self._prev_bg[:, :] = self.bg_buffer

        if output_parts:
            output_parts.append("\033[0m")
        return "".join(output_parts)

    def flush(self):
        data = self.render_to_string()
        if data:
            self.out.write(data)
            self.out.flush()
