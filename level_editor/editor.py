#!/usr/bin/env python3
"""
Level Editor - terminal front end.

Lays out the palette, the grid and the live level string, turns mouse
reports into palette clicks and brush strokes, and prints the final level
string on exit.
"""

import sys
import os
import select
import shutil
import termios
import traceback
import tty
from typing import Optional, TextIO, Tuple

from rich.console import Console

from .config import EditorConfig
from .grid import Grid, create_grid, iter_cells
from .input_handler import InputHandler, PointerBus
from .models import PointerEvent, PointerKind
from .paint_session import PaintSession
from .palette import Palette, resolve_visual
from .renderer import Renderer
from .serializer import serialize

# ANSI escape codes
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
# Press/release, any-motion and SGR encoding. With reporting on, right-clicks
# come to us instead of opening the terminal's context menu.
ENABLE_MOUSE = "\033[?1000h\033[?1003h\033[?1006h"
DISABLE_MOUSE = "\033[?1000l\033[?1003l\033[?1006l"

TITLE_Y = 0
PALETTE_Y = 2
GRID_TOP = 4
LEFT = 1


class LevelEditor:
    def __init__(self, config: Optional[EditorConfig] = None, out: Optional[TextIO] = None):
        self.config = config or EditorConfig()
        self.out = out if out is not None else sys.stdout

        self.palette = Palette(self.config.tile_types, self.config.sprites)
        self.session = PaintSession(
            create_grid(self.config.rows, self.config.cols), self.palette
        )
        self.pointer_bus = PointerBus()
        self.input_handler = InputHandler(self)

        self.status_message = "Left-drag paints, right-drag erases. Q quits."
        self._export_grid: Optional[Grid] = None
        self._export_text = ""

        size = shutil.get_terminal_size((80, 40))
        self.renderer = Renderer(
            max(size.columns, self.layout_width()),
            max(size.lines, self.layout_height()),
            self.out,
        )
        self.original_settings = None

    # Layout

    @property
    def grid(self) -> Grid:
        return self.session.grid

    def layout_width(self) -> int:
        cw = self.config.cell_width
        return max(
            LEFT + self.config.cols * cw + 2,
            LEFT + len(self.palette.tiles) * (cw + 1),
            self.config.cols + 4,
        )

    def layout_height(self) -> int:
        return self.export_top() + self.config.rows + 2

    def grid_origin(self) -> Tuple[int, int]:
        """Terminal position of cell (0, 0)."""
        return LEFT + 1, GRID_TOP + 1

    def export_top(self) -> int:
        return GRID_TOP + self.config.rows + 3

    def cell_at(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        gx, gy = self.grid_origin()
        if x < gx or y < gy:
            return None
        r, c = y - gy, (x - gx) // self.config.cell_width
        if r < self.config.rows and c < self.config.cols:
            return r, c
        return None

    def palette_x(self, idx: int) -> int:
        return LEFT + idx * (self.config.cell_width + 1)

    def palette_at(self, x: int, y: int) -> Optional[str]:
        if y != PALETTE_Y:
            return None
        for idx, symbol in enumerate(self.palette.tiles):
            px = self.palette_x(idx)
            if px <= x < px + self.config.cell_width:
                return symbol
        return None

    # State

    def select_brush(self, symbol: str):
        self.palette.select_brush(symbol)
        label = self.palette.label_for(symbol) or "floor"
        self.status_message = f"Brush: {label}"

    def export_text(self) -> str:
        # Grids are replaced on change, so identity tells us when to redo it
        if self.grid is not self._export_grid:
            self._export_grid = self.grid
            self._export_text = serialize(self.grid)
        return self._export_text

    def _on_pointer_up(self, event: PointerEvent):
        self.session.pointer_up()

    # Drawing

    def render(self):
        self.renderer.clear()
        self.renderer.draw_text(LEFT, TITLE_Y, self.config.title, (255, 180, 0))
        self._render_palette()
        self._render_grid()
        self._render_export()
        self._render_status()
        self.renderer.flush()

    def _visual(self, symbol: str):
        return resolve_visual(
            symbol,
            self.palette.sprites,
            self.config.empty_colour,
            self.config.missing_colour,
            self.config.sprite_colour,
        )

    def _render_palette(self):
        cw = self.config.cell_width
        for idx, symbol in enumerate(self.palette.tiles):
            px = self.palette_x(idx)
            visual = self._visual(symbol)
            glyph = self.palette.label_for(symbol) or " "
            self.renderer.draw_tile(px, PALETTE_Y, glyph, cw, visual.fg_color, visual.bg_color)
            if symbol == self.palette.brush:
                self.renderer.draw_text(px, PALETTE_Y + 1, "^" * cw, (255, 255, 0))

    def _render_grid(self):
        cw = self.config.cell_width
        gx, gy = self.grid_origin()
        self.renderer.draw_box(LEFT, GRID_TOP, self.config.cols * cw + 2, self.config.rows + 2)
        for r, c, symbol in iter_cells(self.grid):
            visual = self._visual(symbol)
            self.renderer.draw_tile(
                gx + c * cw, gy + r, visual.glyph, cw, visual.fg_color, visual.bg_color
            )

    def _render_export(self):
        y = self.export_top()
        self.renderer.draw_text(LEFT, y, "Level string", (255, 180, 0))
        for i, line in enumerate(self.export_text().split("\n")):
            self.renderer.draw_text(LEFT, y + 1 + i, line, (200, 200, 200))

    def _render_status(self):
        action = self.session.action.name if self.session.is_drawing else "IDLE"
        hover = self.input_handler.hover_cell
        pos = f"{hover[0]},{hover[1]}" if hover else "-"
        brush = self.palette.label_for(self.palette.brush) or "floor"
        text = f" {self.status_message} | BRUSH: {brush} | {action} | CELL: {pos} "
        y = self.renderer.rows - 1
        self.renderer.draw_text(0, y, text.ljust(self.renderer.cols), (255, 255, 255), (40, 40, 50))

    # Terminal

    def setup_terminal(self):
        self.original_settings = termios.tcgetattr(sys.stdin)
        tty.setcbreak(sys.stdin)
        self.out.write(HIDE_CURSOR)
        self.out.write(ENABLE_MOUSE)
        self.out.write("\033[2J\033[H")
        self.out.flush()
        self.renderer.invalidate()

    def restore_terminal(self):
        self.out.write(DISABLE_MOUSE)
        if self.original_settings:
            termios.tcsetattr(sys.stdin, termios.TCSADRAIN, self.original_settings)
            self.original_settings = None
        self.out.write(SHOW_CURSOR)
        self.out.write("\033[2J\033[H")
        self.out.flush()

    def read_input(self, timeout: float = 0.02) -> str:
        """Read whatever the terminal has ready, so escape sequences arrive whole."""
        if select.select([sys.stdin], [], [], timeout) == ([sys.stdin], [], []):
            return os.read(sys.stdin.fileno(), 4096).decode("utf-8", errors="ignore")
        return ""

    def run(self):
        try:
            self.setup_terminal()
            with self.pointer_bus.listening(PointerKind.UP, self._on_pointer_up):
                while True:
                    self.render()
                    chunk = self.read_input()
                    if chunk and not self.input_handler.handle_input(chunk):
                        break
        except KeyboardInterrupt:
            pass
        finally:
            self.restore_terminal()

        print_level_string(self.export_text())


def print_level_string(text: str, console: Optional[Console] = None):
    console = console or Console()
    console.rule("Level string")
    console.print(text, markup=False, highlight=False)


def build_config(args) -> EditorConfig:
    config = EditorConfig.load_from_toml(args.config) if args.config else EditorConfig()
    overrides = {k: v for k, v in (("rows", args.rows), ("cols", args.cols)) if v is not None}
    if overrides:
        config = EditorConfig(**{**config.model_dump(), **overrides})
    return config


def main(argv=None):
    import argparse

    p = argparse.ArgumentParser(description="Tile level editor")
    p.add_argument("--config", help="Path to an editor TOML file")
    p.add_argument("-r", "--rows", type=int)
    p.add_argument("-c", "--cols", type=int)
    args = p.parse_args(argv)

    try:
        editor = LevelEditor(build_config(args))
    except ValueError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        editor.run()
    except Exception as e:
        with open("editor_debug.log", "w") as f:
            f.write(f"CRASH REPORT:\n{str(e)}\n\n{traceback.format_exc()}")
        print(f"An error occurred: {e}")
        print("See editor_debug.log for details.")
        sys.exit(1)


if __name__ == "__main__":
    main()
