"""
Tile palette management for the Level Editor.
Holds the closed tile alphabet, the sprite mapping and the current brush.
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple
from .models import TileVisual

EMPTY = "."

TILE_TYPES = [".", "w", "h", "p", "k", "d", "<", "^", ">", "v", "c", "r"]

# None = blank floor
TILE_SPRITES: Dict[str, Optional[str]] = {
    ".": None,
    "w": "/w.png",
    "h": "/h.png",
    "p": "/p.png",
    "k": "/k.png",
    "d": "/d.png",
    "<": "/left.png",
    "^": "/up.png",
    ">": "/right.png",
    "v": "/down.png",
    # Uppercase alias of the conveyor; renders and serializes, never offered as a brush
    "V": "/down.png",
    "c": "/c.png",
    "r": "/r.png",
}

# Number row shortcuts, in palette order
BRUSH_KEYS = "1234567890-="

EMPTY_COLOUR = (0, 0, 0)
MISSING_COLOUR = (255, 0, 255)
SPRITE_COLOUR = (60, 60, 75)
GLYPH_COLOUR = (230, 230, 230)


class Palette:
    def __init__(
        self,
        tile_types: Iterable[str] = TILE_TYPES,
        sprites: Mapping[str, Optional[str]] = TILE_SPRITES,
        brush: str = EMPTY,
    ):
        self.tiles: Tuple[str, ...] = tuple(tile_types)
        self.sprites: Dict[str, Optional[str]] = dict(sprites)
        # Hidden symbols are valid cell contents but have no palette button
        self.hidden: Tuple[str, ...] = tuple(
            s for s in self.sprites if s not in self.tiles
        )
        self.brush = brush
        assert self.is_known(brush), f"unknown tile symbol {brush!r}"

    def is_known(self, symbol: str) -> bool:
        return symbol in self.tiles or symbol in self.hidden

    def select_brush(self, symbol: str):
        assert self.is_known(symbol), f"unknown tile symbol {symbol!r}"
        self.brush = symbol

    def brush_for_key(self, key: str) -> Optional[str]:
        """Map a number-row key to the palette symbol at that position."""
        if len(key) != 1 or key not in BRUSH_KEYS:
            return None
        idx = BRUSH_KEYS.index(key)
        if idx < len(self.tiles):
            return self.tiles[idx]
        return None

    def sprite_for(self, symbol: str) -> Optional[str]:
        return self.sprites.get(symbol)

    def label_for(self, symbol: str) -> str:
        """Textual fallback used for palette buttons: blank floor, else the symbol."""
        return "" if symbol == EMPTY else symbol


def resolve_visual(
    symbol: str,
    sprites: Mapping[str, Optional[str]],
    empty_colour: Tuple[int, int, int] = EMPTY_COLOUR,
    missing_colour: Tuple[int, int, int] = MISSING_COLOUR,
    sprite_colour: Tuple[int, int, int] = SPRITE_COLOUR,
) -> TileVisual:
    """
    Choose how a cell is drawn. A terminal cannot show the sprite image,
    so a mapped tile shows its glyph on the sprite colour; unmapped tiles
    fall back to the missing colour, and the floor stays blank.
    """
    if sprites.get(symbol):
        return TileVisual(symbol, GLYPH_COLOUR, sprite_colour)
    if symbol == EMPTY:
        return TileVisual(" ", GLYPH_COLOUR, empty_colour)
    return TileVisual(symbol, GLYPH_COLOUR, missing_colour)

