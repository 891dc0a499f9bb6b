"""
Configuration settings for the Level Editor.
"""

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from typing import Dict, List, Optional, Tuple
import toml
import os
import sys

from .palette import (
    EMPTY,
    EMPTY_COLOUR,
    MISSING_COLOUR,
    SPRITE_COLOUR,
    TILE_SPRITES,
    TILE_TYPES,
)


class EditorConfig(BaseModel):
    """Configuration settings for the editor."""

    title: str = "OCTOROQ LEVEL EDITOR"

    # Grid size, fixed for the lifetime of the editor
    rows: int = 15
    cols: int = 16

    # Tiles
    tile_types: List[str] = list(TILE_TYPES)
    sprites: Dict[str, Optional[str]] = dict(TILE_SPRITES)

    # Fallback colours
    empty_colour: Tuple[int, int, int] = EMPTY_COLOUR
    missing_colour: Tuple[int, int, int] = MISSING_COLOUR
    sprite_colour: Tuple[int, int, int] = SPRITE_COLOUR

    # Terminal columns per grid cell
    cell_width: int = 2

    model_config = ConfigDict(extra="allow")

    @field_validator("rows", "cols", "cell_width")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("tile_types")
    @classmethod
    def _single_chars(cls, v: List[str]) -> List[str]:
        for symbol in v:
            if len(symbol) != 1:
                raise ValueError(f"tile symbol {symbol!r} must be one character")
        if EMPTY not in v:
            raise ValueError(f"tile_types must include the empty tile {EMPTY!r}")
        return v

    @field_validator("sprites")
    @classmethod
    def _single_char_sprites(cls, v: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
        for symbol in v:
            if len(symbol) != 1:
                raise ValueError(f"sprite symbol {symbol!r} must be one character")
        return v

    @model_validator(mode="after")
    def _distinct_fallbacks(self) -> "EditorConfig":
        if tuple(self.empty_colour) == tuple(self.missing_colour):
            raise ValueError("empty_colour and missing_colour must differ")
        return self

    @classmethod
    def load_from_toml(cls, path: str = "editor.toml") -> "EditorConfig":
        """Load configuration from a TOML file."""
        if not os.path.exists(path):
            print(f"Warning: Config file {path} not found. Using defaults.")
            return cls()

        try:
            with open(path, "r") as f:
                data = toml.load(f)

            settings = data.get("editor", {})
            if "sprites" in data:
                # TOML has no null; an empty string means "no sprite"
                sprites = dict(TILE_SPRITES)
                sprites.update({k: (v or None) for k, v in data["sprites"].items()})
                settings["sprites"] = sprites

            return cls(**settings)
        except Exception as e:
            print(f"Error loading config {path}: {e}", file=sys.stderr)
            return cls()
