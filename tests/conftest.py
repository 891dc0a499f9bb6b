"""
Pytest configuration and shared fixtures for the Level Editor tests.
"""

import io
import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from level_editor.config import EditorConfig
from level_editor.editor import LevelEditor
from level_editor.grid import create_grid
from level_editor.input_handler import PointerBus
from level_editor.paint_session import PaintSession
from level_editor.palette import Palette


@pytest.fixture
def palette():
    """A palette with the default tiles and the floor as brush."""
    return Palette()


@pytest.fixture
def empty_grid():
    """A 15x16 grid of floor tiles."""
    return create_grid(15, 16)


@pytest.fixture
def session(empty_grid, palette):
    """An idle paint session over an empty grid."""
    return PaintSession(empty_grid, palette)


@pytest.fixture
def pointer_bus():
    return PointerBus()


@pytest.fixture
def editor():
    """An editor writing to a buffer instead of the terminal."""
    return LevelEditor(EditorConfig(), out=io.StringIO())
