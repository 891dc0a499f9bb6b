#!/usr/bin/env python3
"""
Level Editor Launcher
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from level_editor.editor import main

if __name__ == "__main__":
    main()
