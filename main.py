#!/usr/bin/env python3
"""Single-suit mahjong hand checker - terminal CLI."""

import sys

from souzu.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
