#!/usr/bin/env python3
"""Launcher for ``plex-auto-upload`` when the package is installed but the console script is not on PATH."""
import sys

from plexup.cli import main

if __name__ == "__main__":
    sys.exit(main())
