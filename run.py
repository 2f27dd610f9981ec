#!/usr/bin/env python3
"""
Entry point for the pngmeta command line tool.

This script provides a simple way to run the tool from a checkout:
    python run.py read image.png

All configuration and command-line argument handling is delegated to pngmeta.main.cli_main().
"""

import sys

from pngmeta.main import cli_main

if __name__ == "__main__":
    sys.exit(cli_main())
