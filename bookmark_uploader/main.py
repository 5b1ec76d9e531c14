#!/usr/bin/env python3
"""
Main entry point for the Bookmark Uploader.

Used by the console script and when running the module directly.
"""

import sys

from bookmark_uploader.cli import main

if __name__ == "__main__":
    sys.exit(main())
