"""
Bookmark Uploader

Turns a browser bookmark export into a category tree, lets the user choose
which folders to import and how folders become tags, and produces the
upload payload.
"""

__version__ = "1.0.0"
