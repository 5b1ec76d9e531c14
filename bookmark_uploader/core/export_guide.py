"""How to obtain a bookmark export from the common browsers."""

EXPORT_GUIDE = """\
Exporting bookmarks from your browser

Chrome / Edge / Brave
  1. Open the bookmark manager (Ctrl+Shift+O).
  2. Open the "..." menu in the top right corner.
  3. Choose "Export bookmarks" and save the .html file.

Firefox
  1. Open the Library (Ctrl+Shift+O).
  2. Choose "Import and Backup" > "Export Bookmarks to HTML...".

Safari
  1. File > Export > Bookmarks...

Notes
  - Folders become tags; folders without bookmarks are skipped.
  - Every bookmark gets at least the fallback tag.
  - Unless you have specific needs, the default settings are fine.
"""
