"""Render published object snapshots into HTML blocks: covers, icons, dividers, layouts, files and bookmarks."""

__version__ = "0.1.0"