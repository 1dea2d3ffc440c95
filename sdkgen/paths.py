"""Anchor relative config paths at the current working directory."""

from __future__ import annotations

import os


def absolute_path(path: str | None) -> str | None:
    """Return *path* joined onto the cwd unless it is empty or already absolute."""
    if not path:
        return path
    if os.path.isabs(path):
        return path
    return os.path.join(os.getcwd(), path)
