"""Remove previously generated SDK files before a fresh run."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable

logger = logging.getLogger(__name__)

GENERATED_EXTENSIONS = (".ts", ".js", ".d.ts")

# Files named base.* hold a user-supplied request implementation
# whenever request_lib is configured.
_BASE_PREFIX = "base."


def is_generated(name: str) -> bool:
    return name.endswith(GENERATED_EXTENSIONS)


def clear_generated(
    directory: str,
    ignore: Iterable[str] = (),
    custom_base: bool = False,
) -> list[str]:
    """Delete stale generated files directly inside *directory*.

    Returns the names that were removed. Subdirectories are not touched.
    """
    if not os.path.isdir(directory):
        return []

    ignored = set(ignore)
    removed = []
    for name in sorted(os.listdir(directory)):
        if not is_generated(name):
            continue
        if custom_base and name.startswith(_BASE_PREFIX):
            continue
        if name in ignored:
            continue
        file_path = os.path.join(directory, name)
        if file_path == name or not os.path.isfile(file_path):
            continue
        os.unlink(file_path)
        logger.debug("Removed stale file %s", file_path)
        removed.append(name)
    return removed
