import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from ..core.constants import PROJECT_ROOT_MARKERS, PROJECT_ROOT_MAX_LEVELS


def create_full_path(file_path: str) -> str:
    # Get the directory part of the file path
    directory = os.path.dirname(file_path)

    if directory and not os.path.exists(directory):
        logging.info(f"Creating directory '{directory}'")
        os.makedirs(directory, exist_ok=True)

    return file_path


def find_project_root(start: Optional[Path] = None,
                      markers: Sequence[str] = PROJECT_ROOT_MARKERS,
                      max_levels: int = PROJECT_ROOT_MAX_LEVELS) -> Path:
    """Walk up from ``start`` looking for a directory holding a project marker.

    Checks ``start`` and at most ``max_levels`` parents. Falls back to ``start``
    when nothing is found.
    """
    start = Path(start or Path.cwd()).resolve()
    candidate = start
    for _ in range(max_levels + 1):
        if any((candidate / marker).exists() for marker in markers):
            return candidate
        if candidate.parent == candidate:
            break
        candidate = candidate.parent
    return start


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Show only the first characters of a secret, for logs and status output."""
    if not value:
        return "<none>"
    if len(value) <= visible:
        return "*" * len(value)
    return f"{value[:visible]}{'*' * (len(value) - visible)}"
