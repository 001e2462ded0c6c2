"""Small file-system helpers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def get_all_files_for_path(path: str | os.PathLike[str], extension: str | None = None) -> list[Path]:
    """Return every regular file below ``path``, searched recursively.

    When ``extension`` is given (including its dot, e.g. ``".json"``) only
    files with exactly that suffix are returned. Directories that cannot be
    read are skipped.
    """
    return list(_walk(Path(path), extension))


def _walk(directory: Path, extension: str | None):
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        entry_path = Path(entry.path)
        if entry.is_dir():
            yield from _walk(entry_path, extension)
        elif entry.is_file():
            if extension is None or entry_path.suffix == extension:
                logger.debug("Added file: %s", entry_path)
                yield entry_path


def read_file(file_path: str | os.PathLike[str]) -> str:
    """Return the file's text with its line breaks removed.

    Raises OSError if the file cannot be opened.
    """
    with open(file_path, encoding="utf-8") as handle:
        return "".join(line.rstrip("\n") for line in handle)