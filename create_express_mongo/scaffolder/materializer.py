"""Writes catalog output to disk.

Writes are plain overwrites with no transaction around them: when a write
fails halfway, the files written so far stay where they are.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import NamedTuple

from ..errors import DuplicatePathError, FilesystemError


class FileEntry(NamedTuple):
    relative_path: str
    content: str


FileSet = Mapping[str, str] | Iterable[FileEntry]


def as_entries(files: FileSet) -> list[FileEntry]:
    """Normalise a mapping or an entry iterable, rejecting repeated paths."""
    if isinstance(files, Mapping):
        return [FileEntry(path, content) for path, content in files.items()]

    seen: set[str] = set()
    entries: list[FileEntry] = []
    for entry in files:
        entry = FileEntry(*entry)
        if entry.relative_path in seen:
            raise DuplicatePathError(entry.relative_path)
        seen.add(entry.relative_path)
        entries.append(entry)
    return entries


async def materialize(root: str | Path, files: FileSet) -> list[Path]:
    """Write every entry below *root*, creating parent directories first.

    Existing files are overwritten.

    Returns:
        The written paths, in entry order.

    Raises:
        DuplicatePathError: If two entries share a relative path.
        FilesystemError: If a directory or file cannot be created.
    """
    base = Path(root)
    written: list[Path] = []
    for entry in as_entries(files):
        target = base / entry.relative_path
        try:
            await asyncio.to_thread(_write_file, target, entry.content)
        except OSError as exc:
            raise FilesystemError(target, exc) from exc
        written.append(target)
    return written


async def ensure_directories(root: str | Path, relative_paths: Iterable[str] = ()) -> list[Path]:
    """Create *root* and each relative directory below it; existing ones are fine."""
    base = Path(root)
    created: list[Path] = []
    for directory in [base, *(base / rel for rel in relative_paths)]:
        try:
            await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(directory, exc) from exc
        created.append(directory)
    return created


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
