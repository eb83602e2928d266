"""Exception hierarchy for the scaffolder.

Everything the assembler knows how to report derives from ``ScaffoldError``.
``DuplicatePathError`` is deliberately *not* part of that family: it signals
a bug in a catalog and is left to propagate.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for recoverable generation failures."""


class InvalidChoiceError(ScaffoldError):
    """An answer fell outside the fixed choice set of a question."""

    def __init__(self, question: str, value: str, choices: list[str]) -> None:
        self.question = question
        self.value = value
        self.choices = choices
        super().__init__(
            f"Invalid answer {value!r} for {question}; expected one of: {', '.join(choices)}"
        )


class ProcessFailure(ScaffoldError):
    """An external command exited with a non-zero status."""

    def __init__(self, exit_code: int, command: str) -> None:
        self.exit_code = exit_code
        self.command = command
        super().__init__(f"Process exited with code {exit_code}: {command}")


class TransformationError(ScaffoldError):
    """A generated file could not be edited in place."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not update {self.path.name}: {reason}")


class FilesystemError(ScaffoldError):
    """Creating a directory or writing a file failed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Filesystem error at {self.path}: {cause}")


class DuplicatePathError(ValueError):
    """Two file entries in one generation pass share a relative path."""

    def __init__(self, relative_path: str) -> None:
        self.relative_path = relative_path
        super().__init__(f"Duplicate file entry: {relative_path}")
