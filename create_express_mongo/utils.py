"""Shared utility functions for create-express-mongo.

Provides streamed async command execution, JSON I/O for generated manifests
and a duration formatter for the final summary.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from .errors import ProcessFailure


class OutputSink(Protocol):
    def output(self, line: str) -> None: ...

    def error_output(self, line: str) -> None: ...


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_streaming(
    cmd: str,
    cwd: str | Path,
    sink: OutputSink,
    env: dict[str, str] | None = None,
) -> None:
    """Run a shell command, forwarding its output line by line.

    Stdout lines go to ``sink.output`` and stderr lines to
    ``sink.error_output`` as soon as they arrive.  There is no timeout: the
    call returns only when the child exits.

    Args:
        cmd: Shell command string.
        cwd: Working directory for the child process.
        sink: Receiver for the child's output (usually a ``ConsoleReporter``).
        env: Optional extra environment variables merged on top of ``os.environ``.

    Raises:
        ProcessFailure: If the command exits with a non-zero status.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = await asyncio.create_subprocess_shell(
        cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd),
        env=merged_env,
    )

    assert process.stdout is not None  # guaranteed by PIPE
    assert process.stderr is not None

    await asyncio.gather(
        _pump(process.stdout, sink.output),
        _pump(process.stderr, sink.error_output),
    )
    returncode = await process.wait()
    if returncode != 0:
        raise ProcessFailure(returncode, cmd)


async def _pump(stream: asyncio.StreamReader, emit: Callable[[str], None]) -> None:
    while True:
        line_bytes = await stream.readline()
        if not line_bytes:
            # EOF -- the child closed this stream.
            return
        emit(line_bytes.decode("utf-8", errors="replace").rstrip("\r\n"))


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        return {"_root": data}
    return data


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* the way npm writes manifests (two-space indent)."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    The write is performed in a worker thread to avoid blocking the event
    loop.
    """
    file_path = Path(path)
    content = dump_json(data)
    await asyncio.to_thread(file_path.write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Render the elapsed run time for the overview table.

    Under a minute keeps one decimal (``"3.7s"``); longer runs use whole
    seconds (``"1m 5s"``, ``"1h 1m 1s"``).
    """
    if seconds < 60:
        return f"{max(seconds, 0.0):.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    return f"{minutes}m {secs}s"
