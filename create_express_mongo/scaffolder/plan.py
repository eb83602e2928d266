"""Generation plan: the ordered steps the assembler executes.

A plan is a list of ``Stage`` objects.  Each stage moves the assembler to one
state once all of its steps have completed.  Steps run strictly in order,
because a later step may read what an earlier one produced (for example the
Vite config is patched only after ``create vite`` wrote it).
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union


class AssemblyState(str, Enum):
    INIT = "init"
    ROOT_CONFIGURED = "root_configured"
    BACKEND_GENERATED = "backend_generated"
    FRONTEND_GENERATED = "frontend_generated"
    ROOT_DEPENDENCIES_INSTALLED = "root_dependencies_installed"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class EnsureDirectories:
    root: Path
    paths: tuple[str, ...] = ()

    def describe(self) -> str:
        return f"Ensure directories in {self.root}"


@dataclass(frozen=True)
class WriteFiles:
    root: Path
    files: dict[str, str]

    def describe(self) -> str:
        return f"Write {len(self.files)} file(s) to {self.root}"


@dataclass(frozen=True)
class RunExternalCommand:
    command: str
    cwd: Path

    def describe(self) -> str:
        return f"Run `{self.command}` in {self.cwd}"


@dataclass(frozen=True)
class RunAction:
    """An awaitable callback, e.g. editing a file an earlier command produced."""

    description: str
    action: Callable[[], Awaitable[None]] = field(compare=False)

    def describe(self) -> str:
        return self.description


Step = Union[EnsureDirectories, WriteFiles, RunExternalCommand, RunAction]


@dataclass
class Stage:
    """A titled group of steps that reaches ``target`` when it completes."""

    title: str
    target: AssemblyState
    steps: list[Step] = field(default_factory=list)

    def commands(self) -> list[str]:
        return [s.command for s in self.steps if isinstance(s, RunExternalCommand)]


@dataclass
class GenerationPlan:
    project_root: Path
    stages: list[Stage] = field(default_factory=list)

    def add(self, stage: Stage) -> Stage:
        self.stages.append(stage)
        return stage

    @property
    def targets(self) -> list[AssemblyState]:
        return [stage.target for stage in self.stages]

    def commands(self) -> list[str]:
        """Every external command in execution order."""
        return [cmd for stage in self.stages for cmd in stage.commands()]
