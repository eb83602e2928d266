"""Project assembler.

Sequences the whole run for one ``ProjectConfig``:

    INIT -> ROOT_CONFIGURED -> BACKEND_GENERATED -> [FRONTEND_GENERATED]
         -> [ROOT_DEPENDENCIES_INSTALLED] -> DONE

with ``FAILED`` reachable from every state.  The bracketed states only exist
for full-stack projects.  Nothing is retried or rolled back: on failure the
partially generated tree is left for the user to remove before re-running.
"""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

from .config import ProjectConfig, Settings
from .errors import ScaffoldError, TransformationError
from .reporter import ConsoleReporter
from .scaffolder.catalog import SOURCE_DIRECTORIES, backend_files, root_files
from .scaffolder.frontend import (
    InsertStatus,
    patch_vite_config,
    rename_frontend_manifest,
    vite_template,
)
from .scaffolder.materializer import ensure_directories, materialize
from .scaffolder.plan import (
    AssemblyState,
    EnsureDirectories,
    GenerationPlan,
    RunAction,
    RunExternalCommand,
    Stage,
    Step,
    WriteFiles,
)
from .scaffolder.templates import TemplateRenderer
from .utils import load_json, run_streaming

#: ``async (command, cwd, reporter) -> None``; raises ``ProcessFailure``.
CommandRunner = Callable[[str, Path, ConsoleReporter], Awaitable[None]]


@dataclass
class AssemblyResult:
    """Outcome of :meth:`ProjectAssembler.run`."""

    project_root: Path
    state: AssemblyState = AssemblyState.INIT
    history: list[AssemblyState] = field(default_factory=lambda: [AssemblyState.INIT])
    failure: str | None = None
    warnings: list[str] = field(default_factory=list)
    elapsed: float = 0.0

    @property
    def success(self) -> bool:
        return self.state is AssemblyState.DONE


class ProjectAssembler:
    """Builds the generation plan for a project and executes it."""

    def __init__(
        self,
        config: ProjectConfig,
        settings: Settings | None = None,
        reporter: ConsoleReporter | None = None,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config
        self.settings = settings or Settings()
        self.reporter = reporter or ConsoleReporter()
        self.runner = runner or run_streaming
        self.renderer = TemplateRenderer()
        self._result: AssemblyResult | None = None

    # -- Paths ---------------------------------------------------------------

    @property
    def project_root(self) -> Path:
        return self.settings.output_dir / self.config.name

    @property
    def backend_root(self) -> Path:
        if self.config.is_full_stack:
            return self.project_root / "backend"
        return self.project_root

    @property
    def frontend_root(self) -> Path:
        return self.project_root / "frontend"

    # -- Planning ------------------------------------------------------------

    def build_plan(self) -> GenerationPlan:
        """Lay out every stage for the configured project.

        Catalog content is rendered here, so a template problem surfaces
        before anything touches the disk.
        """
        plan = GenerationPlan(project_root=self.project_root)
        install = self.settings.install_command

        root_stage = plan.add(
            Stage("Creating project structure", AssemblyState.ROOT_CONFIGURED)
        )
        root_stage.steps.append(EnsureDirectories(self.project_root))
        if self.config.is_full_stack:
            root_stage.steps.append(
                WriteFiles(self.project_root, root_files(self.config, self.settings, self.renderer))
            )

        plan.add(
            Stage(
                "Generating backend",
                AssemblyState.BACKEND_GENERATED,
                [
                    EnsureDirectories(
                        self.backend_root, tuple(f"src/{d}" for d in SOURCE_DIRECTORIES)
                    ),
                    WriteFiles(
                        self.backend_root,
                        backend_files(self.config, self.settings, self.renderer),
                    ),
                    RunExternalCommand(install, self.backend_root),
                    RunAction("List backend dependencies", self._report_backend_dependencies),
                ],
            )
        )

        if not self.config.is_full_stack:
            return plan

        assert self.config.frontend is not None
        framework = self.config.frontend
        plan.add(
            Stage(
                f"Setting up {framework.value} frontend",
                AssemblyState.FRONTEND_GENERATED,
                [
                    EnsureDirectories(self.frontend_root),
                    RunExternalCommand(
                        self.settings.vite_command(vite_template(framework)), self.frontend_root
                    ),
                    RunExternalCommand(install, self.frontend_root),
                    RunAction("Add API proxy to Vite config", self._patch_proxy),
                    RunAction("Rename frontend package", self._rename_manifest),
                ],
            )
        )
        plan.add(
            Stage(
                "Installing root dependencies",
                AssemblyState.ROOT_DEPENDENCIES_INSTALLED,
                [RunExternalCommand(install, self.project_root)],
            )
        )
        return plan

    # -- Execution -----------------------------------------------------------

    async def run(self) -> AssemblyResult:
        """Execute the plan stage by stage.

        A ``ScaffoldError`` or ``OSError`` from any step stops the run and
        moves the result to ``FAILED``; it is reported, not re-raised.
        """
        started = time.monotonic()
        result = AssemblyResult(project_root=self.project_root)
        self._result = result

        try:
            plan = self.build_plan()
            total = len(plan.stages)
            for index, stage in enumerate(plan.stages, start=1):
                self.reporter.step(index, total, f"{stage.title}...")
                for step in stage.steps:
                    await self.execute(step)
                self._advance(result, stage.target)
            self._advance(result, AssemblyState.DONE)
        except (ScaffoldError, OSError) as exc:
            result.failure = str(exc)
            self._advance(result, AssemblyState.FAILED)
            self.reporter.error(f"Error creating project: {exc}")
            self.reporter.info(
                "Remove the partially generated directory and try again; "
                "nothing was rolled back."
            )
        finally:
            result.elapsed = time.monotonic() - started

        return result

    async def execute(self, step: Step) -> None:
        """Run a single plan step."""
        if isinstance(step, EnsureDirectories):
            await ensure_directories(step.root, step.paths)
        elif isinstance(step, WriteFiles):
            written = await materialize(step.root, step.files)
            self.reporter.success(f"Wrote {len(written)} file(s) in {step.root}")
        elif isinstance(step, RunExternalCommand):
            self.reporter.info(f"$ {step.command}")
            await self.runner(step.command, step.cwd, self.reporter)
        elif isinstance(step, RunAction):
            await step.action()
        else:
            raise TypeError(f"Unknown plan step: {step!r}")

    @staticmethod
    def _advance(result: AssemblyResult, state: AssemblyState) -> None:
        result.state = state
        result.history.append(state)

    # -- Actions -------------------------------------------------------------

    async def _report_backend_dependencies(self) -> None:
        manifest = await asyncio.to_thread(load_json, self.backend_root / "package.json")
        self.reporter.success("Backend dependencies installed successfully!")
        self.reporter.bullet_list("Installed backend dependencies:", manifest.get("dependencies", {}))
        self.reporter.bullet_list(
            "Installed backend devDependencies:", manifest.get("devDependencies", {})
        )

    async def _patch_proxy(self) -> None:
        try:
            insertion = await patch_vite_config(
                self.frontend_root, self.settings.backend_url, self.settings.api_prefix
            )
        except TransformationError as exc:
            self.reporter.warn(f"Warning: {exc}. Add the dev-server proxy manually.")
            if self._result is not None:
                self._result.warnings.append(str(exc))
            return
        if insertion.status is InsertStatus.ALREADY_PRESENT:
            self.reporter.info("Vite config already proxies the API; left unchanged.")
        else:
            self.reporter.success(
                f"Proxying {self.settings.api_prefix} to {self.settings.backend_url}"
            )

    async def _rename_manifest(self) -> None:
        try:
            await rename_frontend_manifest(self.frontend_root, self.config.frontend_package_name)
        except json.JSONDecodeError as exc:
            raise TransformationError(
                self.frontend_root / "package.json", f"invalid JSON ({exc.msg})"
            ) from exc
        self.reporter.success("Frontend setup completed successfully")
