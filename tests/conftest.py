"""Shared pytest fixtures for the create-express-mongo test suite.

Provides reusable fixtures for:
- Settings pointing at a temporary output directory
- A capturing Rich console / reporter
- A scripted prompter standing in for interactive answers
- A fake command runner that imitates npm and ``create vite``
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from create_express_mongo.config import (
    FrontendFramework,
    LanguageVariant,
    ProjectConfig,
    ProjectMode,
    Settings,
)
from create_express_mongo.errors import ProcessFailure
from create_express_mongo.reporter import ConsoleReporter


VITE_CONFIG_JS = """\
import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'

// https://vite.dev/config/
export default defineConfig({
  plugins: [react()],
})
"""


# ---------------------------------------------------------------------------
# Console / reporter
# ---------------------------------------------------------------------------

@pytest.fixture
def console() -> Console:
    """Recording console; read it back with ``console.export_text()``."""
    return Console(record=True, width=200, force_terminal=False, color_system=None)


@pytest.fixture
def reporter(console: Console) -> ConsoleReporter:
    return ConsoleReporter(console)


# ---------------------------------------------------------------------------
# Settings / configs
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(output_dir=tmp_path)


@pytest.fixture
def js_backend() -> ProjectConfig:
    return ProjectConfig(name="demo", mode=ProjectMode.BACKEND_ONLY, language=LanguageVariant.JAVASCRIPT)


@pytest.fixture
def ts_backend() -> ProjectConfig:
    return ProjectConfig(name="Demo App", mode=ProjectMode.BACKEND_ONLY, language=LanguageVariant.TYPESCRIPT)


@pytest.fixture
def react_fullstack() -> ProjectConfig:
    return ProjectConfig(
        name="shop",
        mode=ProjectMode.FULL_STACK,
        language=LanguageVariant.JAVASCRIPT,
        frontend=FrontendFramework.REACT,
    )


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------

class ScriptedPrompter:
    """Answers questions from a dict keyed by question text.

    Questions without a scripted answer get the offered default.  Every
    question asked is recorded in ``asked``.
    """

    def __init__(self, answers: dict[str, str] | None = None) -> None:
        self.answers = answers or {}
        self.asked: list[str] = []

    def ask_text(self, message: str) -> str:
        self.asked.append(message)
        return self.answers.get(message, "")

    def ask_choice(self, message: str, choices: list[str], default: str) -> str:
        self.asked.append(message)
        return self.answers.get(message, default)


@pytest.fixture
def scripted_prompter():
    """Factory: ``scripted_prompter({question: answer})``."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Command runner
# ---------------------------------------------------------------------------

class FakeRunner:
    """Stands in for ``run_streaming``.

    Records ``(command, cwd)`` pairs.  ``create vite`` writes a minimal Vite
    project (config + manifest) into *cwd*.  Any command containing
    ``fail_on`` raises ``ProcessFailure`` with ``exit_code``.
    """

    def __init__(
        self,
        fail_on: str | None = None,
        exit_code: int = 1,
        vite_config: str | None = VITE_CONFIG_JS,
        vite_manifest: dict[str, Any] | None = None,
    ) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.fail_on = fail_on
        self.exit_code = exit_code
        self.vite_config = vite_config
        self.vite_manifest = vite_manifest or {"name": "vite-project", "private": True, "version": "0.0.0"}

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    async def __call__(self, command: str, cwd: Path, reporter: Any) -> None:
        self.calls.append((command, Path(cwd)))
        if self.fail_on and self.fail_on in command:
            raise ProcessFailure(self.exit_code, command)
        if " create " in f" {command} ":
            if self.vite_config is not None:
                (Path(cwd) / "vite.config.js").write_text(self.vite_config, encoding="utf-8")
            (Path(cwd) / "package.json").write_text(json.dumps(self.vite_manifest), encoding="utf-8")
        reporter.output(f"ran {command}")


@pytest.fixture
def fake_runner():
    """Factory for ``FakeRunner`` instances."""
    return FakeRunner
