"""Tests for the command-line entry point (create_express_mongo.cli)."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from create_express_mongo.cli import build_parser, run
from create_express_mongo.resolver import FRONTEND_QUESTION, LANGUAGE_QUESTION, MODE_QUESTION, NAME_QUESTION
from create_express_mongo.scaffolder.plan import AssemblyState


@pytest.fixture
def env(tmp_path):
    with patch.dict("os.environ", {"CEM_OUTPUT_DIR": str(tmp_path)}, clear=False):
        yield tmp_path


class TestParser:
    @pytest.mark.unit
    def test_name_is_optional(self):
        assert build_parser().parse_args([]).project_name is None
        assert build_parser().parse_args(["my-app"]).project_name == "my-app"


class TestRun:
    @pytest.mark.unit
    def test_backend_only_run(self, env, console, scripted_prompter, fake_runner):
        runner = fake_runner()
        prompter = scripted_prompter()
        with patch("create_express_mongo.assembler.run_streaming", runner):
            result = run(["demo"], prompter=prompter, console=console)

        assert result is not None and result.success
        assert NAME_QUESTION not in prompter.asked
        assert FRONTEND_QUESTION not in prompter.asked
        assert (env / "demo" / "src" / "index.js").is_file()
        text = console.export_text()
        assert "Welcome to create-express-mongo" in text
        assert "Setting up backend-only project: demo" in text
        assert "Project Overview" in text
        assert "npm run dev" in text
        assert "Happy coding!" in text

    @pytest.mark.unit
    def test_asks_for_missing_name(self, env, console, scripted_prompter, fake_runner):
        prompter = scripted_prompter({NAME_QUESTION: "  api  "})
        with patch("create_express_mongo.assembler.run_streaming", fake_runner()):
            result = run([], prompter=prompter, console=console)
        assert prompter.asked[0] == NAME_QUESTION
        assert result.project_root == env / "api"

    @pytest.mark.unit
    def test_full_stack_run(self, env, console, scripted_prompter, fake_runner):
        prompter = scripted_prompter(
            {MODE_QUESTION: "Full-Stack", LANGUAGE_QUESTION: "TypeScript", FRONTEND_QUESTION: "Vue"}
        )
        runner = fake_runner()
        with patch("create_express_mongo.assembler.run_streaming", runner):
            result = run(["shop"], prompter=prompter, console=console)

        assert result.success
        assert "npm create vite@latest . -- --template vue" in runner.commands
        assert (env / "shop" / "backend" / "tsconfig.json").is_file()
        text = console.export_text()
        assert "Vue with Vite" in text
        assert "npm run dev:frontend" in text

    @pytest.mark.unit
    def test_package_manager_from_environment(self, env, console, scripted_prompter, fake_runner):
        runner = fake_runner()
        with patch.dict("os.environ", {"CEM_PACKAGE_MANAGER": "pnpm"}), patch(
            "create_express_mongo.assembler.run_streaming", runner
        ):
            run(["demo"], prompter=scripted_prompter(), console=console)
        assert runner.commands == ["pnpm install"]
        manifest = json.loads((env / "demo" / "package.json").read_text(encoding="utf-8"))
        assert manifest["scripts"]["dev"] == "nodemon src/index.js"

    @pytest.mark.unit
    def test_failure_is_reported_without_raising(self, env, console, scripted_prompter, fake_runner):
        with patch("create_express_mongo.assembler.run_streaming", fake_runner(fail_on="install", exit_code=1)):
            result = run(["demo"], prompter=scripted_prompter(), console=console)
        assert result.state is AssemblyState.FAILED
        text = console.export_text()
        assert "Process exited with code 1" in text
        assert "Please report this issue" in text
        assert "Project Overview" not in text

    @pytest.mark.unit
    def test_invalid_choice_aborts_before_assembly(self, env, console, scripted_prompter, fake_runner):
        runner = fake_runner()
        prompter = scripted_prompter({MODE_QUESTION: "Microservices"})
        with patch("create_express_mongo.assembler.run_streaming", runner):
            result = run(["demo"], prompter=prompter, console=console)
        assert result is None
        assert runner.calls == []
        assert not (env / "demo").exists()
        assert "Microservices" in console.export_text()

    @pytest.mark.unit
    def test_bad_environment_value(self, env, console, scripted_prompter):
        with patch.dict("os.environ", {"CEM_BACKEND_PORT": "not-a-port"}):
            assert run(["demo"], prompter=scripted_prompter(), console=console) is None
        assert "Error creating project" in console.export_text()

    @pytest.mark.unit
    def test_interrupt_exits_130(self, env, console):
        class Interrupting:
            def ask_text(self, message):
                raise KeyboardInterrupt

            def ask_choice(self, message, choices, default):
                raise KeyboardInterrupt

        with pytest.raises(SystemExit) as excinfo:
            run([], prompter=Interrupting(), console=console)
        assert excinfo.value.code == 130
