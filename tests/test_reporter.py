"""Unit tests for ConsoleReporter (create_express_mongo.reporter)."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from create_express_mongo.reporter import ConsoleReporter


class TestConsoleReporter:
    @pytest.mark.unit
    def test_messages_are_printed(self, reporter, console):
        reporter.info("info-msg")
        reporter.success("success-msg")
        reporter.warn("warn-msg")
        reporter.error("error-msg")
        text = console.export_text()
        for word in ("info-msg", "success-msg", "warn-msg", "error-msg"):
            assert word in text

    @pytest.mark.unit
    def test_markup_in_messages_is_escaped(self, reporter, console):
        reporter.output("[bold]not markup[/bold]")
        assert "[bold]not markup[/bold]" in console.export_text()

    @pytest.mark.unit
    def test_step_header(self, reporter, console):
        reporter.step(2, 4, "Generating backend...")
        assert "Step 2/4: Generating backend..." in console.export_text()

    @pytest.mark.unit
    def test_bullet_list_skips_empty(self, reporter, console):
        reporter.bullet_list("Installed:", [])
        assert console.export_text() == ""

    @pytest.mark.unit
    def test_bullet_list(self, reporter, console):
        reporter.bullet_list("Installed backend dependencies:", ["cors", "express"])
        text = console.export_text()
        assert "Installed backend dependencies:" in text
        assert "- cors" in text
        assert "- express" in text

    @pytest.mark.unit
    def test_summary_table(self, reporter, console):
        reporter.summary_table({"Database": "MongoDB"}, title="Project Overview")
        text = console.export_text()
        assert "Project Overview" in text
        assert "MongoDB" in text

    @pytest.mark.unit
    def test_banner(self, reporter, console):
        reporter.banner("Welcome", "Version 1.0.0")
        text = console.export_text()
        assert "Welcome" in text
        assert "Version 1.0.0" in text

    @pytest.mark.unit
    def test_quiet_console_is_silent(self):
        buffer = io.StringIO()
        reporter = ConsoleReporter(Console(file=buffer, quiet=True))
        reporter.info("hidden")
        reporter.error_output("hidden too")
        assert buffer.getvalue() == ""
