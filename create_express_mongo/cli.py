"""Command-line entry point.

Usage::

    create-express-mongo            # asks for the project name
    create-express-mongo my-app
    python -m create_express_mongo my-app

Settings such as the package manager come from ``CEM_*`` environment
variables (see ``Settings.from_env``); there are no option flags.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from rich.console import Console
from rich.markup import escape

from . import __version__
from .assembler import AssemblyResult, ProjectAssembler
from .config import ProjectConfig, Settings
from .errors import ScaffoldError
from .reporter import ConsoleReporter
from .resolver import Prompter, RichPrompter, resolve
from .utils import format_duration


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-express-mongo",
        description=(
            f"create-express-mongo {__version__} -- scaffold an Express + MongoDB "
            "backend, optionally with a Vite frontend"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Environment:\n"
            "  CEM_OUTPUT_DIR, CEM_PACKAGE_MANAGER, CEM_BACKEND_PORT,\n"
            "  CEM_MONGO_HOST, CEM_MONGO_PORT, CEM_VITE_PACKAGE\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Name of the project directory to create (asked interactively if omitted)",
    )
    return parser


def print_overview(
    reporter: ConsoleReporter, config: ProjectConfig, settings: Settings, result: AssemblyResult
) -> None:
    """Print the success panel, the project overview and the next steps."""
    pm = settings.package_manager
    kind = "Full-Stack" if config.is_full_stack else "Backend"
    reporter.success(f"SUCCESS! {kind} project created successfully!")
    reporter.rule()

    overview = {"Project Type": config.mode.value}
    if config.is_full_stack:
        assert config.frontend is not None
        overview["Backend"] = config.language.value
        overview["Frontend"] = f"{config.frontend.value} with Vite"
    else:
        overview["Language"] = config.language.value
        overview["Framework"] = "Express.js"
    overview["Database"] = "MongoDB"
    overview["Location"] = str(result.project_root)
    overview["Duration"] = format_duration(result.elapsed)
    reporter.summary_table(overview, title="Project Overview")

    steps = [f"cd {config.name}"]
    if config.is_full_stack:
        steps += [
            f"{pm} run dev            # Run both frontend and backend",
            f"{pm} run dev:frontend   # Run only the frontend",
            f"{pm} run dev:backend    # Run only the backend",
        ]
    else:
        steps.append(f"{pm} run dev")
        if config.is_typed:
            steps.append(f"{pm} run build          # Compile TypeScript to JavaScript")

    reporter.console.print("[bold blue]Next steps:[/bold blue]")
    for number, step in enumerate(steps, start=1):
        reporter.console.print(f"  [cyan]{number}.[/cyan] {escape(step)}")
    reporter.success("Happy coding!")


def run(
    argv: list[str] | None = None,
    prompter: Prompter | None = None,
    console: Console | None = None,
) -> AssemblyResult | None:
    """Parse arguments, resolve the configuration and assemble the project.

    Returns the assembly result (``None`` when aborted before assembly) so
    callers and tests can inspect it.  Failures are reported on the console
    and do not change the exit status.
    """
    args = build_parser().parse_args(argv)
    reporter = ConsoleReporter(console)
    reporter.banner("Welcome to create-express-mongo", f"Version {__version__}")

    try:
        settings = Settings.from_env()
        config = resolve(args.project_name, prompter or RichPrompter(reporter.console))
    except KeyboardInterrupt:
        reporter.error("Aborted.")
        sys.exit(130)
    except (ValueError, ScaffoldError) as exc:
        # Malformed CEM_* values or an answer the resolver could not map.
        reporter.error(f"Error creating project: {exc}")
        return None

    reporter.info(
        f"Setting up {'full-stack' if config.is_full_stack else 'backend-only'} "
        f"project: {config.name}"
    )
    reporter.rule()

    try:
        result = asyncio.run(ProjectAssembler(config, settings, reporter).run())
    except KeyboardInterrupt:
        reporter.error("Aborted.")
        sys.exit(130)

    if result.success:
        print_overview(reporter, config, settings, result)
    else:
        reporter.error("Please report this issue on GitHub or try again.")
    return result


def main() -> None:
    """Console-script entry point for ``create-express-mongo``."""
    run()


if __name__ == "__main__":
    main()
