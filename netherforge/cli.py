"""Command-line entry point for netherforge.

Recognises a single command::

    netherforge scaffold <appname> [--output DIR] [--skip-build]

Exit code 0 means the project was scaffolded; every failure exits with 1.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

from rich.markup import escape

from netherforge import __version__
from netherforge.config import Settings
from netherforge.errors import UsageError
from netherforge.scaffolder import ProjectGenerator, ScaffoldRequest, ScaffoldResult, is_valid_app_name
from netherforge.utils import (
    console,
    format_duration,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)

USAGE = "Usage: netherforge scaffold <appname>"


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _build_parser() -> _ArgumentParser:
    parser = _ArgumentParser(prog="netherforge", add_help=False)
    parser.add_argument("command", nargs="?")
    parser.add_argument("app_name", nargs="?")
    parser.add_argument("--output", "-o", default=None)
    parser.add_argument("--skip-build", action="store_true")
    parser.add_argument("--help", "-h", action="store_true")
    parser.add_argument("--version", action="store_true")
    return parser


def _print_usage() -> None:
    console.print("[bold]netherforge[/bold] - Scaffold Blazor Server CRUD apps backed by Ethereum smart contracts")
    console.print()
    console.print(USAGE)
    console.print()
    console.print("Options:")
    console.print("  -o, --output DIR  Create the project inside DIR (default: current directory)")
    console.print("  --skip-build      Do not run `dotnet build` after generating the project")
    console.print()
    console.print("Examples:")
    console.print("  netherforge scaffold MyWebApp")


def _fail(message: str) -> int:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")
    console.print(USAGE)
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        return _fail(str(exc))

    if args.help:
        _print_usage()
        return 0
    if args.version:
        console.print(f"netherforge {__version__}")
        return 0

    if args.command is None:
        console.print("[bold red]Error:[/bold red] No command specified.")
        console.print()
        _print_usage()
        return 1

    if args.command.lower() != "scaffold":
        return _fail(f"Unknown command '{args.command}'.")

    return _scaffold(args)


def _scaffold(args: argparse.Namespace) -> int:
    app_name = args.app_name
    if not app_name:
        return _fail("Application name not specified.")
    if not is_valid_app_name(app_name):
        console.print(
            f"[bold red]Error:[/bold red] '{escape(app_name)}' is not a valid application name."
        )
        console.print(
            "Application name must start with a letter or underscore and contain "
            "only letters, digits, underscores and dots."
        )
        return 1

    console.print(f"[cyan]Creating blockchain application:[/cyan] [yellow]{escape(app_name)}[/yellow]")
    console.print()

    started = time.monotonic()
    try:
        settings = Settings.from_env()
        if args.skip_build:
            settings = settings.model_copy(update={"skip_build": True})
        output_dir = Path(args.output) if args.output else Path.cwd()
        request = ScaffoldRequest(app_name=app_name, output_dir=output_dir)
        result = asyncio.run(ProjectGenerator(request, settings).generate())
    except Exception as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1

    _print_result(app_name, result, time.monotonic() - started)
    return 0


def _print_result(app_name: str, result: ScaffoldResult, elapsed: float) -> None:
    installed = len(result.packages) - len(result.failed_packages)
    if result.build is None:
        build_status = "skipped"
    elif result.build.ok:
        build_status = "succeeded"
    else:
        build_status = f"failed (exit {result.build.returncode})"

    console.print()
    print_summary_table(
        {
            "Project": str(result.project_root),
            "Files written": str(len(result.files)),
            "Packages": f"{installed} of {len(result.packages)} added",
            "Build": build_status,
            "Elapsed": format_duration(elapsed),
        },
        title="Scaffold Summary",
    )

    for install in result.failed_packages:
        reason = install.error or f"exit {install.result.returncode}"
        print_warning(f"Package {escape(install.package)} was not added ({escape(reason)}).")

    print_success(f"✓ Application '{escape(app_name)}' created successfully!")
    console.print()
    console.print("[yellow]Next steps:[/yellow]")
    console.print(f"  cd {escape(app_name)}")
    console.print("  dotnet run")
    console.print()
    console.print("[dim]Configure blockchain settings in appsettings.json[/dim]")


if __name__ == "__main__":
    sys.exit(main())
