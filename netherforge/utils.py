"""Shared utility functions for netherforge.

Provides async command execution, duration formatting and Rich-based console
output and progress reporting.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table
from rich.text import Text

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously and wait for it to exit.

    Args:
        cmd: Executable followed by its arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
            ``None`` waits indefinitely.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timed-out command
        returns ``-1`` and a message on stderr.

    Raises:
        OSError: If the executable cannot be started (e.g. not on ``PATH``).
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format the wall-clock time of a scaffold run for the summary table.

    Runs under a minute keep one decimal (``"3.7s"``); longer runs drop it
    (``"1m 5s"``, ``"1h 1m 1s"``).  Negative input reads as ``"0.0s"``.
    """
    seconds = max(seconds, 0.0)
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(int(minutes), 60)

    if not hours and not minutes:
        return f"{secs:.1f}s"
    if not hours:
        return f"{minutes}m {int(secs)}s"
    return f"{hours}h {minutes}m {int(secs)}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print the end-of-run summary as a two-column table.

    Values are shown verbatim: paths and package ids may contain square
    brackets, so they are never interpreted as Rich markup.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Field", style="dim", no_wrap=True)
    table.add_column("Value", overflow="fold")

    for key, value in data.items():
        table.add_row(key, Text(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green message.  *message* may hold markup, so callers escape user text."""
    console.print(message, style="bold green")


def print_error(message: str) -> None:
    console.print(message, style="bold red")


def print_warning(message: str) -> None:
    console.print(message, style="bold yellow")


def create_progress() -> Progress:
    """Spinner display for the scaffold steps (structure, files, packages, build).

    ``dotnet`` commands can run for a while with no output, so each step
    shows its elapsed time.  Use as a context manager.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
    )
