"""``dotnet`` toolchain invocation for generated projects.

Wraps the two external commands a scaffold run needs: ``dotnet add package``
(once per NuGet package) and ``dotnet build``.  Each command runs to
completion before the next one starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from netherforge.config import ToolchainConfig
from netherforge.errors import ToolchainError
from netherforge.utils import run_command


@dataclass
class CommandResult:
    """Outcome of one external command."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


@dataclass
class PackageInstall:
    """Outcome of adding one package.

    ``result`` is ``None`` when the installer could not be started at all;
    ``error`` then holds the reason.
    """

    package: str
    result: CommandResult | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.result is not None and self.result.ok


class DotnetToolchain:
    """Runs ``dotnet`` commands inside a generated project."""

    def __init__(self, config: ToolchainConfig | None = None) -> None:
        self.config = config or ToolchainConfig()

    async def add_package(self, project_root: Path, package: str) -> CommandResult:
        """Run ``dotnet add package <package>`` in *project_root*.

        Raises:
            ToolchainError: If ``dotnet`` cannot be started.
        """
        return await self._run(["add", "package", package], project_root)

    async def build(self, project_root: Path) -> CommandResult:
        """Run ``dotnet build`` in *project_root*.

        The exit code is returned, not checked; the caller decides whether a
        failed build is fatal.

        Raises:
            ToolchainError: If ``dotnet`` cannot be started.
        """
        return await self._run(["build"], project_root)

    async def _run(self, args: list[str], cwd: Path) -> CommandResult:
        cmd = [self.config.dotnet_path, *args]
        cmd_str = " ".join(cmd)
        try:
            returncode, stdout, stderr = await run_command(
                cmd, cwd=cwd, timeout=self.config.command_timeout
            )
        except OSError as exc:
            raise ToolchainError(
                f"Failed to start '{self.config.dotnet_path}': {exc}",
                command=cmd_str,
            ) from exc
        return CommandResult(command=cmd, returncode=returncode, stdout=stdout, stderr=stderr)
