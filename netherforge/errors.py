"""Exception hierarchy for netherforge."""

from __future__ import annotations


class NetherforgeError(Exception):
    """Base class for every error raised by netherforge."""


class UsageError(NetherforgeError):
    """Raised when the command line cannot be parsed."""


class ScaffoldError(NetherforgeError):
    """Raised when a scaffold run fails."""


class ProjectExistsError(ScaffoldError):
    """Raised when the target project directory already exists."""

    def __init__(self, app_name: str) -> None:
        self.app_name = app_name
        super().__init__(f"Directory '{app_name}' already exists.")


class ToolchainError(ScaffoldError):
    """Raised when an external toolchain command cannot be run."""

    def __init__(self, message: str, command: str = "") -> None:
        self.command = command
        super().__init__(message)


class BuildFailedError(ToolchainError):
    """Raised when ``dotnet build`` exits with a non-zero status."""

    def __init__(
        self,
        command: str,
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        detail = (stderr or stdout)[-2000:]
        message = f"Build failed (exit {returncode}): {command}"
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message, command=command)
