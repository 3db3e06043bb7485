"""Shared pytest fixtures for the netherforge test suite.

Provides reusable fixtures for:
- Settings with placeholder blockchain defaults
- A fake ``dotnet`` toolchain that records calls instead of spawning processes
- Scaffold requests rooted in a temporary directory
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from netherforge.config import Settings
from netherforge.scaffolder import CommandResult, DotnetToolchain, ScaffoldRequest


def _command_result(args: list[str], returncode: int = 0, stderr: str = "") -> CommandResult:
    """Build a ``CommandResult`` as ``DotnetToolchain`` would return it."""
    return CommandResult(command=["dotnet", *args], returncode=returncode, stdout="", stderr=stderr)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return Settings()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure NETHERFORGE_* variables from the developer shell never leak in."""
    import os

    for key in list(os.environ):
        if key.startswith("NETHERFORGE_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Toolchain
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_toolchain() -> DotnetToolchain:
    """A ``DotnetToolchain`` whose commands succeed without running anything.

    ``add_package`` and ``build`` are ``AsyncMock`` objects, so tests can
    inspect ``await_args_list`` or swap in a different ``return_value`` /
    ``side_effect``.
    """
    toolchain = DotnetToolchain()
    toolchain.add_package = AsyncMock(
        side_effect=lambda root, package: _command_result(["add", "package", package])
    )
    toolchain.build = AsyncMock(return_value=_command_result(["build"]))
    return toolchain


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@pytest.fixture
def demo_request(tmp_path: Path) -> ScaffoldRequest:
    """Scaffold request for ``DemoApp`` inside the pytest temp directory."""
    return ScaffoldRequest(app_name="DemoApp", output_dir=tmp_path)


@pytest.fixture
def command_result():
    """Factory for ``CommandResult`` objects: ``command_result(["build"], 1)``."""
    return _command_result
