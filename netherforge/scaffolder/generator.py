"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and generates a Blazor Server + Nethereum project
directory: Solidity contract and ABI, models, services, Razor pages, layout,
stylesheet and configuration.  It then adds the Nethereum packages and builds
the project with the ``dotnet`` toolchain.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import TemplateError
from pydantic import BaseModel, ConfigDict, Field, field_validator

from netherforge.config import Settings
from netherforge.errors import BuildFailedError, ProjectExistsError, ScaffoldError, ToolchainError
from netherforge.utils import create_progress

from .templates import TemplateRenderer
from .toolchain import CommandResult, DotnetToolchain, PackageInstall


# ---------------------------------------------------------------------------
# Project layout
# ---------------------------------------------------------------------------

PROJECT_DIRECTORIES: tuple[str, ...] = (
    "Contracts",
    "Services",
    "Models",
    "Pages",
    "Pages/Items",
    "Shared",
    "wwwroot",
    "wwwroot/css",
)

# (template, output path relative to the project root).  Output paths are
# formatted with the application name.
PROJECT_FILES: tuple[tuple[str, str], ...] = (
    ("project.csproj.j2", "{app_name}.csproj"),
    ("Contracts/ItemRegistry.sol.j2", "Contracts/ItemRegistry.sol"),
    ("Contracts/ItemRegistry.abi.j2", "Contracts/ItemRegistry.abi"),
    ("Models/Item.cs.j2", "Models/Item.cs"),
    ("Models/BlockchainConfig.cs.j2", "Models/BlockchainConfig.cs"),
    ("Services/IItemRegistryService.cs.j2", "Services/IItemRegistryService.cs"),
    ("Services/ItemRegistryService.cs.j2", "Services/ItemRegistryService.cs"),
    ("Services/MockItemRegistryService.cs.j2", "Services/MockItemRegistryService.cs"),
    ("Pages/_Host.cshtml.j2", "Pages/_Host.cshtml"),
    ("Pages/_Imports.razor.j2", "Pages/_Imports.razor"),
    ("Pages/Index.razor.j2", "Pages/Index.razor"),
    ("Pages/Items/Index.razor.j2", "Pages/Items/Index.razor"),
    ("Pages/Items/Create.razor.j2", "Pages/Items/Create.razor"),
    ("Pages/Items/Edit.razor.j2", "Pages/Items/Edit.razor"),
    ("Shared/MainLayout.razor.j2", "Shared/MainLayout.razor"),
    ("App.razor.j2", "App.razor"),
    ("Program.cs.j2", "Program.cs"),
    ("appsettings.json.j2", "appsettings.json"),
    ("appsettings.Development.json.j2", "appsettings.Development.json"),
    ("wwwroot/css/site.css.j2", "wwwroot/css/site.css"),
    ("README.md.j2", "README.md"),
)


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


def is_valid_app_name(name: str) -> bool:
    """Return ``True`` if *name* can be used as a .NET namespace and a directory.

    The name must be non-empty, start with a letter or underscore, and
    contain only letters, digits, underscores and dots.
    """
    if not name:
        return False
    if not (name[0].isalpha() or name[0] == "_"):
        return False
    return all(c.isalpha() or c.isdecimal() or c in "_." for c in name)


class ScaffoldRequest(BaseModel):
    """What to scaffold and where."""

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(..., description="Application name, also the root namespace")
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Parent directory the project folder is created in",
    )

    @field_validator("app_name")
    @classmethod
    def _check_app_name(cls, value: str) -> str:
        if not is_valid_app_name(value):
            raise ValueError(f"'{value}' is not a valid application name")
        return value

    @property
    def project_root(self) -> Path:
        return self.output_dir / self.app_name


@dataclass
class ScaffoldResult:
    """What a scaffold run produced."""

    project_root: Path
    files: list[Path] = field(default_factory=list)
    packages: list[PackageInstall] = field(default_factory=list)
    build: CommandResult | None = None

    @property
    def failed_packages(self) -> list[PackageInstall]:
        return [p for p in self.packages if not p.ok]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ScaffoldRequest``, generates a directory tree containing:
    - ``ItemRegistry`` Solidity contract and its ABI
    - ``Item`` / ``BlockchainConfig`` models
    - Nethereum-backed and in-memory item services behind one interface
    - Razor pages for listing, creating and editing items
    - Layout, router, stylesheet, ``Program.cs`` and ``appsettings`` files
    - A README describing how to deploy the contract

    Then runs ``dotnet add package`` for every configured package and
    ``dotnet build`` once, strictly one command at a time.
    """

    def __init__(
        self,
        request: ScaffoldRequest,
        settings: Settings | None = None,
        toolchain: DotnetToolchain | None = None,
    ) -> None:
        self.request = request
        self.settings = settings or Settings()
        self.renderer = TemplateRenderer()
        self.toolchain = toolchain or DotnetToolchain(self.settings.toolchain)

    # -- Public API --------------------------------------------------------

    async def generate(self) -> ScaffoldResult:
        """Generate, restore and build the project.

        Returns:
            A ``ScaffoldResult`` for the generated project root.

        Raises:
            ProjectExistsError: If the project directory already exists.
                Nothing is written in that case.
            ScaffoldError: If a directory or file cannot be written, or the
                build fails.  Files already written are left in place.
        """
        root = self.request.project_root
        await self._preflight(root)

        result = ScaffoldResult(project_root=root)
        context = self.settings.template_context(self.request.app_name)

        with create_progress() as progress:
            # 1. Create the skeleton directory structure
            task = progress.add_task("Creating project structure", total=1)
            await self._create_directory_structure(root)
            progress.update(task, completed=1)

            # 2. Render every project template
            task = progress.add_task("Generating files", total=len(PROJECT_FILES))
            result.files = await self._render_files(
                root, context, on_file=lambda: progress.advance(task)
            )

            # 3. Add NuGet packages
            packages = self.settings.toolchain.packages
            task = progress.add_task("Installing NuGet packages", total=len(packages) or 1)
            result.packages = await self._install_packages(
                root, on_package=lambda: progress.advance(task)
            )
            progress.update(task, completed=len(packages) or 1)

            # 4. Build
            if not self.settings.skip_build:
                task = progress.add_task("Building project", total=1)
                result.build = await self._build(root)
                progress.update(task, completed=1)

        return result

    # -- Steps -------------------------------------------------------------

    async def _preflight(self, root: Path) -> None:
        """Refuse to touch an existing project directory."""
        if await asyncio.to_thread(root.exists):
            raise ProjectExistsError(self.request.app_name)

    async def _create_directory_structure(self, root: Path) -> None:
        """Create the project root and its fixed subdirectories."""
        try:
            await asyncio.to_thread(root.mkdir, parents=True)
            for d in PROJECT_DIRECTORIES:
                await asyncio.to_thread((root / d).mkdir, parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldError(f"Could not create project directories: {exc}") from exc

    async def _render_files(
        self,
        root: Path,
        ctx: dict[str, Any],
        on_file: Callable[[], None] | None = None,
    ) -> list[Path]:
        """Render every entry of ``PROJECT_FILES`` under *root*."""
        written: list[Path] = []
        for template_name, output_name in PROJECT_FILES:
            out = root / output_name.format(app_name=self.request.app_name)
            try:
                path = await self.renderer.render_to_file(
                    template_name, out, ctx, overwrite=False
                )
            except OSError as exc:
                raise ScaffoldError(f"Could not write {out}: {exc}") from exc
            except TemplateError as exc:
                raise ScaffoldError(f"Could not render {template_name}: {exc}") from exc
            written.append(path)
            if on_file is not None:
                on_file()
        return written

    async def _install_packages(
        self, root: Path, on_package: Callable[[], None] | None = None
    ) -> list[PackageInstall]:
        """Add each configured package in turn.

        Exit codes are recorded but never fail the scaffold, and neither does
        a missing ``dotnet`` executable.  Failures are reported only through
        the returned ``PackageInstall`` records.
        """
        installs: list[PackageInstall] = []
        for package in self.settings.toolchain.packages:
            try:
                command_result = await self.toolchain.add_package(root, package)
            except ToolchainError as exc:
                installs.append(PackageInstall(package=package, error=str(exc)))
            else:
                installs.append(PackageInstall(package=package, result=command_result))
            if on_package is not None:
                on_package()
        return installs

    async def _build(self, root: Path) -> CommandResult:
        """Build the generated project.

        Raises:
            ToolchainError: If ``dotnet`` cannot be started.
            BuildFailedError: If the build exits non-zero and
                ``fail_on_build_error`` is set.
        """
        build = await self.toolchain.build(root)
        if not build.ok and self.settings.fail_on_build_error:
            raise BuildFailedError(
                build.command_line,
                build.returncode,
                stdout=build.stdout,
                stderr=build.stderr,
            )
        return build
