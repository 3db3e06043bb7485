"""netherforge scaffolder -- generates Blazor Server + Nethereum projects.

This module takes a ``ScaffoldRequest`` (application name and destination
directory) and renders a complete .NET project: Solidity contract and ABI,
item models and services, Razor pages, layout, stylesheet and configuration.
It then adds the Nethereum packages and builds the project with ``dotnet``.

Quick usage::

    from netherforge.scaffolder import ProjectGenerator, ScaffoldRequest

    request = ScaffoldRequest(app_name="MyWebApp", output_dir="/tmp/output")
    result = await ProjectGenerator(request).generate()
"""

from netherforge.scaffolder.generator import (
    PROJECT_DIRECTORIES,
    PROJECT_FILES,
    ProjectGenerator,
    ScaffoldRequest,
    ScaffoldResult,
    is_valid_app_name,
)
from netherforge.scaffolder.templates import TemplateRenderer
from netherforge.scaffolder.toolchain import CommandResult, DotnetToolchain, PackageInstall

__all__ = [
    "PROJECT_DIRECTORIES",
    "PROJECT_FILES",
    "CommandResult",
    "DotnetToolchain",
    "PackageInstall",
    "ProjectGenerator",
    "ScaffoldRequest",
    "ScaffoldResult",
    "TemplateRenderer",
    "is_valid_app_name",
]
