"""netherforge configuration.

Typed settings for a scaffold run. All settings use Pydantic v2 models so they
are validated at construction time and can be overridden from environment
variables without boiler-plate.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

ZERO_ADDRESS = "0x" + "0" * 40
ZERO_PRIVATE_KEY = "0x" + "0" * 64

DEFAULT_PACKAGES: list[str] = [
    "Nethereum.Web3",
    "Nethereum.Contracts",
]

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class BlockchainDefaults(BaseModel):
    """Values written to the ``Blockchain`` section of ``appsettings.json``.

    The defaults are placeholders: well-formed, but they do not point at a
    deployed contract, so the generated app starts in demo mode.
    """

    node_url: str = Field(default="http://localhost:8545", pattern=r'^[^"\\\s]+$')
    contract_address: str = Field(default=ZERO_ADDRESS, pattern=r"^0x[0-9a-fA-F]{40}$")
    private_key: str = Field(default=ZERO_PRIVATE_KEY, pattern=r"^0x[0-9a-fA-F]{64}$")


class ToolchainConfig(BaseModel):
    """How the external ``dotnet`` toolchain is invoked."""

    dotnet_path: str = Field(default="dotnet", min_length=1)
    packages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PACKAGES),
        description="NuGet package ids added to the generated project, in order",
    )
    command_timeout: int | None = Field(
        default=None,
        ge=1,
        description="Per-command timeout in seconds; None waits indefinitely",
    )

    @field_validator("packages")
    @classmethod
    def _check_packages(cls, value: list[str]) -> list[str]:
        for package in value:
            if not package or package != package.strip() or " " in package:
                raise ValueError(f"Invalid package id: {package!r}")
        return value


class Settings(BaseModel):
    """Global settings for a scaffold run.

    Created once by the CLI entry point (usually via :meth:`from_env`) and
    passed to :class:`~netherforge.scaffolder.ProjectGenerator`.
    """

    target_framework: str = Field(default="net9.0", pattern=r"^net\d+\.\d+$")
    kestrel_port: int = Field(default=5050, ge=1, le=65535)
    fail_on_build_error: bool = Field(
        default=True,
        description="Treat a non-zero exit from `dotnet build` as a failed scaffold",
    )
    skip_build: bool = Field(default=False)
    blockchain: BlockchainDefaults = Field(default_factory=BlockchainDefaults)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    def template_context(self, app_name: str) -> dict[str, Any]:
        """Build the Jinja2 context used to render every project template."""
        return {
            "app_name": app_name,
            "target_framework": self.target_framework,
            "kestrel_port": self.kestrel_port,
            "blockchain": self.blockchain.model_dump(),
        }

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            NETHERFORGE_DOTNET, NETHERFORGE_PACKAGES, NETHERFORGE_COMMAND_TIMEOUT,
            NETHERFORGE_NODE_URL, NETHERFORGE_CONTRACT_ADDRESS,
            NETHERFORGE_PRIVATE_KEY, NETHERFORGE_SKIP_BUILD,
            NETHERFORGE_FAIL_ON_BUILD_ERROR.
        """
        blockchain_kwargs: dict[str, Any] = {}
        if os.environ.get("NETHERFORGE_NODE_URL"):
            blockchain_kwargs["node_url"] = os.environ["NETHERFORGE_NODE_URL"]
        if os.environ.get("NETHERFORGE_CONTRACT_ADDRESS"):
            blockchain_kwargs["contract_address"] = os.environ["NETHERFORGE_CONTRACT_ADDRESS"]
        if os.environ.get("NETHERFORGE_PRIVATE_KEY"):
            blockchain_kwargs["private_key"] = os.environ["NETHERFORGE_PRIVATE_KEY"]

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("NETHERFORGE_DOTNET"):
            toolchain_kwargs["dotnet_path"] = os.environ["NETHERFORGE_DOTNET"]
        if os.environ.get("NETHERFORGE_PACKAGES"):
            toolchain_kwargs["packages"] = [
                p.strip() for p in os.environ["NETHERFORGE_PACKAGES"].split(",") if p.strip()
            ]
        if os.environ.get("NETHERFORGE_COMMAND_TIMEOUT"):
            raw_timeout = os.environ["NETHERFORGE_COMMAND_TIMEOUT"]
            try:
                toolchain_kwargs["command_timeout"] = int(raw_timeout)
            except ValueError:
                raise ValueError(
                    f"NETHERFORGE_COMMAND_TIMEOUT must be a whole number of seconds, got {raw_timeout!r}"
                ) from None

        kwargs: dict[str, Any] = {}
        skip_build = _env_flag("NETHERFORGE_SKIP_BUILD")
        if skip_build is not None:
            kwargs["skip_build"] = skip_build
        fail_on_build_error = _env_flag("NETHERFORGE_FAIL_ON_BUILD_ERROR")
        if fail_on_build_error is not None:
            kwargs["fail_on_build_error"] = fail_on_build_error

        return cls(
            blockchain=BlockchainDefaults(**blockchain_kwargs),
            toolchain=ToolchainConfig(**toolchain_kwargs),
            **kwargs,
        )


def _env_flag(name: str) -> bool | None:
    """Read a boolean environment variable; ``None`` when unset or empty."""
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return None
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")
