"""netherforge -- scaffold Blazor Server applications backed by Ethereum contracts.

Generates a complete .NET project (Solidity contract, ABI, Nethereum services,
Razor pages, configuration) for a given application name, then restores the
Nethereum packages and builds it with the ``dotnet`` toolchain.

Usage::

    netherforge scaffold MyWebApp
"""

__version__ = "0.1.0"
