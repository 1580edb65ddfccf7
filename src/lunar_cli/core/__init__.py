"""Core layer — command contract, argument primitives and the registry.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Diagnostics go through :mod:`logging` only.
"""

from lunar_cli.core.command import Command, CommandMeta, command, command_meta
from lunar_cli.core.models import (
    CommandEntry,
    CommandRow,
    Resolution,
    ResolutionKind,
    group_of,
)
from lunar_cli.core.protocols import BootstrapHook, CommandFactory, DefaultCommandFactory
from lunar_cli.core.registry import CommandRegistry, RegistryAware

__all__: list[str] = [
    "BootstrapHook",
    "Command",
    "CommandEntry",
    "CommandFactory",
    "CommandMeta",
    "CommandRegistry",
    "CommandRow",
    "DefaultCommandFactory",
    "RegistryAware",
    "Resolution",
    "ResolutionKind",
    "command",
    "command_meta",
    "group_of",
]
