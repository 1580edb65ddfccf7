"""Built-in commands shipped with lunar-cli.

The built-in tier is an explicit list rather than a directory scan, so
the framework's own command set is fixed at import time.
"""

from lunar_cli.cli.commands.ansi_command import AnsiDemoCommand
from lunar_cli.cli.commands.base import BaseCommand, ConsoleCommandFactory
from lunar_cli.cli.commands.completion_command import CompletionCommand
from lunar_cli.cli.commands.hello_command import HelloCommand
from lunar_cli.cli.commands.tree_command import TreeCommand

BUILTIN_COMMANDS: tuple[type[BaseCommand], ...] = (
    CompletionCommand,
    TreeCommand,
    HelloCommand,
    AnsiDemoCommand,
)

__all__: list[str] = [
    "BUILTIN_COMMANDS",
    "AnsiDemoCommand",
    "BaseCommand",
    "CompletionCommand",
    "ConsoleCommandFactory",
    "HelloCommand",
    "TreeCommand",
]
