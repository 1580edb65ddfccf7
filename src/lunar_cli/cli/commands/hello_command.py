"""``hello`` — interactive greeting, the smallest useful example command."""

from __future__ import annotations

from collections.abc import Sequence

from lunar_cli.cli import exit_codes
from lunar_cli.cli.commands.base import BaseCommand
from lunar_cli.core.command import command

DEFAULT_NAME = "User"


@command("hello", "Ask for your name and greet you")
class HelloCommand(BaseCommand):
    def execute(self, args: Sequence[str]) -> int:
        if self.wants_help(args):
            self.out.text(self.help())
            return exit_codes.SUCCESS

        self.out.title("Welcome to Lunar CLI")
        self.out.subtitle("Let's get acquainted...")

        name = self.out.ask("What is your first name?", DEFAULT_NAME)
        self.out.success(f"Nice to meet you, {name}!")
        return exit_codes.SUCCESS

    def help(self) -> str:
        return """\
Command: hello
Ask for your name and greet you.

Usage:
  lunar hello [--help]

Options:
  --help         Show this help

Description:
  Asks for your first name and welcomes you. It serves as an example
  of user interaction in the console.

Examples:
  lunar hello
  lunar hello --help

Note:
  Press Enter to accept the default value."""
