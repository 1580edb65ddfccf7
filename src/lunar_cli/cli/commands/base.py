"""Convenience base class for command handlers.

:class:`BaseCommand` binds a :class:`~lunar_cli.cli.console.Presenter`
and exposes the argument primitives of :mod:`lunar_cli.core.args` as
methods, so a handler reads like::

    @command("greet", "Say hello.")
    class GreetCommand(BaseCommand):
        def execute(self, args):
            if self.wants_help(args):
                self.out.text(self.help())
                return 0
            name = self.option_value(self.parse_keyed(args), "name", "world")
            self.out.success(f"Hello, {name}!")
            return 0

        def help(self):
            return "Usage: greet [--name=NAME]"
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TypeVar

from lunar_cli.cli.console import Presenter
from lunar_cli.core import args as token_args
from lunar_cli.core.command import Command
from lunar_cli.core.protocols import CommandFactory

_T = TypeVar("_T")


class BaseCommand(Command):
    """Command with a presenter and argument helpers."""

    def __init__(self, presenter: Presenter | None = None) -> None:
        self.out: Presenter = presenter or Presenter()

    # Argument helpers ---------------------------------------------------

    @staticmethod
    def wants_help(args: Sequence[str]) -> bool:
        return token_args.wants_help(args)

    @staticmethod
    def first_positional(args: Sequence[str]) -> str | None:
        return token_args.first_positional(args)

    @staticmethod
    def parse_keyed(args: Sequence[str]) -> dict[str, str]:
        return token_args.parse_keyed(args)

    @staticmethod
    def has_flag(args: Sequence[str], name: str) -> bool:
        return token_args.has_flag(args, name)

    @staticmethod
    def option_value(
        keyed: Mapping[str, str],
        key: str,
        default: _T | None = None,
    ) -> str | _T | None:
        return token_args.option_value(keyed, key, default)


class ConsoleCommandFactory(CommandFactory):
    """Default construction strategy of the console.

    :class:`BaseCommand` subclasses receive the console's presenter;
    every other command is constructed without arguments.
    """

    def __init__(self, presenter: Presenter) -> None:
        self.presenter = presenter

    def make(self, command_class: type[Command]) -> object:
        if issubclass(command_class, BaseCommand):
            return command_class(presenter=self.presenter)
        return command_class()
