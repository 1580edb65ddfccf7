"""Tests for lunar_cli.cli.application — dispatch and listings."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from lunar_cli.cli.application import Application
from lunar_cli.core.command import Command
from lunar_cli.core.registry import CommandRegistry

if TYPE_CHECKING:
    from conftest import BufferedPresenter


class EchoCommand(Command):
    def __init__(self, code: int = 0, help_text: str = "usage: echo") -> None:
        self.code = code
        self.help_text = help_text
        self.execute_spy = MagicMock(return_value=code)

    def execute(self, args: Sequence[str]) -> int:
        return self.execute_spy(list(args))

    def help(self) -> str:
        return self.help_text


class ExplodingCommand(Command):
    def execute(self, args: Sequence[str]) -> int:
        raise RuntimeError("kaboom")

    def help(self) -> str:
        return ""


def _app(presenter: BufferedPresenter, **handlers: Command) -> Application:
    registry = CommandRegistry()
    for name, handler in handlers.items():
        registry.register(name.replace("__", ":"), handler, f"{name} description")
    return Application("Demo", "2.1.0", registry=registry, presenter=presenter)


# ---------------------------------------------------------------------------
# Listing
# ---------------------------------------------------------------------------

class TestListing:
    def test_no_command_lists_everything(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter, hello=EchoCommand(), fs__tree=EchoCommand())

        assert app.run(["lunar"]) == 0

        out = presenter.output
        assert "Demo v2.1.0" in out
        assert "> Available commands:" in out
        assert "hello" in out
        assert "fs:tree" in out
        assert "MISC" in out
        assert "FS" in out

    def test_listing_orders_groups(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter, zeta=EchoCommand(), alpha__a=EchoCommand())
        app.run(["lunar"])
        out = presenter.output
        assert out.index("alpha:a") < out.index("zeta")

    def test_group_prefix_lists_matches_only(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter, fs__tree=EchoCommand(), fs__du=EchoCommand(), hello=EchoCommand())

        assert app.run(["lunar", "fs"]) == 0

        out = presenter.output
        assert "fs:tree" in out
        assert "fs:du" in out
        assert "hello" not in out

    def test_empty_registry_warns(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter)
        assert app.run(["lunar"]) == 0
        assert "No commands registered." in presenter.output

    def test_defaults_to_console_name(self, presenter: BufferedPresenter) -> None:
        app = Application(presenter=presenter)
        app.display_title()
        assert "Console v1.0.0" in presenter.output


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

class TestExecute:
    def test_forwards_remaining_args(self, presenter: BufferedPresenter) -> None:
        handler = EchoCommand()
        app = _app(presenter, fs__tree=handler)

        app.run(["lunar", "fs:tree", "src", "--depth=2"])

        handler.execute_spy.assert_called_once_with(["src", "--depth=2"])

    @pytest.mark.parametrize("code", [0, 1, 3, 42])
    def test_returns_handler_exit_code(self, presenter: BufferedPresenter, code: int) -> None:
        app = _app(presenter, hello=EchoCommand(code=code))
        assert app.run(["lunar", "hello"]) == code

    def test_handler_exceptions_propagate(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter, boom=ExplodingCommand())
        with pytest.raises(RuntimeError, match="kaboom"):
            app.run(["lunar", "boom"])

    def test_execution_prints_no_title(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter, hello=EchoCommand())
        app.run(["lunar", "hello"])
        assert "Demo v2.1.0" not in presenter.output


class TestHelp:
    def test_help_prints_text_verbatim(self, presenter: BufferedPresenter) -> None:
        handler = EchoCommand(help_text="Usage: echo [--loud]\n  prints things")
        app = _app(presenter, echo=handler)

        assert app.run(["lunar", "echo", "--help"]) == 0

        assert presenter.output == "Usage: echo [--loud]\n  prints things\n"
        handler.execute_spy.assert_not_called()

    def test_help_anywhere_in_args(self, presenter: BufferedPresenter) -> None:
        handler = EchoCommand()
        app = _app(presenter, echo=handler)
        assert app.run(["lunar", "echo", "src", "--help", "--flat"]) == 0
        handler.execute_spy.assert_not_called()


# ---------------------------------------------------------------------------
# Unknown command
# ---------------------------------------------------------------------------

class TestUnknown:
    def test_unknown_command_exit_code(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter, hello=EchoCommand())
        assert app.run(["lunar", "nope"]) == 1

    def test_message_precedes_full_listing(self, presenter: BufferedPresenter) -> None:
        app = _app(presenter, hello=EchoCommand())
        app.run(["lunar", "nope"])

        out = presenter.output
        assert 'Unknown command: "nope"' in out
        assert out.index('Unknown command: "nope"') < out.index("Available commands:")
        assert "hello" in out
