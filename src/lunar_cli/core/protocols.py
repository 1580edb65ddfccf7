"""Extension interfaces implemented by hosting projects.

Both interfaces are nominal (abstract base classes): a configured type
is accepted only if it subclasses the interface.  There is no fallback
to "has a method with the right name".
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from lunar_cli.core.command import Command


class BootstrapHook(ABC):
    """One-time startup hook run before any command is registered.

    Typical uses are loading environment files, configuring the host
    application's container, or setting up logging handlers.
    """

    @abstractmethod
    def boot(self) -> None:
        """Perform startup work.  Called exactly once per process."""


class CommandFactory(ABC):
    """Construction strategy for command handlers.

    The registry delegates every handler instantiation to its factory,
    which lets a host application inject dependencies into commands.
    """

    @abstractmethod
    def make(self, command_class: type[Command]) -> object:
        """Return an instance of *command_class*.

        The registry discards anything that is not a
        :class:`~lunar_cli.core.command.Command`.
        """


class DefaultCommandFactory(CommandFactory):
    """Constructs handlers with no arguments."""

    def make(self, command_class: type[Command]) -> object:
        return command_class()
