"""Command contract and declarative registration metadata.

Every handler implements :class:`Command`.  A handler class becomes
discoverable once it carries a :class:`CommandMeta` descriptor, attached
with the :func:`command` decorator::

    @command("fs:tree", "Print a recursive file tree.")
    class TreeCommand(BaseCommand):
        ...

The registry reads the descriptor from the class before constructing
anything, so handlers never need to know their own registration name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

META_ATTRIBUTE = "meta"


@dataclass(frozen=True, slots=True)
class CommandMeta:
    """Immutable ``(name, description)`` pair bound to a handler class."""

    name: str
    """Registration name, optionally grouped as ``group:action``."""

    description: str = ""
    """One-line summary shown in command listings."""


class Command(ABC):
    """The shape every command handler must satisfy."""

    @abstractmethod
    def execute(self, args: Sequence[str]) -> int:
        """Run the command with the tokens following its name.

        Returns
        -------
        int
            Exit code: ``0`` on success, a positive code otherwise.
        """

    @abstractmethod
    def help(self) -> str:
        """Return the static help text displayed for ``--help``."""


_C = TypeVar("_C", bound=type)


def command(name: str, description: str = "") -> Callable[[_C], _C]:
    """Class decorator attaching a :class:`CommandMeta` descriptor."""

    def decorate(cls: _C) -> _C:
        setattr(cls, META_ATTRIBUTE, CommandMeta(name=name, description=description))
        return cls

    return decorate


def command_meta(cls: type) -> CommandMeta | None:
    """Return the descriptor declared on *cls*, or ``None``.

    Only a descriptor declared on the class itself counts; a subclass of
    a registered command must declare its own name.
    """
    meta = vars(cls).get(META_ATTRIBUTE)
    if isinstance(meta, CommandMeta):
        return meta
    return None
