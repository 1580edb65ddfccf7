"""Domain models for lunar-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and derived properties.  They carry zero
I/O and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from lunar_cli.core.command import Command

GROUP_SEPARATOR = ":"
MISC_GROUP = "misc"


def group_of(name: str) -> str:
    """Derive the display group of a command name (not upper-cased).

    ``"fs:tree"`` belongs to ``"fs"``; a name without a colon belongs to
    the ``"misc"`` sentinel group.
    """
    if GROUP_SEPARATOR not in name:
        return MISC_GROUP
    return name.split(GROUP_SEPARATOR, 1)[0]


# ---------------------------------------------------------------------------
# Registration entry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandEntry:
    """Registry record binding a name to a handler instance."""

    name: str
    """Unique registration key."""

    handler: Command
    """Eagerly constructed handler instance."""

    description: str = ""
    """One-line summary shown in listings."""

    @property
    def group(self) -> str:
        return group_of(self.name)


# ---------------------------------------------------------------------------
# Listing row
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandRow:
    """One line of the command listing table."""

    group: str
    """Upper-cased group label."""

    command: str
    """Full command name."""

    description: str

    def as_dict(self) -> dict[str, str]:
        return {
            "group": self.group,
            "command": self.command,
            "description": self.description,
        }


# ---------------------------------------------------------------------------
# Resolution outcome
# ---------------------------------------------------------------------------

class ResolutionKind(enum.Enum):
    """What a command-line token resolved to."""

    EMPTY = "empty"
    EXACT = "exact"
    GROUP_PREFIX = "group_prefix"
    NOT_FOUND = "not_found"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of :meth:`CommandRegistry.resolve`.

    Only the fields relevant to :attr:`kind` are populated:

    * ``EXACT`` — :attr:`entry` and :attr:`args`
    * ``GROUP_PREFIX`` — :attr:`matches`
    * ``NOT_FOUND`` — :attr:`name`
    """

    kind: ResolutionKind

    name: str | None = None
    """The candidate command name, when one was given."""

    entry: CommandEntry | None = None

    matches: tuple[CommandEntry, ...] = field(default=())

    args: tuple[str, ...] = field(default=())
    """Tokens following the command name."""
