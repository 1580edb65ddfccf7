"""Command registry — registration, resolution and listing rows.

The registry is the single owner of the ``name -> entry`` map.  It is
populated once per process by the bootstrap (built-in, package, then
project tier) and treated as read-only while a command runs.

Guarantees
----------
* Names are unique: registering an existing name replaces the entry.
* Pure — no ``print()``, no filesystem access.  Overrides and skipped
  classes are reported through :mod:`logging` only.
* Listing rows are totally ordered by upper-cased group, then by name.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Iterator, Sequence

from lunar_cli.core.command import Command, command_meta
from lunar_cli.core.models import (
    GROUP_SEPARATOR,
    CommandEntry,
    CommandRow,
    Resolution,
    ResolutionKind,
)
from lunar_cli.core.protocols import CommandFactory, DefaultCommandFactory

logger = logging.getLogger(__name__)


class RegistryAware:
    """Mixin for handlers that need to inspect the registry they live in.

    The registry binds itself to such handlers when they are registered.
    """

    registry: CommandRegistry | None = None

    def bind_registry(self, registry: CommandRegistry) -> None:
        self.registry = registry


class CommandRegistry:
    """Name-to-handler map with group-aware resolution.

    Parameters
    ----------
    factory:
        Construction strategy used by :meth:`register_class`.  Defaults
        to no-argument construction.
    """

    def __init__(self, factory: CommandFactory | None = None) -> None:
        self._factory: CommandFactory = factory or DefaultCommandFactory()
        self._entries: dict[str, CommandEntry] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def factory(self) -> CommandFactory:
        return self._factory

    def register(self, name: str, handler: Command, description: str = "") -> None:
        """Insert or overwrite the entry for *name*."""
        previous = self._entries.get(name)
        if previous is not None:
            logger.info(
                "Command %r overridden: %s replaces %s",
                name,
                type(handler).__qualname__,
                type(previous.handler).__qualname__,
            )
        self._entries[name] = CommandEntry(
            name=name,
            handler=handler,
            description=description,
        )
        if isinstance(handler, RegistryAware):
            handler.bind_registry(self)

    def register_class(self, command_class: type) -> bool:
        """Register *command_class* from its declared metadata.

        Returns ``False`` without raising when the class has no
        descriptor, cannot be instantiated, or the factory yields
        something that is not a :class:`Command`.
        """
        meta = command_meta(command_class)
        if meta is None:
            logger.debug("Skipping %r: no command metadata", command_class)
            return False

        if not issubclass(command_class, Command) or inspect.isabstract(command_class):
            logger.debug("Skipping %r: not an instantiable command", command_class)
            return False

        try:
            instance = self._factory.make(command_class)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Skipping %r: cannot instantiate (%s: %s)",
                command_class,
                type(exc).__name__,
                exc,
            )
            return False

        if not isinstance(instance, Command):
            logger.debug(
                "Skipping %r: factory returned %s",
                command_class,
                type(instance).__qualname__,
            )
            return False

        self.register(meta.name, instance, meta.description)
        return True

    def register_classes(self, command_classes: Iterable[type]) -> int:
        """Register each class in order; return how many were accepted."""
        return sum(1 for cls in command_classes if self.register_class(cls))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> CommandEntry | None:
        return self._entries.get(name)

    def entries(self) -> list[CommandEntry]:
        """All entries in registration order."""
        return list(self._entries.values())

    def names(self) -> list[str]:
        """All registered names, sorted."""
        return sorted(self._entries)

    def with_group(self, group: str) -> list[CommandEntry]:
        """Entries whose name starts with ``group + ":"``."""
        prefix = group + GROUP_SEPARATOR
        return [entry for name, entry in self._entries.items() if name.startswith(prefix)]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CommandEntry]:
        return iter(self.entries())

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, argv: Sequence[str]) -> Resolution:
        """Resolve a full ``argv`` (program name first) to an outcome."""
        candidate = argv[1] if len(argv) > 1 else None
        if not candidate:
            return Resolution(kind=ResolutionKind.EMPTY)

        entry = self._entries.get(candidate)
        if entry is not None:
            return Resolution(
                kind=ResolutionKind.EXACT,
                name=candidate,
                entry=entry,
                args=tuple(argv[2:]),
            )

        matches = self.with_group(candidate)
        if matches:
            return Resolution(
                kind=ResolutionKind.GROUP_PREFIX,
                name=candidate,
                matches=tuple(matches),
            )

        return Resolution(kind=ResolutionKind.NOT_FOUND, name=candidate)

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def rows(self, entries: Iterable[CommandEntry] | None = None) -> list[CommandRow]:
        """Build listing rows sorted by group, then by full name.

        When *entries* is ``None`` every registered entry is listed.
        """
        source = self._entries.values() if entries is None else entries
        rows = [
            CommandRow(
                group=entry.group.upper(),
                command=entry.name,
                description=entry.description,
            )
            for entry in source
        ]
        rows.sort(key=lambda row: (row.group, row.command))
        return rows
