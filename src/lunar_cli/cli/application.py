"""Command dispatcher: resolves ``argv`` and runs or lists commands.

The dispatcher owns no business logic.  It asks the registry what the
command token resolves to and then either executes the handler, shows
its help, or renders a (possibly filtered) listing.

Exceptions raised by a handler are **not** caught here; they travel to
the process boundary in :mod:`lunar_cli.cli.app`.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable, Sequence

from lunar_cli.cli import exit_codes
from lunar_cli.cli.console import Presenter
from lunar_cli.core.args import wants_help
from lunar_cli.core.models import CommandEntry, ResolutionKind
from lunar_cli.core.registry import CommandRegistry
from lunar_cli.infra.config import DEFAULT_NAME, DEFAULT_VERSION

logger = logging.getLogger(__name__)

LISTING_COLUMNS: dict[str, str] = {
    "group": "Group",
    "command": "Command",
    "description": "Description",
}


class Application:
    """A named, versioned command set bound to a presenter."""

    def __init__(
        self,
        name: str = DEFAULT_NAME,
        version: str = DEFAULT_VERSION,
        *,
        registry: CommandRegistry | None = None,
        presenter: Presenter | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self.registry: CommandRegistry = registry if registry is not None else CommandRegistry()
        self.presenter: Presenter = presenter or Presenter()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Resolve *argv* (program name first) and return an exit code.

        When *argv* is ``None``, :data:`sys.argv` is used.
        """
        if argv is None:
            argv = sys.argv

        resolution = self.registry.resolve(argv)
        logger.debug("Resolved %r as %s", resolution.name, resolution.kind.value)

        if resolution.kind is ResolutionKind.EMPTY:
            self.display_title()
            self.display_commands()
            return exit_codes.SUCCESS

        if resolution.kind is ResolutionKind.EXACT and resolution.entry is not None:
            handler = resolution.entry.handler
            if wants_help(resolution.args):
                self.presenter.text(handler.help())
                return exit_codes.SUCCESS
            return handler.execute(list(resolution.args))

        if resolution.kind is ResolutionKind.GROUP_PREFIX:
            self.display_title()
            self.display_commands(resolution.matches)
            return exit_codes.SUCCESS

        self.display_title()
        self.presenter.error(f'Unknown command: "{resolution.name}"')
        self.presenter.new_line()
        self.display_commands()
        return exit_codes.UNKNOWN_COMMAND

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def display_title(self) -> None:
        self.presenter.title(f"{self.name} v{self.version}")

    def display_commands(self, entries: Iterable[CommandEntry] | None = None) -> None:
        """Render the listing table, restricted to *entries* when given."""
        rows = self.registry.rows(entries)
        if not rows:
            self.presenter.warning("No commands registered.")
            return

        self.presenter.subtitle("Available commands:")
        self.presenter.new_line()
        self.presenter.render_table([row.as_dict() for row in rows], LISTING_COLUMNS)
        self.presenter.new_line()
