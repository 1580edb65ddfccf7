"""CLI presentation helpers built on Rich and questionary.

This module intentionally avoids module-level imports of the UI
libraries so that importing the CLI layer (and running the pure core in
tests) does not depend on them being installed.  Each library is loaded
on first use and reported as
:class:`~lunar_cli.exceptions.MissingDependencyError` when absent.

Rendering options are an explicit value: the composition root builds a
:class:`RenderOptions` once and hands it to every :class:`Presenter`.
"""

from __future__ import annotations

import importlib
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from lunar_cli.exceptions import MissingDependencyError

DEFAULT_ENCODING = "utf-8"
FALLBACK_ENCODING = "iso-8859-1"


def _import_rich(module: str) -> Any:
    """Import ``rich.<module>`` or raise ``MissingDependencyError``."""
    try:
        return importlib.import_module(f"rich.{module}")
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
    console_class: type[Any] = _import_rich("console").Console
    return console_class


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def get_rich_console(*, stderr: bool = False) -> Any:
    """Create a Rich console instance targeting stdout (or stderr)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


# ---------------------------------------------------------------------------
# Rendering options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Terminal capabilities used when drawing boxes and glyphs."""

    encoding: str = DEFAULT_ENCODING

    @property
    def unicode(self) -> bool:
        return self.encoding.lower().replace("_", "-") in ("utf-8", "utf8")

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> RenderOptions:
        """Guess the terminal encoding from ``LC_ALL`` / ``LC_CTYPE`` / ``LANG``.

        An unset locale is assumed to be UTF-8; a locale that is set but
        does not mention UTF-8 selects the single-byte fallback.
        """
        env = os.environ if environ is None else environ
        for var in ("LC_ALL", "LC_CTYPE", "LANG"):
            value = env.get(var)
            if value:
                upper = value.upper()
                if "UTF-8" in upper or "UTF8" in upper:
                    return cls(encoding=DEFAULT_ENCODING)
                return cls(encoding=FALLBACK_ENCODING)
        return cls(encoding=DEFAULT_ENCODING)


@dataclass(frozen=True, slots=True)
class TableStyle:
    """Style options for :meth:`Presenter.render_table`."""

    border_style: str = "magenta"
    header_style: str = "bold magenta"
    row_style: str = "white"
    show_headers: bool = True


# ---------------------------------------------------------------------------
# Presenter
# ---------------------------------------------------------------------------

class Presenter:
    """Title, message, table and prompt primitives for commands.

    Parameters
    ----------
    console:
        A ``rich.console.Console``.  Created lazily on stdout if omitted.
    options:
        Rendering options; defaults to UTF-8.
    """

    def __init__(self, console: Any | None = None, options: RenderOptions | None = None) -> None:
        self._console: Any | None = console
        self.options: RenderOptions = options or RenderOptions()

    @property
    def console(self) -> Any:
        if self._console is None:
            self._console = get_rich_console()
        return self._console

    # ------------------------------------------------------------------
    # Headings
    # ------------------------------------------------------------------

    def title(self, text: str) -> None:
        """Render *text* framed in a box."""
        Panel = _import_rich("panel").Panel
        Text = _import_rich("text").Text

        self.console.print()
        self.console.print(
            Panel.fit(
                Text(text, style="bold magenta"),
                box=self._box(),
                border_style="magenta",
                padding=(0, 4),
            )
        )
        self.console.print()

    def subtitle(self, text: str) -> None:
        self._line(f"> {text}", "bold blue", indent=False)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def success(self, message: str) -> None:
        self._line(message, "green")

    def error(self, message: str) -> None:
        self._line(message, "red")

    def warning(self, message: str) -> None:
        self._line(message, "yellow")

    def info(self, message: str) -> None:
        self._line(message, "cyan")

    def text(self, content: str, style: str | None = None) -> None:
        """Print *content* verbatim: no markup, no highlighting, no wrapping."""
        self.console.print(
            content,
            style=style,
            markup=False,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def segments(self, *parts: tuple[str, str | None]) -> None:
        """Print one line assembled from ``(text, style)`` pairs."""
        Text = _import_rich("text").Text

        line = Text()
        for content, style in parts:
            line.append(content, style=style or "")
        self.console.print(line, soft_wrap=True)

    def new_line(self, count: int = 1) -> None:
        for _ in range(count):
            self.console.print()

    def separator(self, width: int = 60, char: str = "-") -> None:
        self.text(char * width, style="bright_black")

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def render_table(
        self,
        rows: Sequence[Mapping[str, str]],
        columns: Mapping[str, str] | None = None,
        style: TableStyle | None = None,
    ) -> None:
        """Render *rows* as a bordered table.

        *columns* maps row keys to header labels and fixes the column
        order; when omitted, the keys of the first row are used.
        """
        Table = _import_rich("table").Table

        style = style or TableStyle()
        if columns is None:
            columns = {key: key for key in rows[0]} if rows else {}

        table = Table(
            box=self._box(),
            show_header=style.show_headers,
            header_style=style.header_style,
            border_style=style.border_style,
            style=style.row_style,
        )
        for label in columns.values():
            table.add_column(label, no_wrap=True)
        for row in rows:
            table.add_row(*(row.get(key, "") for key in columns))

        self.console.print(table)

    # ------------------------------------------------------------------
    # Interactive prompts
    # ------------------------------------------------------------------

    def ask(self, prompt: str, default: str | None = None) -> str:
        """Ask a free-text question; an empty answer yields *default*."""
        questionary = _import_questionary()
        label = f"{prompt} [{default}]" if default else prompt
        answer: str = questionary.text(label).unsafe_ask()
        answer = (answer or "").strip()
        return answer if answer else (default or "")

    def ask_hidden(self, prompt: str) -> str:
        """Ask for a secret without echoing it."""
        questionary = _import_questionary()
        answer: str = questionary.password(prompt).unsafe_ask()
        return (answer or "").strip()

    def confirm(self, prompt: str, default: bool = True) -> bool:
        questionary = _import_questionary()
        return bool(questionary.confirm(prompt, default=default).unsafe_ask())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _line(self, message: str, style: str, *, indent: bool = True) -> None:
        Text = _import_rich("text").Text

        prefix = "  " if indent else ""
        self.console.print(Text(prefix + message, style=style))

    def _box(self) -> Any:
        box = _import_rich("box")

        return box.ROUNDED if self.options.unicode else box.ASCII
