"""CLI application entry point for lunar-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~lunar_cli.exceptions.LunarCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — assembly is delegated to
  :mod:`lunar_cli.cli.bootstrap`, dispatch to
  :mod:`lunar_cli.cli.application`.
* Exceptions raised by command handlers are not caught by the
  dispatcher; they arrive here.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from lunar_cli.cli import exit_codes
from lunar_cli.cli.bootstrap import run_console
from lunar_cli.cli.console import Presenter, get_rich_console
from lunar_cli.cli.log import configure_logging
from lunar_cli.exceptions import LunarCliError, append_debug_suggestion

logger = logging.getLogger(__name__)

PROGRAM_NAME = "lunar"
ROOT_ENV = "LUNAR_CLI_ROOT"
"""Environment variable overriding project root detection."""


def main(argv: list[str] | None = None) -> int:
    """Run the lunar-cli console.

    Parameters
    ----------
    argv:
        Explicit argument list, *without* the program name.  When
        ``None`` (default), ``sys.argv[1:]`` is used.  Accepting *argv*
        enables deterministic testing without monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    if argv is None:
        program = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else PROGRAM_NAME
        argv = sys.argv[1:]
    else:
        program = PROGRAM_NAME

    root_override = os.environ.get(ROOT_ENV)
    root = Path(root_override).resolve() if root_override else None

    return run_console([program, *argv], root)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    configure_logging()
    err = Presenter(get_rich_console(stderr=True))
    try:
        code = main()
        sys.exit(code)
    except LunarCliError as exc:
        err.error(f"Error: {exc}")
        if exc.hint:
            err.warning(f"Hint: {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        err.new_line()
        err.warning("Aborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Unhandled exception", exc_info=True)
        err.error("Unexpected error. Please report this issue.")
        err.text(f"  {type(exc).__name__}: {exc}")
        err.text(append_debug_suggestion("  Full tracebacks are logged at DEBUG level."))
        sys.exit(exit_codes.UNEXPECTED_ERROR)
