"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
Handlers may return any other non-negative code; the dispatcher
forwards it verbatim.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed, or a listing was displayed."""

GENERAL_ERROR: int = 1
"""A known LunarCliError was caught. User-facing message was displayed."""

UNKNOWN_COMMAND: int = 1
"""The requested command name did not resolve to a handler or group."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
