"""Argument-parsing primitives shared by every command handler.

All functions are pure and operate on the flat token list that follows
the resolved command name.  Three token shapes are recognised:

* positional — any token not starting with ``--``
* keyed option — ``--<key>=<value>`` (value may be empty)
* flag — exactly ``--<name>``

There is no validation and no type coercion: malformed tokens are simply
invisible to the helper that does not expect them.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import TypeVar

OPTION_PREFIX = "--"
HELP_FLAG = "--help"

_KEYED_RE = re.compile(r"^--([^=]+)=(.*)$", re.DOTALL)

_T = TypeVar("_T")


def wants_help(tokens: Sequence[str]) -> bool:
    """Return ``True`` iff the literal ``--help`` token is present."""
    return HELP_FLAG in tokens


def first_positional(tokens: Sequence[str]) -> str | None:
    """Return the first token not prefixed by ``--``, or ``None``."""
    for token in tokens:
        if not token.startswith(OPTION_PREFIX):
            return token
    return None


def parse_keyed(tokens: Sequence[str]) -> dict[str, str]:
    """Collect ``--key=value`` tokens into a mapping.

    The key is everything up to the first ``=``; later occurrences of the
    same key overwrite earlier ones.
    """
    parsed: dict[str, str] = {}
    for token in tokens:
        match = _KEYED_RE.match(token)
        if match is not None:
            parsed[match.group(1)] = match.group(2)
    return parsed


def has_flag(tokens: Sequence[str], name: str) -> bool:
    """Exact-match test of ``--<name>`` against every token.

    ``--name=value`` does **not** count as the flag ``name``.
    """
    flag = OPTION_PREFIX + name
    return any(token == flag for token in tokens)


def option_value(
    keyed: Mapping[str, str],
    key: str,
    default: _T | None = None,
) -> str | _T | None:
    """Return ``keyed[key]`` when present, else *default*."""
    if key in keyed:
        return keyed[key]
    return default
