"""Custom exception hierarchy for lunar-cli.

All exceptions that cross layer boundaries must inherit from
:class:`LunarCliError`.  Discovery-time problems are mostly degraded to
warnings by the bootstrap; the ones that are fatal reach the CLI error
boundary, which renders the message and its optional hint.

Unknown command names are a resolution outcome, not an exception, and a
failing handler reports through its own exit code.

Hierarchy
---------
LunarCliError
├── ConfigurationError
│   ├── ConfigurationAbsentError
│   └── ConfigurationUnreadableError
├── TypeResolutionError
│   ├── StartupHookUnresolvableError
│   └── FactoryUnresolvableError
└── MissingDependencyError
"""

from __future__ import annotations


class LunarCliError(Exception):
    """Base exception for all lunar-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(LunarCliError):
    """Base class for configuration file problems."""


class ConfigurationAbsentError(ConfigurationError):
    """Raised when no configuration file exists at the conventional path.

    The loader converts this into default settings; it never reaches the
    error boundary.
    """


class ConfigurationUnreadableError(ConfigurationError):
    """Raised when the configuration file exists but cannot be parsed."""


# --- Type identifiers (bootstrap hook, factory) ----------------------------

class TypeResolutionError(LunarCliError):
    """Raised when a configured type identifier cannot be imported."""


class StartupHookUnresolvableError(TypeResolutionError):
    """Raised when the configured startup hook is missing or unusable."""


class FactoryUnresolvableError(TypeResolutionError):
    """Raised when the configured command factory is missing or unusable."""


# --- Environment -----------------------------------------------------------

class MissingDependencyError(LunarCliError):
    """Raised when an optional UI library is not installed."""


def append_debug_suggestion(hint: str) -> str:
    """Append log-level guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "For more detail, rerun with:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    LUNAR_CLI_LOG_LEVEL=DEBUG",
        )
    )
