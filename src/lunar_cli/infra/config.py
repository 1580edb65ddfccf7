"""Infrastructure: console configuration loading.

The configuration lives at ``<root>/config/cli.json``.  Recognised
top-level fields::

    {
        "name": "Acme Console",
        "version": "2.3.0",
        "bootstrap": "acme.boot:AcmeBootstrap",
        "factory": "acme.container:CommandFactory",
        "commands": {"acme.commands": "src/acme/commands"},
        "packages": ["vendor/acme"],
        "log_level": "INFO"
    }

Policy
------
An absent file is never fatal: :func:`load_config` returns the defaults.
A file that exists but cannot be parsed raises
:class:`~lunar_cli.exceptions.ConfigurationUnreadableError`.
Unknown keys are ignored and wrongly-typed values fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lunar_cli.exceptions import ConfigurationAbsentError, ConfigurationUnreadableError

logger = logging.getLogger(__name__)

CONFIG_PATH = Path("config") / "cli.json"
"""Configuration location, relative to the project root."""

DEFAULT_NAME = "Console"
DEFAULT_VERSION = "1.0.0"


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Settings consumed by the bootstrap."""

    name: str = DEFAULT_NAME
    """Display name used in listing titles."""

    version: str = DEFAULT_VERSION
    """Display version used in listing titles."""

    bootstrap: str | None = None
    """Type identifier of the startup hook."""

    factory: str | None = None
    """Type identifier of the command construction strategy."""

    commands: dict[str, str] = field(default_factory=dict)
    """Project command directories, keyed by module namespace."""

    packages: tuple[str, ...] = ()
    """Extra directories holding vendored command packages."""

    log_level: str | None = None
    """Logging level name applied after loading, e.g. ``"DEBUG"``."""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ConsoleConfig:
        """Build a config from a decoded JSON object."""
        raw_commands = data.get("commands")
        commands: dict[str, str] = {}
        if isinstance(raw_commands, Mapping):
            commands = {
                str(namespace): directory
                for namespace, directory in raw_commands.items()
                if isinstance(directory, str) and directory
            }

        raw_packages = data.get("packages")
        packages: tuple[str, ...] = ()
        if isinstance(raw_packages, list):
            packages = tuple(p for p in raw_packages if isinstance(p, str) and p)

        return cls(
            name=_str_or(data.get("name"), DEFAULT_NAME),
            version=_str_or(data.get("version"), DEFAULT_VERSION),
            bootstrap=_str_or(data.get("bootstrap"), None),
            factory=_str_or(data.get("factory"), None),
            commands=commands,
            packages=packages,
            log_level=_str_or(data.get("log_level"), None),
        )


def config_path(root: Path) -> Path:
    return root / CONFIG_PATH


def read_config(path: Path) -> ConsoleConfig:
    """Parse the configuration document at *path*.

    Raises
    ------
    ConfigurationAbsentError
        If no file exists at *path*.
    ConfigurationUnreadableError
        If the file cannot be read or is not a JSON object.
    """
    if not path.is_file():
        raise ConfigurationAbsentError(f"No configuration file at {path}")

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationUnreadableError(
            f"Cannot read configuration file {path}: {exc}",
        ) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigurationUnreadableError(
            f"Invalid JSON in {path}: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            hint="Fix the syntax error or remove the file to use defaults.",
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationUnreadableError(
            f"Configuration in {path} must be a JSON object, got {type(data).__name__}.",
        )

    return ConsoleConfig.from_mapping(data)


def load_config(root: Path) -> ConsoleConfig:
    """Load ``config/cli.json`` under *root*, defaulting when absent."""
    path = config_path(root)
    try:
        config = read_config(path)
    except ConfigurationAbsentError:
        logger.debug("No configuration at %s; using defaults", path)
        return ConsoleConfig()
    logger.debug("Loaded configuration from %s", path)
    return config


def _str_or(value: object, default: Any) -> Any:
    if isinstance(value, str) and value:
        return value
    return default
