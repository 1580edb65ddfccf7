"""Infrastructure layer — filesystem, configuration and import machinery.

This layer wraps every interaction with the filesystem, ``sys.path`` and
the import system.  Failures are raised as
:class:`~lunar_cli.exceptions.LunarCliError` subclasses or logged and
skipped, as documented per module.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from lunar_cli.infra.config import ConsoleConfig, load_config
from lunar_cli.infra.discovery import (
    register_directory,
    register_entry_points,
    register_packages,
    scan_directory,
)
from lunar_cli.infra.loader import resolve_type
from lunar_cli.infra.project_root import detect_project_root

__all__: list[str] = [
    "ConsoleConfig",
    "detect_project_root",
    "load_config",
    "register_directory",
    "register_entry_points",
    "register_packages",
    "resolve_type",
    "scan_directory",
]
