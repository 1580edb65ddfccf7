"""Infrastructure: command discovery for the package and project tiers.

Three sources feed the registry besides the built-in list:

* installed distributions advertising entry points in the
  ``lunar_cli.commands`` group;
* vendored package directories, each described by its own
  ``pyproject.toml`` manifest;
* project directories declared in the configuration.

Directories are scanned for ``*_command.py`` files.  Every class defined
in such a file that carries command metadata is handed to
:meth:`~lunar_cli.core.registry.CommandRegistry.register_class`.

Rules
-----
* Discovery never aborts the bootstrap: a missing directory, a package
  without a usable manifest, or a module that fails to import is logged
  and skipped.
* No ``print()`` — warnings go through :mod:`logging`.
"""

from __future__ import annotations

import logging
import re
import tomllib
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from importlib.metadata import entry_points
from pathlib import Path
from types import ModuleType
from typing import Any

from lunar_cli.core.command import command_meta
from lunar_cli.core.registry import CommandRegistry
from lunar_cli.infra.loader import ensure_importable, load_module_from_path

logger = logging.getLogger(__name__)

COMMAND_FILE_GLOB = "*_command.py"
"""File name pattern of modules that may hold command classes."""

ENTRY_POINT_GROUP = "lunar_cli.commands"
"""Entry-point group advertised by installed command packages."""

DEFAULT_VENDOR_DIRS: tuple[str, ...] = ("vendor/lunar",)
"""Vendored package locations, relative to the project root."""

MANIFEST_NAME = "pyproject.toml"
MANIFEST_TOOL_TABLE = "lunar-cli"
COMMANDS_PACKAGE = "commands"

SELF_PACKAGE_NAMES = frozenset({"lunar-cli", "lunar_cli"})
"""Directory names of the framework itself, never scanned as a package."""


# ---------------------------------------------------------------------------
# Module scanning
# ---------------------------------------------------------------------------

def command_classes(module: ModuleType) -> list[type]:
    """Classes defined in *module* that declare command metadata.

    Classes merely imported into the module are ignored so that a shared
    base class is not registered once per importing file.
    """
    return [
        obj
        for obj in vars(module).values()
        if isinstance(obj, type)
        and obj.__module__ == module.__name__
        and command_meta(obj) is not None
    ]


def scan_directory(directory: Path, namespace: str) -> list[type]:
    """Load every ``*_command.py`` file in *directory* and collect classes.

    Each file ``foo_command.py`` is loaded as module
    ``<namespace>.foo_command``.  Files are visited in sorted order.
    """
    if not directory.is_dir():
        logger.debug("Command directory %s does not exist", directory)
        return []

    found: list[type] = []
    for path in sorted(directory.glob(COMMAND_FILE_GLOB)):
        if not path.is_file():
            continue
        module_name = f"{namespace}.{path.stem}" if namespace else path.stem
        try:
            module = load_module_from_path(module_name, path)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Skipping %s: %s: %s", path, type(exc).__name__, exc)
            continue
        found.extend(command_classes(module))
    return found


def register_directory(registry: CommandRegistry, directory: Path, namespace: str) -> int:
    """Scan *directory* and register what it holds; return the count."""
    count = registry.register_classes(scan_directory(directory, namespace))
    logger.debug("Registered %d command(s) from %s", count, directory)
    return count


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def entry_point_classes(group: str = ENTRY_POINT_GROUP) -> list[type]:
    """Load the command classes advertised under *group*.

    Entry points are visited sorted by name for a deterministic order.
    """
    found: list[type] = []
    for ep in sorted(entry_points(group=group), key=lambda e: e.name):
        try:
            obj = ep.load()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Skipping entry point %s: %s: %s", ep.name, type(exc).__name__, exc)
            continue
        if isinstance(obj, type):
            found.append(obj)
        else:
            logger.warning("Skipping entry point %s: %r is not a class", ep.name, obj)
    return found


def register_entry_points(registry: CommandRegistry, group: str = ENTRY_POINT_GROUP) -> int:
    return registry.register_classes(entry_point_classes(group))


# ---------------------------------------------------------------------------
# Vendored packages
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PackageManifest:
    """What the package tier needs to know about one vendored package."""

    path: Path
    """Package directory."""

    namespace: str
    """Import name of the package, e.g. ``acme_tools``."""

    source_root: Path
    """Directory that must be importable for the package to load."""

    commands_dir: Path
    """Directory scanned for ``*_command.py`` files."""

    @property
    def commands_namespace(self) -> str:
        return f"{self.namespace}.{COMMANDS_PACKAGE}"


def normalize_namespace(name: str) -> str:
    """Turn a distribution name into an import name (``Acme-Tools`` → ``acme_tools``)."""
    return re.sub(r"[^0-9A-Za-z_.]+", "_", name.strip()).lower()


def _table(document: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """The sub-table *key* of *document*, or an empty mapping if it is not a table."""
    value = document.get(key)
    return value if isinstance(value, dict) else {}


def read_package_manifest(package_dir: Path) -> PackageManifest | None:
    """Read ``pyproject.toml`` in *package_dir*, or ``None`` if unusable.

    The namespace is ``[tool.lunar-cli].namespace`` when present, else
    the normalised ``[project].name``.
    """
    manifest_path = package_dir / MANIFEST_NAME
    if not manifest_path.is_file():
        return None

    try:
        with manifest_path.open("rb") as fh:
            manifest = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring package %s: unreadable manifest (%s)", package_dir, exc)
        return None

    namespace = _table(_table(manifest, "tool"), MANIFEST_TOOL_TABLE).get("namespace")
    if not isinstance(namespace, str) or not namespace:
        project_name = _table(manifest, "project").get("name")
        if not isinstance(project_name, str) or not project_name:
            logger.debug("Ignoring package %s: manifest declares no namespace", package_dir)
            return None
        namespace = normalize_namespace(project_name)

    relative = Path(*namespace.split("."))
    for source_root in (package_dir / "src", package_dir):
        commands_dir = source_root / relative / COMMANDS_PACKAGE
        if commands_dir.is_dir():
            return PackageManifest(
                path=package_dir,
                namespace=namespace,
                source_root=source_root,
                commands_dir=commands_dir,
            )

    logger.debug("Ignoring package %s: no %s/%s directory", package_dir, relative, COMMANDS_PACKAGE)
    return None


def iter_package_dirs(root: Path, vendor_dirs: Iterable[str]) -> Iterator[Path]:
    """Yield candidate package directories under each vendor directory."""
    for vendor in vendor_dirs:
        vendor_path = root / vendor
        if not vendor_path.is_dir():
            continue
        for child in sorted(vendor_path.iterdir()):
            if not child.is_dir() or child.name.startswith("."):
                continue
            if child.name in SELF_PACKAGE_NAMES:
                continue
            yield child


def register_packages(
    registry: CommandRegistry,
    root: Path,
    vendor_dirs: Iterable[str] = DEFAULT_VENDOR_DIRS,
) -> int:
    """Register commands from every vendored package with a usable manifest."""
    total = 0
    for package_dir in iter_package_dirs(root, vendor_dirs):
        manifest = read_package_manifest(package_dir)
        if manifest is None:
            continue
        ensure_importable(manifest.source_root)
        total += register_directory(registry, manifest.commands_dir, manifest.commands_namespace)
    return total
