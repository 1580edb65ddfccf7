"""Infrastructure: dynamic import of configured types and command modules.

Two loading styles are supported:

* **Type identifiers** from configuration, written either as
  ``package.module:Attribute`` or ``package.module.Attribute``.
* **Module files** found by directory scans, loaded from their path under
  a caller-chosen module name so that the containing directory does not
  need to be an importable package.

Rules
-----
* No ``print()`` — failures are raised as typed errors or returned to
  the discovery layer, which decides whether to warn or skip.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from lunar_cli.exceptions import TypeResolutionError

logger = logging.getLogger(__name__)


def ensure_importable(directory: Path) -> None:
    """Put *directory* on ``sys.path`` so project modules can be imported."""
    entry = str(directory)
    if entry not in sys.path:
        sys.path.insert(0, entry)
        logger.debug("Added %s to sys.path", entry)


def split_identifier(identifier: str) -> tuple[str, str]:
    """Split a type identifier into ``(module, attribute path)``.

    >>> split_identifier("acme.boot:AcmeBootstrap")
    ('acme.boot', 'AcmeBootstrap')
    >>> split_identifier("acme.boot.AcmeBootstrap")
    ('acme.boot', 'AcmeBootstrap')
    """
    if ":" in identifier:
        module_name, _, attr_path = identifier.partition(":")
    else:
        module_name, _, attr_path = identifier.rpartition(".")
    return module_name.strip(), attr_path.strip()


def import_object(identifier: str) -> Any:
    """Import and return the object named by *identifier*.

    Raises
    ------
    ImportError
        If the module cannot be imported or the identifier is malformed.
    AttributeError
        If the module has no such attribute.
    """
    module_name, attr_path = split_identifier(identifier)
    if not module_name or not attr_path:
        raise ImportError(f"Malformed type identifier: {identifier!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attr_path.split("."):
        obj = getattr(obj, part)
    return obj


def resolve_type(
    identifier: str,
    base: type,
    error_class: type[TypeResolutionError] = TypeResolutionError,
) -> type:
    """Import *identifier* and check that it is a subclass of *base*.

    Raises
    ------
    TypeResolutionError
        (or the given *error_class*) when the type is missing, is not a
        class, or does not implement *base*.
    """
    try:
        obj = import_object(identifier)
    except (ImportError, AttributeError) as exc:
        raise error_class(
            f"Cannot import {identifier!r}: {exc}",
            hint="Check the module path and that the project root is importable.",
        ) from exc

    if not isinstance(obj, type):
        raise error_class(f"{identifier!r} is not a class.")
    if not issubclass(obj, base):
        raise error_class(
            f"{identifier!r} does not implement {base.__qualname__}.",
            hint=f"Subclass {base.__module__}.{base.__qualname__}.",
        )
    return obj


def load_module_from_path(module_name: str, path: Path) -> ModuleType:
    """Execute the Python file at *path* as module *module_name*.

    A module already present in :data:`sys.modules` under that name is
    returned unchanged.  Any exception raised while executing the module
    propagates to the caller after the half-initialised module has been
    removed from :data:`sys.modules`.
    """
    existing = sys.modules.get(module_name)
    if existing is not None:
        return existing

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create a module spec for {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module
