"""Infrastructure: project root detection.

The root context directory anchors the configuration file, the vendor
package directories and the project command directories.

Rules
-----
* Read-only filesystem probing — nothing is created or modified.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_MARKERS: tuple[str, ...] = ("pyproject.toml", "setup.cfg", "setup.py")
"""File names that identify a project root, checked in order."""


def detect_project_root(
    start: Path | None = None,
    markers: tuple[str, ...] = PROJECT_MARKERS,
) -> Path:
    """Return the nearest directory at or above *start* containing a marker.

    Falls back to *start* (the current working directory by default)
    when no ancestor carries any of *markers*.
    """
    origin = (start or Path.cwd()).resolve()

    for candidate in (origin, *origin.parents):
        for marker in markers:
            if (candidate / marker).is_file():
                logger.debug("Project root %s (found %s)", candidate, marker)
                return candidate

    logger.debug("No project marker above %s; using it as root", origin)
    return origin
