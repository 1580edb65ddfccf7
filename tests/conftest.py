"""Shared pytest fixtures and configuration for the lunar-cli test suite.

Guidelines
----------
* No real terminal interaction — prompts are faked.
* Rich output is captured in memory through :func:`presenter`.
* Filesystem fixtures live under ``tmp_path``.
* Modules loaded from ``tmp_path`` use unique names and are removed
  from ``sys.modules`` afterwards.
"""

from __future__ import annotations

import io
import logging
import sys
import uuid
from collections.abc import Iterator

import pytest
from rich.console import Console

from lunar_cli.cli.console import Presenter, RenderOptions


class BufferedPresenter(Presenter):
    """Presenter writing to an in-memory, colourless console."""

    def __init__(self, options: RenderOptions | None = None) -> None:
        self.buffer = io.StringIO()
        console = Console(
            file=self.buffer,
            width=200,
            color_system=None,
            force_terminal=False,
            legacy_windows=False,
        )
        super().__init__(console, options)

    @property
    def output(self) -> str:
        return self.buffer.getvalue()


@pytest.fixture()
def presenter() -> BufferedPresenter:
    return BufferedPresenter()


@pytest.fixture()
def diagnostics() -> BufferedPresenter:
    """Stands in for the stderr presenter."""
    return BufferedPresenter()


@pytest.fixture()
def ascii_presenter() -> BufferedPresenter:
    return BufferedPresenter(RenderOptions(encoding="iso-8859-1"))


@pytest.fixture()
def namespace() -> Iterator[str]:
    """A unique module namespace, purged from ``sys.modules`` afterwards."""
    name = f"lunar_test_{uuid.uuid4().hex}"
    yield name
    for module_name in [m for m in sys.modules if m == name or m.startswith(name + ".")]:
        del sys.modules[module_name]


@pytest.fixture()
def package_log_level() -> Iterator[None]:
    """Restore the ``lunar_cli`` logger level changed by a test."""
    logger = logging.getLogger("lunar_cli")
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.fixture()
def isolated_sys_path(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Let tests add ``sys.path`` entries that are undone afterwards."""
    path = list(sys.path)
    monkeypatch.setattr(sys, "path", path)
    return path
