"""Tests for lunar_cli.infra.project_root."""

from __future__ import annotations

from pathlib import Path

import pytest

from lunar_cli.infra.project_root import detect_project_root


class TestDetectProjectRoot:
    def test_marker_in_start_directory(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
        assert detect_project_root(tmp_path) == tmp_path.resolve()

    def test_walks_up_to_nearest_marker(self, tmp_path: Path) -> None:
        (tmp_path / "setup.cfg").write_text("", encoding="utf-8")
        nested = tmp_path / "src" / "pkg" / "deep"
        nested.mkdir(parents=True)
        assert detect_project_root(nested) == tmp_path.resolve()

    def test_nearest_marker_wins(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / "setup.py").write_text("", encoding="utf-8")
        assert detect_project_root(inner / ".") == inner.resolve()

    def test_custom_markers(self, tmp_path: Path) -> None:
        (tmp_path / "composer.json").write_text("{}", encoding="utf-8")
        nested = tmp_path / "a"
        nested.mkdir()
        assert detect_project_root(nested, markers=("composer.json",)) == tmp_path.resolve()

    def test_directory_named_like_marker_is_ignored(self, tmp_path: Path) -> None:
        start = tmp_path / "start"
        (start / "lunar.marker").mkdir(parents=True)
        nested = start / "child"
        nested.mkdir()
        assert detect_project_root(nested, markers=("lunar.marker",)) == nested.resolve()

    def test_falls_back_to_start(self, tmp_path: Path) -> None:
        nested = tmp_path / "x"
        nested.mkdir()
        assert detect_project_root(nested, markers=("no-such-marker.txt",)) == nested.resolve()

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert detect_project_root() == tmp_path.resolve()
