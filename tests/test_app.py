"""Tests for lunar_cli.cli.app — entry point and the process error boundary."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.logging import RichHandler

from lunar_cli.cli import app as app_module
from lunar_cli.cli import exit_codes
from lunar_cli.cli.log import LOG_LEVEL_ENV, apply_level, configure_logging, parse_level
from lunar_cli.exceptions import ConfigurationUnreadableError


@pytest.fixture()
def project(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    isolated_sys_path: list[str],
    package_log_level: None,
) -> Path:
    monkeypatch.setenv(app_module.ROOT_ENV, str(tmp_path))
    return tmp_path


# ---------------------------------------------------------------------------
# main
# ---------------------------------------------------------------------------

class TestMain:
    def test_lists_commands(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app_module.main([]) == exit_codes.SUCCESS
        out = capsys.readouterr().out
        assert "Console v1.0.0" in out
        assert "fs:tree" in out

    def test_runs_command(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        (project / "docs").mkdir()
        (project / "docs" / "index.md").write_text("", encoding="utf-8")

        assert app_module.main(["fs:tree", str(project / "docs"), "--flat"]) == 0
        assert capsys.readouterr().out.strip() == "index.md"

    def test_unknown_command(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert app_module.main(["nope"]) == exit_codes.UNKNOWN_COMMAND
        assert 'Unknown command: "nope"' in capsys.readouterr().out

    def test_root_override_is_forwarded(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        run_console = MagicMock(return_value=0)
        monkeypatch.setattr(app_module, "run_console", run_console)

        app_module.main(["hello", "--help"])

        run_console.assert_called_once_with(
            [app_module.PROGRAM_NAME, "hello", "--help"],
            project.resolve(),
        )


# ---------------------------------------------------------------------------
# cli() error boundary
# ---------------------------------------------------------------------------

class TestCliBoundary:
    def _run(self, monkeypatch: pytest.MonkeyPatch, behaviour: MagicMock) -> int:
        monkeypatch.setattr(app_module, "main", behaviour)
        monkeypatch.setattr(app_module, "configure_logging", MagicMock())
        with pytest.raises(SystemExit) as excinfo:
            app_module.cli()
        return int(excinfo.value.code or 0)

    def test_success_exit_code(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, MagicMock(return_value=0)) == 0

    def test_handler_exit_code_forwarded(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, MagicMock(return_value=3)) == 3

    def test_domain_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        error = ConfigurationUnreadableError("Invalid JSON in cli.json", hint="Fix it.")
        code = self._run(monkeypatch, MagicMock(side_effect=error))

        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "Error: Invalid JSON in cli.json" in err
        assert "Hint: Fix it." in err

    def test_keyboard_interrupt(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = self._run(monkeypatch, MagicMock(side_effect=KeyboardInterrupt))
        assert code == exit_codes.KEYBOARD_INTERRUPT
        assert "Aborted by user." in capsys.readouterr().err

    def test_unexpected_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = self._run(monkeypatch, MagicMock(side_effect=RuntimeError("kaboom")))
        assert code == exit_codes.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "Unexpected error" in err
        assert "RuntimeError: kaboom" in err
        assert "LUNAR_CLI_LOG_LEVEL=DEBUG" in err


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

class TestLogging:
    @pytest.mark.parametrize(
        "value, expected",
        [("debug", logging.DEBUG), (" INFO ", logging.INFO), ("nope", None), (None, None), ("", None)],
    )
    def test_parse_level(self, value: str | None, expected: int | None) -> None:
        assert parse_level(value) == expected

    def test_configure_installs_one_handler(
        self, monkeypatch: pytest.MonkeyPatch, package_log_level: None
    ) -> None:
        logger = logging.getLogger("lunar_cli")
        monkeypatch.setattr(logger, "handlers", [])
        monkeypatch.setenv(LOG_LEVEL_ENV, "INFO")

        configure_logging()
        configure_logging()

        assert sum(isinstance(h, RichHandler) for h in logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_explicit_level_wins_over_environment(
        self, monkeypatch: pytest.MonkeyPatch, package_log_level: None
    ) -> None:
        logger = logging.getLogger("lunar_cli")
        monkeypatch.setattr(logger, "handlers", [])
        monkeypatch.setenv(LOG_LEVEL_ENV, "INFO")

        configure_logging("error")

        assert logger.level == logging.ERROR

    def test_apply_level(self, package_log_level: None) -> None:
        assert apply_level("warning") is True
        assert logging.getLogger("lunar_cli").level == logging.WARNING
        assert apply_level("loud") is False
