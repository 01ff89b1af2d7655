"""Tests for the composer subprocess boundary."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from lumen_shift.core.composer import ComposerResult, composer_runner, run_composer


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    completed = MagicMock()
    completed.returncode = returncode
    completed.stdout = stdout
    completed.stderr = stderr
    return completed


class TestComposerResult:
    def test_output_joins_streams(self) -> None:
        result = ComposerResult(args=("install",), returncode=2, stdout="out", stderr="err")

        assert result.output == "out\nerr"
        assert result.ok is False

    def test_output_skips_empty_streams(self) -> None:
        assert ComposerResult(args=(), returncode=0, stdout="", stderr="err").output == "err"


class TestRunComposer:
    def test_appends_no_interaction(self, tmp_path: Path) -> None:
        with patch("lumen_shift.core.composer.subprocess.run", return_value=_completed(stdout="ok")) as run:
            result = run_composer(["install"], tmp_path)

        command = run.call_args.args[0]
        assert command == ["composer", "install", "--no-interaction"]
        assert run.call_args.kwargs["cwd"] == str(tmp_path)
        assert result.ok
        assert result.stdout == "ok"

    def test_interaction_allowed(self) -> None:
        with patch("lumen_shift.core.composer.subprocess.run", return_value=_completed()) as run:
            run_composer(["install"], binary="composer2", no_interaction=False)

        assert run.call_args.args[0] == ["composer2", "install"]
        assert run.call_args.kwargs["cwd"] is None

    def test_flag_is_not_duplicated(self) -> None:
        with patch("lumen_shift.core.composer.subprocess.run", return_value=_completed()) as run:
            run_composer(["install", "--no-interaction"])

        assert run.call_args.args[0].count("--no-interaction") == 1

    def test_failure_is_normalized(self) -> None:
        with patch(
            "lumen_shift.core.composer.subprocess.run",
            return_value=_completed(returncode=2, stderr="Problem 1"),
        ):
            result = run_composer(["install"])

        assert result.returncode == 2
        assert result.output == "Problem 1"

    def test_missing_binary_reports_127(self) -> None:
        with patch("lumen_shift.core.composer.subprocess.run", side_effect=FileNotFoundError()):
            result = run_composer(["install"], binary="nope")

        assert result.returncode == 127
        assert "nope executable not found" in result.stderr

    def test_timeout_reports_124(self) -> None:
        with patch(
            "lumen_shift.core.composer.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="composer", timeout=1),
        ):
            result = run_composer(["install"], timeout=1)

        assert result.returncode == 124
        assert "timed out" in result.stderr


class TestComposerRunner:
    def test_binds_settings(self, tmp_path: Path) -> None:
        runner = composer_runner(binary="/opt/composer", no_interaction=False, timeout=5)

        with patch("lumen_shift.core.composer.subprocess.run", return_value=_completed()) as run:
            runner(["install"], cwd=tmp_path)

        assert run.call_args.args[0] == ["/opt/composer", "install"]
        assert run.call_args.kwargs["timeout"] == 5
        assert run.call_args.kwargs["cwd"] == str(tmp_path)
