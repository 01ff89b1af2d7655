"""Thin boundary around the composer executable."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

logger = logging.getLogger(__name__)

NO_INTERACTION_FLAG = "--no-interaction"


@dataclass(frozen=True)
class ComposerResult:
    """Normalized outcome of one composer invocation."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, in that order."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


class ComposerRunner(Protocol):
    def __call__(self, args: Sequence[str], cwd: Path | None = None) -> ComposerResult: ...


def run_composer(
    args: Sequence[str],
    cwd: Path | None = None,
    *,
    binary: str = "composer",
    no_interaction: bool = True,
    timeout: float | None = None,
) -> ComposerResult:
    """Run composer and normalize failure shape for deterministic handling.

    Blocks until the process exits. Never raises for process-level failures:
    a missing executable reports 127, a timeout reports 124.
    """
    command = [binary, *args]
    if no_interaction and NO_INTERACTION_FLAG not in command:
        command.append(NO_INTERACTION_FLAG)

    logger.info("Running: %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout,
        )
        result = ComposerResult(
            args=tuple(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
    except FileNotFoundError:
        result = ComposerResult(
            args=tuple(command),
            returncode=127,
            stdout="",
            stderr=f"{binary} executable not found on PATH",
        )
    except subprocess.TimeoutExpired:
        result = ComposerResult(
            args=tuple(command),
            returncode=124,
            stdout="",
            stderr=f"composer command timed out: {' '.join(command)}",
        )

    if result.ok:
        logger.debug("composer stdout: %s", result.stdout)
    else:
        logger.warning("composer exited with %s: %s", result.returncode, result.stderr.strip())
    return result


def composer_runner(
    *, binary: str = "composer", no_interaction: bool = True, timeout: float | None = None
) -> ComposerRunner:
    """Bind executable settings so stages only pass arguments and cwd."""

    def _run(args: Sequence[str], cwd: Path | None = None) -> ComposerResult:
        return run_composer(
            args, cwd, binary=binary, no_interaction=no_interaction, timeout=timeout
        )

    return _run


__all__ = ["ComposerResult", "ComposerRunner", "run_composer", "composer_runner"]
