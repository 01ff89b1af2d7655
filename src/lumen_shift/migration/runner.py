"""Sequential, best-effort migration pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..core.composer import ComposerRunner, composer_runner
from . import stages as _stages  # noqa: F401  (registers stages)
from .base import BaseStage, StageContext, StageResult
from .descriptor import ProjectDescriptor
from .registry import StageRegistry

logger = logging.getLogger(__name__)

# (stage, status, result); status is "running", "done", "error" or "skipped".
StageObserver = Callable[[BaseStage, str, Optional[StageResult]], None]


@dataclass
class StageOutcome:
    stage_id: str
    description: str
    result: StageResult | None
    skipped: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "stage": self.stage_id,
            "description": self.description,
            "skipped": self.skipped,
            **(self.result.to_dict() if self.result else {}),
        }


@dataclass
class MigrationReport:
    """Recorded outcomes of one run. Failures are recorded, never raised."""

    descriptor: ProjectDescriptor
    outcomes: list[StageOutcome] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(o.result.success for o in self.outcomes if o.result is not None)

    @property
    def failed_stages(self) -> list[str]:
        return [o.stage_id for o in self.outcomes if o.result is not None and not o.result.success]

    def to_dict(self) -> dict[str, object]:
        return {
            "project": self.descriptor.to_dict(),
            "success": self.success,
            "failed_stages": self.failed_stages,
            "stages": [o.to_dict() for o in self.outcomes],
        }


class MigrationRunner:
    """Run every stage in order against one descriptor.

    Each stage gets the current descriptor and returns a StageResult. A failed
    result is logged and recorded and the next stage still runs.
    """

    def __init__(
        self,
        stages: Sequence[BaseStage] | None = None,
        context: StageContext | None = None,
    ) -> None:
        self.stages = list(stages) if stages is not None else StageRegistry.get_all()
        self.context = context or StageContext()

    def run(
        self,
        descriptor: ProjectDescriptor,
        *,
        merge_env: bool = False,
        observer: StageObserver | None = None,
    ) -> MigrationReport:
        report = MigrationReport(descriptor=descriptor)
        logger.info(
            "Migrating %s: %s -> %s", descriptor.name, descriptor.origin, descriptor.destination
        )

        for stage in self.stages:
            if stage.optional and not merge_env:
                report.outcomes.append(
                    StageOutcome(stage.stage_id, stage.description, None, skipped=True)
                )
                _notify(observer, stage, "skipped", None)
                continue

            logger.info("%s...", stage.description)
            _notify(observer, stage, "running", None)
            result = stage.run(descriptor, self.context)

            if result.success:
                logger.info("%s: done", stage.description)
                for warning in result.warnings:
                    logger.warning("%s: %s", stage.description, warning)
            else:
                logger.error("%s failed: %s", stage.description, "; ".join(result.errors))

            if result.descriptor is not None:
                descriptor = result.descriptor
                report.descriptor = descriptor

            report.outcomes.append(StageOutcome(stage.stage_id, stage.description, result))
            _notify(observer, stage, "done" if result.success else "error", result)

        if report.success:
            logger.info("Lumen to Laravel migration completed for %s", descriptor.name)
        else:
            logger.warning(
                "Lumen to Laravel migration finished for %s with failed stages: %s",
                descriptor.name,
                ", ".join(report.failed_stages),
            )
        return report


def _notify(
    observer: StageObserver | None, stage: BaseStage, status: str, result: StageResult | None
) -> None:
    if observer is None:
        return
    try:
        observer(stage, status, result)
    except Exception:
        logger.debug("Stage observer raised", exc_info=True)


def run_migration(
    origin: Path,
    project_name: str,
    *,
    destination: Path | None = None,
    merge_env: bool = False,
    composer: ComposerRunner | None = None,
    observer: StageObserver | None = None,
) -> MigrationReport:
    """Migrate the Lumen project at ``origin``; destination defaults to ``origin_new``."""
    descriptor = ProjectDescriptor.for_paths(origin, project_name, destination)
    runner = MigrationRunner(context=StageContext(composer=composer or composer_runner()))
    return runner.run(descriptor, merge_env=merge_env, observer=observer)


__all__ = [
    "StageObserver",
    "StageOutcome",
    "MigrationReport",
    "MigrationRunner",
    "run_migration",
]
