"""Fire-and-forget launch of a migration run on a daemon thread."""

from __future__ import annotations

import logging
import threading

from ..core.composer import ComposerRunner
from .base import StageContext
from .descriptor import ProjectDescriptor
from .runner import MigrationRunner

logger = logging.getLogger(__name__)


def launch_migration(
    descriptor: ProjectDescriptor,
    *,
    merge_env: bool,
    composer: ComposerRunner,
) -> None:
    """Start the pipeline in the background and return immediately.

    No handle is returned: progress and completion are only observable
    through the log and the destination tree.
    """

    def _run() -> None:
        try:
            MigrationRunner(context=StageContext(composer=composer)).run(
                descriptor, merge_env=merge_env
            )
        except Exception:
            logger.exception("Migration of %s crashed", descriptor.name)

    thread = threading.Thread(
        target=_run,
        name=f"lumen-shift-{descriptor.name}",
        daemon=True,
    )
    thread.start()
    logger.info("Launched background migration for %s", descriptor.name)


__all__ = ["launch_migration"]
