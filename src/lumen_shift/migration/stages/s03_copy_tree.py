"""Stage 3: copy Lumen application subtrees into the Laravel project."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from ...core.constants import COPIED_SUBTREES, PUBLIC_DIR, PUBLIC_ENTRY_POINT
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry

logger = logging.getLogger(__name__)


def copy_tree(source: Path, destination: Path, exclude: str | None = None) -> list[Path]:
    """Recursively copy ``source`` into ``destination``.

    Existing destination files are overwritten. Files named ``exclude`` are
    skipped and a destination file of that name is left as it is. Symlinks
    are followed and copied as regular content.

    Returns:
        Destination paths of the copied files, in traversal order.
    """
    copied: list[Path] = []
    destination.mkdir(parents=True, exist_ok=True)

    with os.scandir(source) as entries:
        items = sorted(entries, key=lambda entry: entry.name)

    for item in items:
        source_path = Path(item.path)
        destination_path = destination / item.name

        if item.is_dir():
            copied.extend(copy_tree(source_path, destination_path, exclude))
            continue

        if exclude and item.name == exclude:
            logger.debug("Skipping %s", source_path)
            continue

        shutil.copy2(source_path, destination_path)
        copied.append(destination_path)

    return copied


@StageRegistry.register
class CopyTreeStage(BaseStage):
    """Copy app, resources, config, public, routes, database, storage and tests."""

    stage_id = "copy_files"
    description = "Copy Lumen files"
    order = 3

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        result = StageResult(success=True)

        for folder in COPIED_SUBTREES:
            source = descriptor.origin / folder
            if not source.is_dir():
                result.warnings.append(f"{folder}/ not found in origin, skipped")
                continue

            exclude = PUBLIC_ENTRY_POINT if folder == PUBLIC_DIR else None
            copied = copy_tree(source, descriptor.destination / folder, exclude=exclude)
            result.changes_made.append(f"Copied {len(copied)} files from {folder}/")

        return result
