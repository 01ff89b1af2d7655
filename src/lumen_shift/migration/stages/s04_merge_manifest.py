"""Stage 4: merge the Lumen composer.json into the Laravel one."""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

from ...core.constants import MICRO_FRAMEWORK_PACKAGE
from ...core.errors import ManifestError
from ...core.manifest import load_manifest, save_manifest
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry

logger = logging.getLogger(__name__)


def merge_manifests(origin: dict[str, Any], destination: dict[str, Any]) -> dict[str, Any]:
    """Merge origin dependencies and autoload rules into ``destination``.

    - ``laravel/lumen-framework`` is never carried over.
    - An origin ``require`` entry is added only when destination lacks the key.
    - ``autoload`` is merged shallowly, origin keys replacing destination keys.

    ``destination`` is updated in place and returned; ``origin`` is untouched.
    """
    origin_require = dict(origin.get("require") or {})
    origin_require.pop(MICRO_FRAMEWORK_PACKAGE, None)

    destination_require = destination.setdefault("require", {})
    for package, constraint in origin_require.items():
        if package not in destination_require:
            destination_require[package] = constraint
    # A stray lumen entry on the Laravel side would pull both frameworks in.
    destination_require.pop(MICRO_FRAMEWORK_PACKAGE, None)

    origin_autoload = origin.get("autoload")
    if origin_autoload is not None or "autoload" in destination:
        merged = dict(destination.get("autoload") or {})
        merged.update(copy.deepcopy(origin_autoload or {}))
        destination["autoload"] = merged

    return destination


def added_packages(before: dict[str, Any], after: dict[str, Any]) -> list[str]:
    return [name for name in after.get("require", {}) if name not in before.get("require", {})]


def merge_manifest_files(origin_path: Path, destination_path: Path) -> list[str]:
    """Merge two manifests on disk and rewrite the destination one.

    Returns:
        Package names added to the destination ``require`` section.

    Raises:
        ManifestError: If either manifest is missing, unreadable or invalid.
    """
    try:
        origin = load_manifest(origin_path)
        destination = load_manifest(destination_path)
        before = copy.deepcopy(destination)
        merge_manifests(origin, destination)
        save_manifest(destination_path, destination)
    except ManifestError as exc:
        logger.error("Error adjusting composer.json: %s", exc)
        raise

    return added_packages(before, destination)


@StageRegistry.register
class MergeManifestStage(BaseStage):
    """Carry Lumen dependencies and autoload rules into Laravel's composer.json."""

    stage_id = "merge_manifest"
    description = "Adjust composer.json"
    order = 4

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        added = merge_manifest_files(descriptor.origin_manifest, descriptor.destination_manifest)
        result = StageResult(success=True)
        if added:
            result.changes_made.append(f"Added {len(added)} packages: {', '.join(added)}")
        else:
            result.changes_made.append("No new packages to add")
        result.changes_made.append("Merged autoload section")
        return result
