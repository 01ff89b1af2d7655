"""Stage 8: install dependencies, dropping platform-incompatible packages once.

When ``composer install`` fails because some packages require a newer
runtime than the one installed, those packages are logged to
``removed_packages.txt``, removed from ``require`` and ``require-dev`` and
the install is retried a single time with ``--no-scripts``. There is no
second removal round: whatever the retry reports is the final outcome.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from ...core.composer import ComposerRunner
from ...core.constants import LOCK_FILE, MANIFEST_FILE, REMOVED_PACKAGES_LOG
from ...core.errors import ComposerError
from ...core.manifest import load_manifest, require_section, save_manifest
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry

logger = logging.getLogger(__name__)

INSTALL_ARGS = ("install",)
RETRY_ARGS = ("install", "--no-scripts")

# e.g. "vendor/pkg[1.2.3, ..., 1.4.0] require php ^8.2 -> your php version (7.4)
#       does not satisfy that requirement."
INCOMPATIBLE_PACKAGE_PATTERN = re.compile(
    r"([A-Za-z0-9/._-]+)\[v?\d+(?:\.\d+)*[^\]\n]*\]\s+require\b.*?"
    r"->\s*your\s+[\w-]+\s+version\s+\([^)\n]*\)\s+does not satisfy that requirement"
)


def find_incompatible_packages(output: str) -> list[str]:
    """Collect package names from runtime-version conflict lines, in order.

    Duplicates are kept.
    """
    packages: list[str] = []
    for line in output.splitlines():
        match = INCOMPATIBLE_PACKAGE_PATTERN.search(line)
        if match:
            packages.append(match.group(1))
    return packages


def record_removed_packages(log_path: Path, packages: list[str]) -> None:
    with log_path.open("a", encoding="utf-8") as handle:
        handle.write("Incompatible packages:\n" + "\n".join(packages) + "\n\n")


def remove_packages(manifest: dict, packages: list[str]) -> None:
    """Delete ``packages`` from ``require`` and ``require-dev``.

    Raises:
        ManifestError: If the manifest lacks a ``require-dev`` section.
    """
    require = require_section(manifest, "require")
    require_dev = require_section(manifest, "require-dev")
    for package in packages:
        require.pop(package, None)
        require_dev.pop(package, None)


def remove_stale_lock(project_root: Path) -> bool:
    lock_file = project_root / LOCK_FILE
    if lock_file.exists():
        logger.info("Removing existing %s", lock_file)
        lock_file.unlink()
        return True
    return False


def install_dependencies(project_root: Path, composer: ComposerRunner) -> StageResult:
    """Run composer install with the single conflict-resolution retry.

    Raises:
        ComposerError: If the install fails and cannot be recovered.
        ManifestError: If composer.json cannot be updated for the retry.
    """
    result = StageResult(success=True)
    if remove_stale_lock(project_root):
        result.changes_made.append(f"Removed stale {LOCK_FILE}")

    logger.info("Installing dependencies in %s", project_root)
    first = composer(list(INSTALL_ARGS), cwd=project_root)
    if first.ok:
        result.changes_made.append("Dependencies installed")
        return result

    logger.error("Error installing dependencies (exit %s)", first.returncode)
    packages = find_incompatible_packages(first.output)
    if not packages:
        raise ComposerError(
            f"composer install failed with exit code {first.returncode} "
            "and no incompatible packages were detected",
            output=first.output,
        )

    logger.info("Removing incompatible packages: %s", ", ".join(packages))
    record_removed_packages(project_root / REMOVED_PACKAGES_LOG, packages)
    result.changes_made.append(
        f"Logged {len(packages)} incompatible packages to {REMOVED_PACKAGES_LOG}"
    )

    manifest_path = project_root / MANIFEST_FILE
    manifest = load_manifest(manifest_path)
    remove_packages(manifest, packages)
    save_manifest(manifest_path, manifest)
    result.changes_made.append(f"Removed from {MANIFEST_FILE}: {', '.join(packages)}")

    logger.info("Retrying composer install after removing incompatible packages")
    retry = composer(list(RETRY_ARGS), cwd=project_root)
    if not retry.ok:
        raise ComposerError(
            f"composer install retry failed with exit code {retry.returncode}",
            output=retry.output,
        )

    result.changes_made.append("Dependencies installed after cleanup")
    return result


@StageRegistry.register
class InstallDependenciesStage(BaseStage):
    stage_id = "install_dependencies"
    description = "Install dependencies"
    order = 8

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        return install_dependencies(descriptor.destination, context.composer)
