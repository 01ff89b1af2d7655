"""Per-run project descriptor and target version resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path

from ..core.constants import DESTINATION_SUFFIX, MANIFEST_FILE, MICRO_FRAMEWORK_PACKAGE
from ..core.errors import ManifestError
from ..core.manifest import load_manifest, require_section

_CARET_CONSTRAINT = re.compile(r"\^(\d+)\.(\d+)")


def convert_version(constraint: str) -> str:
    """Turn a caret constraint into a major wildcard.

    ``^9.0`` becomes ``9.*``; anything not starting with ``^<major>.<minor>``
    is returned unchanged.
    """
    match = _CARET_CONSTRAINT.match(constraint)
    if match:
        return f"{match.group(1)}.*"
    return constraint


@dataclass(frozen=True)
class ProjectDescriptor:
    """Identifies one migration run. Built once per run and never shared."""

    name: str
    origin: Path
    destination: Path
    version: str = ""

    @classmethod
    def for_paths(
        cls, origin: Path, project_name: str, destination: Path | None = None
    ) -> "ProjectDescriptor":
        origin = Path(origin).expanduser().resolve()
        if destination is None:
            destination = origin.with_name(origin.name + DESTINATION_SUFFIX)
        return cls(
            name=project_name,
            origin=origin,
            destination=Path(destination).expanduser().resolve(),
        )

    @classmethod
    def for_request(
        cls, repo_root: Path, project_name: str, project_path: str
    ) -> "ProjectDescriptor":
        """Derive origin ``repo_root/name/path`` and destination ``origin + "_new"``."""
        base = Path(repo_root).expanduser().resolve() / project_name
        origin = base / project_path
        destination = base / (project_path.rstrip("/\\") + DESTINATION_SUFFIX)
        return cls(name=project_name, origin=origin, destination=destination)

    def with_version(self, version: str) -> "ProjectDescriptor":
        return replace(self, version=version)

    @property
    def origin_manifest(self) -> Path:
        return self.origin / MANIFEST_FILE

    @property
    def destination_manifest(self) -> Path:
        return self.destination / MANIFEST_FILE

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "version": self.version,
            "origin": str(self.origin),
            "destination": str(self.destination),
        }


def resolve_target_version(origin: Path) -> str:
    """Read the Lumen constraint from the origin manifest and convert it."""
    manifest_path = origin / MANIFEST_FILE
    manifest = load_manifest(manifest_path)
    constraint = require_section(manifest, "require").get(MICRO_FRAMEWORK_PACKAGE)
    if not isinstance(constraint, str) or not constraint.strip():
        raise ManifestError(
            f"{manifest_path} does not require {MICRO_FRAMEWORK_PACKAGE}"
        )
    return convert_version(constraint.strip())


__all__ = ["ProjectDescriptor", "convert_version", "resolve_target_version"]
