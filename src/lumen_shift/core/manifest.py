"""Read and write composer.json manifests."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import ManifestError

logger = logging.getLogger(__name__)


def load_manifest(path: Path) -> dict[str, Any]:
    """Load a composer manifest, raising ManifestError when it is unusable."""
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(f"Expected a JSON object in {path}")
    return data


def save_manifest(path: Path, data: dict[str, Any]) -> None:
    """Write a composer manifest with composer's own 4-space indentation."""
    try:
        path.write_text(
            json.dumps(data, indent=4, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise ManifestError(f"Failed to write {path}: {exc}") from exc
    logger.debug("Wrote manifest %s", path)


def require_section(data: dict[str, Any], section: str) -> dict[str, Any]:
    """Return a dependency section, raising ManifestError when it is missing."""
    value = data.get(section)
    if not isinstance(value, dict):
        raise ManifestError(f"Manifest has no '{section}' section")
    return value


__all__ = ["load_manifest", "save_manifest", "require_section"]
