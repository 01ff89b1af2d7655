"""Stage 9 (optional): merge the Lumen .env into the Laravel .env."""

from __future__ import annotations

from pathlib import Path

from ...core.constants import ENV_FILE
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry


def parse_env_content(content: str) -> dict[str, str]:
    """Parse ``KEY=VALUE`` lines into an ordered mapping.

    The value is everything after the first ``=``. Lines without ``=``,
    lines with an empty key and ``#`` comments are dropped.
    """
    env_vars: dict[str, str] = {}
    for line in content.splitlines():
        key, separator, value = line.partition("=")
        key = key.strip()
        if not separator or not key or key.startswith("#"):
            continue
        env_vars[key] = value.strip()
    return env_vars


def merge_env_vars(origin: dict[str, str], destination: dict[str, str]) -> dict[str, str]:
    """Union of both sets; destination values win on key collision.

    Keys keep origin order, followed by destination-only keys.
    """
    merged = dict(origin)
    merged.update(destination)
    return merged


def serialize_env(env_vars: dict[str, str]) -> str:
    return "\n".join(f"{key}={value}" for key, value in env_vars.items())


def merge_env_files(origin_path: Path, destination_path: Path) -> tuple[int, int]:
    """Overwrite ``destination_path`` with the merged variable set.

    A missing destination file counts as an empty set; a missing origin
    file raises FileNotFoundError.

    Returns:
        Tuple of (number of merged keys, number of keys added from origin).
    """
    origin_vars = parse_env_content(origin_path.read_text(encoding="utf-8"))
    destination_vars = (
        parse_env_content(destination_path.read_text(encoding="utf-8"))
        if destination_path.exists()
        else {}
    )

    merged = merge_env_vars(origin_vars, destination_vars)
    destination_path.write_text(serialize_env(merged), encoding="utf-8")
    return len(merged), len(merged) - len(destination_vars)


@StageRegistry.register
class MergeEnvStage(BaseStage):
    stage_id = "merge_env"
    description = "Merge .env files"
    order = 9
    optional = True

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        destination_env = descriptor.destination / ENV_FILE
        result = StageResult(success=True)
        if not destination_env.exists():
            result.warnings.append(f"No {ENV_FILE} in destination, creating one")

        total, added = merge_env_files(descriptor.origin / ENV_FILE, destination_env)
        result.changes_made.append(f"Merged {ENV_FILE}: {total} keys ({added} from Lumen)")
        return result
