"""Stage 2: scaffold the Laravel destination with composer create-project."""

from __future__ import annotations

from ...core.constants import FULL_FRAMEWORK_SKELETON
from ...core.errors import ComposerError
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor
from ..registry import StageRegistry


def create_project_args(descriptor: ProjectDescriptor) -> list[str]:
    args = ["create-project", "--prefer-dist", FULL_FRAMEWORK_SKELETON, str(descriptor.destination)]
    # An unresolved version lets composer pick the latest skeleton.
    if descriptor.version:
        args.append(descriptor.version)
    return args


@StageRegistry.register
class ScaffoldStage(BaseStage):
    """Create a fresh Laravel project at the destination path."""

    stage_id = "scaffold"
    description = "Create Laravel project"
    order = 2

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        result = StageResult(success=True)
        if not descriptor.version:
            result.warnings.append("No target version resolved, using latest laravel/laravel")

        outcome = context.composer(create_project_args(descriptor))
        if not outcome.ok:
            raise ComposerError(
                f"composer create-project failed with exit code {outcome.returncode}: "
                f"{outcome.stderr.strip()}",
                output=outcome.output,
            )

        result.changes_made.append(
            f"Created {FULL_FRAMEWORK_SKELETON} {descriptor.version or '(latest)'} "
            f"at {descriptor.destination}"
        )
        return result
