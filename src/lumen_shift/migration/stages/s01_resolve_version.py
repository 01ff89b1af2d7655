"""Stage 1: resolve the Laravel version constraint from the Lumen manifest."""

from __future__ import annotations

from ...core.constants import MICRO_FRAMEWORK_PACKAGE
from ..base import BaseStage, StageContext, StageResult
from ..descriptor import ProjectDescriptor, resolve_target_version
from ..registry import StageRegistry


@StageRegistry.register
class ResolveVersionStage(BaseStage):
    """Derive ``<major>.*`` from the origin's lumen-framework constraint."""

    stage_id = "resolve_version"
    description = "Resolve target Laravel version"
    order = 1

    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        version = resolve_target_version(descriptor.origin)
        return StageResult(
            success=True,
            changes_made=[f"Resolved {MICRO_FRAMEWORK_PACKAGE} constraint to {version}"],
            descriptor=descriptor.with_version(version),
        )
