"""Lumen to Laravel migration pipeline."""

from __future__ import annotations

from .base import BaseStage, StageContext, StageResult
from .descriptor import ProjectDescriptor, convert_version, resolve_target_version
from .registry import StageRegistry
from .runner import MigrationReport, MigrationRunner, StageOutcome, run_migration
from .background import launch_migration

__all__ = [
    "BaseStage",
    "StageContext",
    "StageResult",
    "ProjectDescriptor",
    "convert_version",
    "resolve_target_version",
    "StageRegistry",
    "MigrationReport",
    "MigrationRunner",
    "StageOutcome",
    "run_migration",
    "launch_migration",
]
