"""Stage registry for the migration pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Type

if TYPE_CHECKING:
    from .base import BaseStage


class StageRegistry:
    """Registry of all pipeline stages, ordered by stage number."""

    _stages: Dict[str, Type["BaseStage"]] = {}

    @classmethod
    def register(cls, stage_class: Type["BaseStage"]) -> Type["BaseStage"]:
        """Decorator to register a stage class.

        Raises:
            ValueError: If stage_id is not set or the order slot is taken
        """
        if not stage_class.stage_id:
            raise ValueError(f"Stage {stage_class.__name__} must have a stage_id")
        for existing in cls._stages.values():
            if existing.order == stage_class.order and existing.stage_id != stage_class.stage_id:
                raise ValueError(
                    f"Stage {stage_class.stage_id} reuses order {stage_class.order} "
                    f"of {existing.stage_id}"
                )
        cls._stages[stage_class.stage_id] = stage_class
        return stage_class

    @classmethod
    def get_all(cls) -> List["BaseStage"]:
        """Get all stages as instances, in pipeline order."""
        instances = [s() for s in cls._stages.values()]
        return sorted(instances, key=lambda s: s.order)

    @classmethod
    def get_by_id(cls, stage_id: str) -> "BaseStage | None":
        stage_class = cls._stages.get(stage_id)
        return stage_class() if stage_class else None

    @classmethod
    def clear(cls) -> None:
        """Clear all registered stages (for testing)."""
        cls._stages.clear()


__all__ = ["StageRegistry"]
