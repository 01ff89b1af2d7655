"""Base class and result envelope for pipeline stages."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from ..core.composer import ComposerRunner, composer_runner
from ..core.errors import LumenShiftError
from .descriptor import ProjectDescriptor

logger = logging.getLogger(__name__)


@dataclass
class StageResult:
    """Outcome of a single stage.

    A stage that resolves new run information (the target version) returns
    the updated descriptor; every other stage leaves ``descriptor`` unset.
    """

    success: bool
    changes_made: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    descriptor: ProjectDescriptor | None = None

    @classmethod
    def failure(cls, message: str, **kwargs: object) -> "StageResult":
        return cls(success=False, errors=[message], **kwargs)  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "changes_made": list(self.changes_made),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class StageContext:
    """Collaborators shared by the stages of one run."""

    composer: ComposerRunner = field(default_factory=composer_runner)


class BaseStage(ABC):
    """One ordered step of the Lumen to Laravel pipeline."""

    stage_id: ClassVar[str] = ""
    description: ClassVar[str] = ""
    order: ClassVar[int] = 0
    # Optional stages only run when the caller asks for them.
    optional: ClassVar[bool] = False

    @abstractmethod
    def apply(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        """Apply the stage. May raise LumenShiftError; ``run`` records it."""

    def run(self, descriptor: ProjectDescriptor, context: StageContext) -> StageResult:
        """Apply the stage and fold any exception into a failed result."""
        try:
            return self.apply(descriptor, context)
        except LumenShiftError as exc:
            return StageResult.failure(str(exc))
        except OSError as exc:
            return StageResult.failure(f"Filesystem error: {exc}")
        except Exception as exc:
            logger.exception("Unexpected failure in stage %s", self.stage_id)
            return StageResult.failure(f"Unexpected error: {exc}")


__all__ = ["StageResult", "StageContext", "BaseStage"]
