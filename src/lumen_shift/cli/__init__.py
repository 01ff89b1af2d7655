"""CLI helpers exposed for other modules."""

from .ui import StageTracker

__all__ = ["StageTracker"]
