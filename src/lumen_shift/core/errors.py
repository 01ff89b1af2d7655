"""Exception hierarchy shared across lumen-shift."""

from __future__ import annotations


class LumenShiftError(RuntimeError):
    """Base class for all lumen-shift failures."""


class ConfigError(LumenShiftError):
    """Raised when the configuration file cannot be parsed or validated."""


class ManifestError(LumenShiftError):
    """Raised when a composer.json cannot be read, parsed or updated."""


class RoutingError(LumenShiftError):
    """Raised when routing files cannot be rewritten or relocated."""


class ComposerError(LumenShiftError):
    """Raised when a composer invocation fails."""

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.output = output


__all__ = [
    "LumenShiftError",
    "ConfigError",
    "ManifestError",
    "RoutingError",
    "ComposerError",
]
