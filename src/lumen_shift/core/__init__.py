"""Core utilities, configuration and the composer boundary."""

from .composer import ComposerResult, ComposerRunner, composer_runner, run_composer
from .config import MigratorConfig, load_config, save_config
from .errors import (
    ComposerError,
    ConfigError,
    LumenShiftError,
    ManifestError,
    RoutingError,
)
from .manifest import load_manifest, save_manifest

__all__ = [
    "ComposerResult",
    "ComposerRunner",
    "composer_runner",
    "run_composer",
    "MigratorConfig",
    "load_config",
    "save_config",
    "ComposerError",
    "ConfigError",
    "LumenShiftError",
    "ManifestError",
    "RoutingError",
    "load_manifest",
    "save_manifest",
]
