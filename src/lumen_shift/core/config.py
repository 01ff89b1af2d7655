"""User-level configuration stored in ``<home>/config.yaml``.

Resolution order for every setting:

1. Explicit overrides passed by the caller (CLI options)
2. ``LUMEN_SHIFT_*`` environment variables
3. The YAML config file
4. Built-in defaults
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from .errors import ConfigError

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "LUMEN_SHIFT_HOME"
REPO_ROOT_ENV_VAR = "LUMEN_SHIFT_REPO_ROOT"
COMPOSER_ENV_VAR = "LUMEN_SHIFT_COMPOSER"
PORT_ENV_VAR = "LUMEN_SHIFT_PORT"

DEFAULT_REPO_ROOT = Path("storage") / "repositories"


def _is_windows() -> bool:
    return os.name == "nt"


def get_lumen_shift_home() -> Path:
    """Return the directory holding the user-level config file.

    Resolution order:
    1. LUMEN_SHIFT_HOME environment variable (all platforms)
    2. ~/.lumen-shift/ on macOS/Linux
    3. %LOCALAPPDATA%\\lumen-shift\\ on Windows (via platformdirs)
    """
    if env_home := os.environ.get(HOME_ENV_VAR):
        return Path(env_home)

    if _is_windows():
        from platformdirs import user_data_dir

        return Path(user_data_dir("lumen-shift"))

    return Path.home() / ".lumen-shift"


def config_path() -> Path:
    return get_lumen_shift_home() / "config.yaml"


@dataclass(frozen=True, slots=True)
class MigratorConfig:
    """Effective settings for migration runs and the HTTP trigger."""

    repo_root: Path = DEFAULT_REPO_ROOT
    composer_binary: str = "composer"
    composer_timeout: float | None = None
    no_interaction: bool = True
    host: str = "127.0.0.1"
    port: int = 5000
    log_level: str = "INFO"

    def to_dict(self) -> dict[str, object]:
        return {
            "repo_root": str(self.repo_root),
            "composer_binary": self.composer_binary,
            "composer_timeout": self.composer_timeout,
            "no_interaction": self.no_interaction,
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MigratorConfig":
        if not isinstance(data, dict):
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

        values: dict[str, Any] = {}
        if data.get("repo_root"):
            values["repo_root"] = Path(str(data["repo_root"])).expanduser()
        if data.get("composer_binary"):
            values["composer_binary"] = str(data["composer_binary"]).strip()
        if data.get("composer_timeout") is not None:
            values["composer_timeout"] = _as_float(data["composer_timeout"], "composer_timeout")
        if "no_interaction" in data:
            if not isinstance(data["no_interaction"], bool):
                raise ConfigError("Invalid no_interaction: expected true or false")
            values["no_interaction"] = data["no_interaction"]
        if data.get("host"):
            values["host"] = str(data["host"]).strip()
        if data.get("port") is not None:
            values["port"] = _as_port(data["port"])
        if data.get("log_level"):
            values["log_level"] = str(data["log_level"]).strip().upper()
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> "MigratorConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "repo_root" in changes:
            changes["repo_root"] = Path(changes["repo_root"]).expanduser()
        return replace(self, **changes)

    def resolved_repo_root(self) -> Path:
        return Path(self.repo_root).expanduser().resolve()


def _as_float(value: object, name: str) -> float:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {value!r}") from exc


def _as_port(value: object) -> int:
    try:
        port = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid port: expected an integer, got {value!r}") from exc
    if not 1 <= port <= 65535:
        raise ConfigError(f"Invalid port: {port} is outside 1-65535")
    return port


def _env_overrides() -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if repo_root := os.environ.get(REPO_ROOT_ENV_VAR):
        overrides["repo_root"] = Path(repo_root)
    if composer := os.environ.get(COMPOSER_ENV_VAR):
        overrides["composer_binary"] = composer
    if port := os.environ.get(PORT_ENV_VAR):
        overrides["port"] = _as_port(port)
    return overrides


def load_config(path: Path | None = None) -> MigratorConfig:
    """Load configuration from YAML and apply environment overrides."""
    path = path or config_path()

    if path.exists():
        yaml = YAML(typ="safe")
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = yaml.load(handle) or {}
        except Exception as exc:
            logger.error("Failed to load config: %s", exc)
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigError(f"Expected a mapping at the top of {path}")
        config = MigratorConfig.from_dict(payload)
    else:
        logger.debug("Config file not found: %s", path)
        config = MigratorConfig()

    return config.with_overrides(**_env_overrides())


def save_config(config: MigratorConfig, path: Path | None = None) -> Path:
    """Persist configuration to YAML, creating the home directory if needed."""
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    yaml = YAML()
    yaml.default_flow_style = False
    with path.open("w", encoding="utf-8") as handle:
        yaml.dump(config.to_dict(), handle)

    logger.info("Saved config to %s", path)
    return path


__all__ = [
    "HOME_ENV_VAR",
    "REPO_ROOT_ENV_VAR",
    "COMPOSER_ENV_VAR",
    "PORT_ENV_VAR",
    "MigratorConfig",
    "get_lumen_shift_home",
    "config_path",
    "load_config",
    "save_config",
]
