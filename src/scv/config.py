"""Application configuration with pydantic-settings + JSON."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, JsonConfigSettingsSource, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


class ConfigLoadError(ValueError):
    """Raised when the configuration file cannot be read or is invalid."""


def _default_config_dir() -> Path:
    override = os.environ.get("SCV_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".scv"


def _default_repos_dir() -> Path:
    return Path.home() / "scv-repos"


def _default_database_path() -> Path:
    return _default_config_dir() / "scv.db"


def config_path() -> Path:
    """Location of the persisted JSON document."""
    return _default_config_dir() / CONFIG_FILENAME


class AppConfig(BaseSettings):
    """Root application configuration.

    Only the presentation fields are persisted; the directory fields are
    derived from the environment at startup.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCV_",
        extra="ignore",
    )

    theme: str = "neon_night"
    animation_speed: float = Field(default=1.0, gt=0.0, le=5.0)
    enable_particle_effects: bool = True
    frame_rate: int = Field(default=60, ge=1, le=240)

    config_dir: Path = Field(default_factory=_default_config_dir, exclude=True)
    repos_dir: Path = Field(default_factory=_default_repos_dir, exclude=True)
    database_path: Path = Field(default_factory=_default_database_path, exclude=True)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        json_path = config_path()
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if json_path.exists():
            sources = (*sources, JsonConfigSettingsSource(settings_cls, json_file=json_path))
        return sources

    @property
    def frame_period(self) -> float:
        """Seconds between two frames at the configured rate."""
        return 1.0 / self.frame_rate

    def ensure_dirs(self) -> None:
        """Create config and repository directories if they don't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.repos_dir.mkdir(parents=True, exist_ok=True)


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    """Write the persisted fields of *config* as pretty JSON."""
    save_path = path or config_path()
    save_path.parent.mkdir(parents=True, exist_ok=True)
    save_path.write_text(config.model_dump_json(indent=2))
    logger.debug("Saved configuration to %s", save_path)
    return save_path


def load_config() -> AppConfig:
    """Load application config, writing defaults if the file is absent."""
    try:
        config = AppConfig()
    except json.JSONDecodeError as exc:
        msg = f"config file contains invalid JSON: {exc}"
        raise ConfigLoadError(msg) from None
    except ValidationError as exc:
        msg = f"config file has invalid values: {exc}"
        raise ConfigLoadError(msg) from None

    config.ensure_dirs()
    if not config_path().exists():
        save_config(config)
        logger.info("Wrote default configuration to %s", config_path())
    return config
