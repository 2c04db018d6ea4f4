"""Configuration management for Model Playground.

Settings live in ``~/.model_playground/config.json``. The file is optional;
a missing or malformed file falls back to defaults.
"""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from model_playground.utils.log import get_logger


logger = get_logger()

USER_CONFIG_DIR_NAME = ".model_playground"
USER_CONFIG_FILE_NAME = "config.json"
CONFIG_DIR_ENV = "MODEL_PLAYGROUND_HOME"


def get_config_dir() -> Path:
    """Return the per-user directory holding config, credentials and logs."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / USER_CONFIG_DIR_NAME


class PlaygroundConfig(BaseModel):
    """User configuration stored in ~/.model_playground/config.json"""

    # Initial selection for new conversations
    default_provider: str = "openai"
    default_model: Optional[str] = None

    # Override for the credential store location
    credentials_file: Optional[str] = Field(default=None)

    # User preferences
    verbose: bool = False

    @field_validator("default_provider")
    @classmethod
    def _normalize_provider(cls, value: str) -> str:
        normalized = (value or "").strip().lower()
        return normalized or "openai"

    @field_validator("default_model")
    @classmethod
    def _blank_model_is_unset(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    def credentials_path(self) -> Path:
        """Resolve where provider API keys are persisted."""
        if self.credentials_file:
            return Path(self.credentials_file).expanduser()
        return get_config_dir() / "credentials.json"


class ConfigManager:
    """Loads and saves the user configuration file."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self._explicit_path = config_path
        self._config: Optional[PlaygroundConfig] = None

    @property
    def config_path(self) -> Path:
        if self._explicit_path is not None:
            return self._explicit_path
        return get_config_dir() / USER_CONFIG_FILE_NAME

    def get_config(self) -> PlaygroundConfig:
        """Load and return the configuration."""
        if self._config is None:
            path = self.config_path
            if path.exists():
                try:
                    data = json.loads(path.read_text(encoding="utf-8"))
                    self._config = PlaygroundConfig(**data)
                    logger.debug(
                        "[config] Loaded configuration",
                        extra={
                            "path": str(path),
                            "default_provider": self._config.default_provider,
                        },
                    )
                except (
                    json.JSONDecodeError,
                    OSError,
                    UnicodeDecodeError,
                    ValueError,
                    TypeError,
                ) as e:
                    logger.warning(
                        "Error loading config: %s: %s",
                        type(e).__name__,
                        e,
                        extra={"path": str(path)},
                    )
                    self._config = PlaygroundConfig()
            else:
                self._config = PlaygroundConfig()
                logger.debug(
                    "[config] Config not found; using defaults",
                    extra={"path": str(path)},
                )
        return self._config

    def save_config(self, config: PlaygroundConfig) -> None:
        """Save configuration."""
        path = self.config_path
        path.parent.mkdir(parents=True, exist_ok=True)
        self._config = config
        path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
        logger.debug(
            "[config] Saved configuration",
            extra={"path": str(path), "default_provider": config.default_provider},
        )

    def reset(self) -> None:
        """Drop the cached configuration so the next read hits disk."""
        self._config = None


# Global instance
config_manager = ConfigManager()


def get_config() -> PlaygroundConfig:
    """Get the user configuration."""
    return config_manager.get_config()


def save_config(config: PlaygroundConfig) -> None:
    """Save the user configuration."""
    config_manager.save_config(config)
