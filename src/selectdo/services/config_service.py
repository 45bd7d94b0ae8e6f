"""Configuration service for Select + Do.

Single source of truth for configuration: loads and saves ``config.json``
in the user config directory and resolves where the task database lives.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel

from selectdo.models.config_models import AppConfig
from selectdo.utils.logger import configure_logging, get_logger


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("selectdo"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("selectdo"))

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def db_path(self) -> Path:
        """Database file from config, or the default in the data dir."""
        configured = self.config.storage.db_path
        if configured:
            return Path(configured).expanduser()
        return self.data_dir / "selectdo.db"

    def load_config(self) -> AppConfig:
        """Load configuration from storage."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # First run
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        self._apply_logging()
        return self._config

    def save_config(self):
        """Save the current configuration to storage."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self, key: str | None = None):
        """Reset the whole configuration, or one dotted key, to defaults."""
        if key is None:
            self._config = AppConfig()
            self.save_config()
            self._apply_logging()
            get_logger().info("config reset")
            return

        default_value = self._lookup(AppConfig(), key)
        self.set(key, default_value)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        return self._lookup(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        The result is validated as a whole before it replaces the current
        configuration.

        Raises:
            KeyError: If the key does not exist
            ValueError: If the new value is invalid
        """
        self._lookup(self.config, key)
        keys = key.split(".")
        config_dict = self.config.model_dump(mode="json")

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        self._config = AppConfig.model_validate(config_dict)
        self.save_config()
        self._apply_logging()
        get_logger().info("config set: %s", key)

    def _apply_logging(self) -> None:
        logging_config = self.config.logging
        configure_logging(logging_config.level, logging_config.dir)

    @staticmethod
    def _lookup(config: AppConfig, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                raise KeyError(key)
            value = getattr(value, k)
        if isinstance(value, BaseModel):
            return value.model_dump(mode="json")
        if isinstance(value, Enum):
            return value.value
        return value


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
