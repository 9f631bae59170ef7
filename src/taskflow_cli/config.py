"""Configuration management for Taskflow CLI."""

import json
import os
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

from taskflow_cli.models import ValidationFailure
from taskflow_cli.query import SORT_KEYS
from taskflow_cli.utils.logger import get_logger

DB_PATH_ENV = "TASKFLOW_DB"


class StorageConfig(BaseModel):
    """Storage configuration."""

    db_path: Optional[str] = Field(default=None)


class QueryConfig(BaseModel):
    """Task listing defaults."""

    default_sort: str = Field(default="created")

    @field_validator("default_sort")
    @classmethod
    def _known_sort(cls, value: str) -> str:
        if value not in SORT_KEYS:
            raise ValueError(f"must be one of {', '.join(SORT_KEYS)}")
        return value


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "table", "json", "yaml"] = Field(default="pretty")


class AuthConfig(BaseModel):
    """Authentication configuration."""

    session_ttl_hours: int = Field(default=24 * 14, gt=0)


class LogConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


class Config(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    log: LogConfig = Field(default_factory=LogConfig)


class ConfigManager:
    """Manages Taskflow CLI configuration."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("taskflow-cli"))
        self.data_dir = Path(user_data_dir("taskflow-cli"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return Config(**data)
            except (OSError, ValueError) as e:
                # If config is corrupted, return default
                get_logger().warning(
                    "Ignoring unreadable config %s: %s", self.config_file, e
                )
                return Config()
        return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            ValidationFailure: If the key is unknown or the value is rejected
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise ValidationFailure(f"Unknown configuration key: {key}", [key])
            current = current[k]
        if keys[-1] not in current:
            raise ValidationFailure(f"Unknown configuration key: {key}", [key])

        current[keys[-1]] = value

        try:
            self._config = Config(**config_dict)
        except ValidationError as e:
            raise ValidationFailure.from_pydantic(e) from e
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
        else:
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    def resolve_db_path(self) -> Optional[str]:
        """Database path: $TASKFLOW_DB, then storage.db_path, else the default."""
        return os.environ.get(DB_PATH_ENV) or self.config.storage.db_path

    def save_credentials(self, token: str, email: Optional[str] = None) -> None:
        """Save the session token of the logged-in user."""
        credentials = {"token": token}
        if email:
            credentials["email"] = email

        with open(self.credentials_file, "w") as f:
            json.dump(credentials, f, indent=2)

        # Set file permissions to be readable only by owner
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[dict[str, str]]:
        """Load authentication credentials."""
        if self.credentials_file.exists():
            try:
                with open(self.credentials_file, "r") as f:
                    return json.load(f)
            except (OSError, ValueError):
                return None
        return None

    def clear_credentials(self) -> None:
        """Clear authentication credentials."""
        if self.credentials_file.exists():
            self.credentials_file.unlink()


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
