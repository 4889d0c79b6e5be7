"""ProjectKit settings models and utilities."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, field_validator


DEFAULT_HOME = "~/.projectkit"

# Seconds between two device checks while waiting for a device to connect
DEFAULT_DEVICE_POLL_INTERVAL = 0.2


class ConfigurationError(Exception):
    """Exception raised when a required setting is missing."""

    pass


def get_projectkit_home() -> Path:
    """Directory holding settings, overridable with ``PROJECTKIT_HOME``."""
    return Path(os.environ.get("PROJECTKIT_HOME", os.path.expanduser(DEFAULT_HOME)))


class ProjectKitSettings(BaseModel):
    """Model for user-level ProjectKit settings."""

    project_home: str | None = None
    template_home: str | None = None
    main_template_repo: str | None = None

    git_user_name: str | None = None
    git_user_email: str | None = None

    build_command: str | None = None
    rebuild_command: str | None = None
    upload_command: str | None = None
    # None = no device check, the upload starts right after the build
    device_check_command: str | None = None
    device_poll_interval: float = DEFAULT_DEVICE_POLL_INTERVAL

    # Written by the open command; used when --project is not given
    last_project: str | None = None

    @field_validator("device_poll_interval")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        """Validate that the poll interval is positive."""
        if v <= 0:
            raise ValueError(f"Poll interval must be positive, got {v}")
        return v

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the path to the settings file."""
        return get_projectkit_home() / "settings.json"

    @classmethod
    def load(cls) -> "ProjectKitSettings":
        """Load settings from file.

        Returns:
            ProjectKitSettings instance with loaded settings, or defaults if the
            file doesn't exist or is corrupted
        """
        config_path = cls.get_config_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path) as f:
                data = json.load(f)
            return cls.model_validate(data)
        except (json.JSONDecodeError, ValueError):
            # If file is corrupted, return defaults
            return cls()

    def save(self) -> None:
        """Save settings to file."""
        config_path = self.get_config_path()

        # Ensure the settings directory exists
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)

    def require(self, name: str) -> str:
        """Return a string setting, raising if it is not configured.

        Raises:
            ConfigurationError: If the setting is unset or empty
        """
        value = getattr(self, name)
        if value is None or value == "":
            raise ConfigurationError(f"Configuration {name} is not defined")
        return value
