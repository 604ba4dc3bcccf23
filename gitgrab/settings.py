"""
git-grab Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .pattern import DEFAULT_PATTERN_TEXT


class GrabSettings(BaseSettings):
    """
    git-grab configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in current directory
    3. Default values (lowest priority)

    Command line options override all of these.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="GRAB_",  # All git-grab env vars must start with GRAB_
    )

    home: Path | None = Field(
        default=None,
        description="Directory substituted for ~ and {home}; defaults to the user's home (env: GRAB_HOME)",
    )

    pattern: str = Field(
        default=DEFAULT_PATTERN_TEXT,
        description="Destination pattern for cloned repositories (env: GRAB_PATTERN)",
    )

    copy_path: bool = Field(
        default=False,
        description="Copy the destination path to the clipboard after cloning (env: GRAB_COPY_PATH)",
    )

    git_command: str = Field(
        default="git",
        description="Executable used to clone repositories (env: GRAB_GIT_COMMAND)",
    )

    # Capability flag, disable on systems without clipboard tools
    clipboard_support: bool = Field(
        default=True,
        description="Whether clipboard options are available (env: GRAB_CLIPBOARD_SUPPORT)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: GRAB_LOG_LEVEL)",
    )

    def resolve_home(self) -> Path:
        """Return the configured home, falling back to the user's home directory."""
        if self.home is not None:
            return self.home
        try:
            return Path.home()
        except RuntimeError as e:
            raise ConfigurationError("unable to determine home directory") from e


# Global settings instance
_settings: GrabSettings | None = None


def get_settings() -> GrabSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        GrabSettings instance
    """
    global _settings
    if _settings is None:
        _settings = GrabSettings()
    return _settings


def reload_settings() -> GrabSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh GrabSettings instance
    """
    global _settings
    _settings = GrabSettings()
    return _settings
