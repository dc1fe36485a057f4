"""
Configuration management for the macos-use tool server.

Loads settings from environment variables and provides a centralized
configuration object for all components.

Configuration precedence (highest to lowest):
1. CLI arguments (passed as kwargs to ServerConfig)
2. Environment variables (MACOS_USE_* prefix)
3. .env file
4. pyproject.toml [tool.macos_use] section
5. Hardcoded defaults
"""

import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# Import tomllib for Python 3.11+, tomli for Python 3.10
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..models.actions import ActionOptions
from ..models.enums import LogLevel

logger = logging.getLogger(__name__)


def load_pyproject_defaults(path: Path | None = None) -> dict[str, Any]:
    """
    Load defaults from [tool.macos_use] section in pyproject.toml.

    Args:
        path: pyproject.toml location (defaults to the working directory)

    Returns:
        Dictionary of configuration overrides from pyproject.toml
    """
    pyproject_path = path or Path("pyproject.toml")

    if not pyproject_path.exists():
        return {}

    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        logger.warning(f"Could not load pyproject.toml: {e}")
        return {}
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Could not parse pyproject.toml: {e}")
        return {}

    tool_config = data.get("tool", {}).get("macos_use", {})
    if tool_config:
        logger.debug(f"Loaded {len(tool_config)} settings from pyproject.toml")
    return tool_config


class PyProjectTomlSettingsSource(PydanticBaseSettingsSource):
    """
    A pydantic-settings source that loads configuration from pyproject.toml.
    """

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        """Not used in this implementation."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load and return configuration from pyproject.toml."""
        return load_pyproject_defaults()


class ServerConfig(BaseSettings):
    """
    Main configuration class for the macos-use tool server.

    Covers server identity, engine selection, logging, and the default
    ActionOptions record every call starts from.
    """

    model_config = SettingsConfigDict(
        env_prefix="MACOS_USE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server identity (advertised during MCP initialization)
    server_name: str = Field(default="SwiftMacOSServerDirect", description="MCP server name")
    server_version: str = Field(default="1.3.0", description="MCP server version")
    tool_prefix: str = Field(
        default="macos-use_", description="Prefix of every advertised tool name"
    )

    # Automation engine ("package.module:attribute"); empty selects the dry-run engine
    engine: str = Field(default="", description="Import path of the automation engine")

    # Default ActionOptions
    default_traverse_before: bool = Field(default=False)
    default_traverse_after: bool = Field(default=False)
    default_show_diff: bool = Field(default=False)
    default_only_visible_elements: bool = Field(default=False)
    default_show_animation: bool = Field(default=True)
    default_animation_duration: float = Field(default=0.8, description="Seconds")
    default_delay_after_action: float = Field(default=0.2, description="Seconds")
    max_duration_seconds: float | None = Field(
        default=None,
        description="Upper bound for animationDuration and delayAfterAction (None: unbounded)",
    )

    # Monitoring and Logging
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    enable_rich_console: bool = Field(
        default=True, description="Enable rich stderr output (banner, operation markers)"
    )

    # Log Rotation Configuration
    log_file: Path | None = Field(
        default=None,
        description="Path to application log file (set to None to disable file logging)",
    )
    log_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum log file size before rotation"  # 10MB
    )
    log_backup_count: int = Field(default=5, description="Number of backup log files to keep")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize the sources and their priority for loading configuration.

        Returns:
            Tuple of settings sources in priority order
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PyProjectTomlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("server_name", "server_version")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Server identity must be non-empty"""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("default_animation_duration", "default_delay_after_action")
    @classmethod
    def validate_default_duration(cls, v: float) -> float:
        """Default durations must be non-negative"""
        if v < 0:
            raise ValueError(f"duration must be >= 0, got {v}")
        return v

    @field_validator("max_duration_seconds")
    @classmethod
    def validate_max_duration(cls, v: float | None) -> float | None:
        """Ensure the duration bound, when set, is positive"""
        if v is None:
            return v
        if v <= 0:
            raise ValueError(f"max_duration_seconds must be > 0, got {v}")
        if v > 600:
            logger.warning(
                f"Very high max_duration_seconds ({v}). "
                "A single call may hold the automation engine for a long time."
            )
        return v

    @model_validator(mode="after")
    def validate_cross_field_constraints(self) -> "ServerConfig":
        """Default durations must fit under the configured bound"""
        if self.max_duration_seconds is None:
            return self
        for name in ("default_animation_duration", "default_delay_after_action"):
            if getattr(self, name) > self.max_duration_seconds:
                raise ValueError(
                    f"{name} ({getattr(self, name)}) exceeds "
                    f"max_duration_seconds ({self.max_duration_seconds})"
                )
        return self

    def default_options(self) -> ActionOptions:
        """The ActionOptions record every call starts from."""
        return ActionOptions(
            traverse_before=self.default_traverse_before,
            traverse_after=self.default_traverse_after,
            show_diff=self.default_show_diff,
            only_visible_elements=self.default_only_visible_elements,
            show_animation=self.default_show_animation,
            animation_duration=self.default_animation_duration,
            delay_after_action=self.default_delay_after_action,
        )

    def ensure_log_directory(self) -> None:
        """Ensure the log directory exists."""
        if self.log_file and self.log_file.parent:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global configuration instance
_config: ServerConfig | None = None


def get_config() -> ServerConfig:
    """
    Get the global configuration instance.

    Returns:
        ServerConfig instance
    """
    global _config
    if _config is None:
        _config = ServerConfig()
        _config.ensure_log_directory()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
