"""
globenv Configuration Management

Handles loading configuration from environment variables, .env files,
and config.yaml with proper validation using Pydantic.
"""

import os
import platform
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SHELL_FILES: dict[str, str] = {
    "/usr/bin/zsh": ".zshenv",
    "/bin/zsh": ".zshenv",
    "/bin/bash": ".bashrc",
}


def get_data_dir(create: bool = True) -> Path:
    """
    Get the data directory for globenv.

    Uses proper system-level locations:
    - Windows: %LOCALAPPDATA%\\globenv
    - macOS: ~/Library/Application Support/globenv
    - Linux: ~/.local/share/globenv (XDG compliant)

    Can be overridden via the GLOBENV_DATA environment variable.
    With create=False the path is only computed, nothing is made on disk.
    """
    data_dir = os.environ.get("GLOBENV_DATA")
    if data_dir:
        path = Path(data_dir)
        if create:
            path.mkdir(parents=True, exist_ok=True)
        return path

    system = platform.system()

    if system == "Windows":
        local_app_data = os.environ.get("LOCALAPPDATA")
        if local_app_data:
            path = Path(local_app_data) / "globenv"
        else:
            path = Path.home() / "AppData" / "Local" / "globenv"

    elif system == "Darwin":
        path = Path.home() / "Library" / "Application Support" / "globenv"

    else:
        xdg_data = os.environ.get("XDG_DATA_HOME")
        if xdg_data:
            path = Path(xdg_data) / "globenv"
        else:
            path = Path.home() / ".local" / "share" / "globenv"

    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def load_yaml_config() -> dict[str, Any]:
    """Load configuration from config.yaml if it exists."""
    config_path = get_data_dir(create=False) / "config.yaml"

    if not config_path.exists():
        # Try current directory
        config_path = Path("config.yaml")

    if config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{config_path} must contain a mapping")
        return loaded

    return {}


class Settings(BaseSettings):
    """Main settings container for globenv."""

    log_level: str = Field(default="WARNING", description="Console log level")
    log_file: bool = Field(default=False, description="Also log to data_dir/logs")
    registry_key: str = Field(
        default="Environment",
        description="Per-user registry key holding the variables (Windows)",
    )
    shell_files: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SHELL_FILES),
        description="Shell executable path -> init file name under HOME",
    )

    model_config = SettingsConfigDict(
        env_prefix="GLOBENV_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment and config files."""
        # Load .env from data directory first
        env_path = get_data_dir(create=False) / ".env"
        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path, override=False)

        yaml_config = load_yaml_config()

        # Env vars override YAML: only feed YAML keys whose env var is unset
        overrides: dict[str, Any] = {}
        for name in cls.model_fields:
            if name in yaml_config and not os.environ.get(f"GLOBENV_{name.upper()}"):
                overrides[name] = yaml_config[name]

        return cls(**overrides)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings
