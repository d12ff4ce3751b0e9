"""
Base configuration for cc-transcript.

Settings are read from CC_TRANSCRIPT_* environment variables, and from a .env
file only when LOAD_ENV_FILE points at one.
"""

from __future__ import annotations

import os
import pathlib
from typing import TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

T = TypeVar('T', bound='BaseTranscriptSettings')


def _default_projects_dir() -> pathlib.Path:
    return pathlib.Path.home() / '.claude' / 'projects'


class BaseTranscriptSettings(pydantic_settings.BaseSettings):
    """Shared configuration for every cc-transcript entry point."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix='CC_TRANSCRIPT_',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='forbid',  # Reject unknown keys in the .env file
    )

    # Application metadata
    APP_NAME: str = 'cc-transcript'
    VERSION: str = '0.1.0'

    # Root holding one folder per project
    PROJECTS_DIR: pathlib.Path = pydantic.Field(default_factory=_default_projects_dir)

    @pydantic.field_validator('PROJECTS_DIR')
    @classmethod
    def expand_projects_dir(cls, v: pathlib.Path) -> pathlib.Path:
        """Allow ~ in the configured path."""
        return v.expanduser()


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Factory for creating settings with dynamic .env file loading.

    LOAD_ENV_FILE environment variable specifies custom .env file path.
    When unset, loads from environment variables only.

    Args:
        settings_class: Settings class to instantiate
        env_file: Optional path to .env file (overrides LOAD_ENV_FILE)

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If specified .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class()

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)


def lazy_settings(settings_class: type[T]) -> T:
    """
    Lazy settings - defers instantiation until first access.

    Returns:
        Proxy that instantiates settings on first access
    """
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))
