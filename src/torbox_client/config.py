"""Configuration management using pydantic-settings"""

import logging
from pathlib import Path

import toml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import API_GENERAL_BASE_URL, API_SEARCH_BASE_URL


class Settings(BaseSettings):
    """Client settings loaded from environment and config.toml"""

    model_config = SettingsConfigDict(
        env_prefix='TORBOX_',
        case_sensitive=False,
        extra='ignore',
    )

    # Credentials
    api_key: str | None = Field(default=None, description='TorBox API key sent as a bearer token')

    # Service roots
    general_base_url: str = Field(default=API_GENERAL_BASE_URL, description='Base URL of the general API')
    search_base_url: str = Field(default=API_SEARCH_BASE_URL, description='Base URL of the search API')

    # HTTP settings
    timeout: float = Field(default=60.0, gt=0, description='Read/write timeout in seconds (file uploads included)')
    connect_timeout: float = Field(default=10.0, gt=0, description='Connect timeout in seconds')
    max_retries: int = Field(default=3, ge=0, le=10, description='Retries after the first attempt')
    max_connections: int = Field(default=10, ge=1, description='Connection pool size')
    max_keepalive_connections: int = Field(default=5, ge=0, description='Idle connections kept alive')
    keepalive_expiry: float = Field(default=30.0, ge=0, description='Idle connection lifetime in seconds')

    # Logging settings
    log_prefix: str = Field(default='torbox', description='Log prefix for logger names')
    log_level: int = Field(default=logging.INFO, description='Logging level')

    @field_validator('log_level', mode='before')
    @classmethod
    def parse_log_level(cls, v: str | int) -> int:
        """Parse log level from string or int"""
        if isinstance(v, str):
            if v.isdigit():
                return int(v)
            return getattr(logging, v.upper(), logging.INFO)
        return v

    @field_validator('general_base_url', 'search_base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Base URLs are joined with request paths by a single slash"""
        return v.rstrip('/')

    @classmethod
    def from_toml(cls, config_path: str | Path = 'config.toml') -> 'Settings':
        """Load settings from TOML file"""
        config_path = Path(config_path)
        if not config_path.is_absolute():
            config_path = Path.cwd() / config_path

        if config_path.exists():
            config_data = toml.load(config_path)
            return cls(**config_data)
        # If no config file, try to load from environment
        return cls()


# Global settings instance
settings = Settings.from_toml()
