"""
Pydantic model for the plugin configuration.
Provides validation for the upstream address and request credentials.
"""

from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from nanci_source.exceptions import ConfigurationError

DEFAULT_BASE_ADDRESS = "https://lx.mnari.cn"
DEFAULT_ACCOUNT_NAME = "nanci"
DEFAULT_ACCESS_KEY = "15346280q"
DEFAULT_USER_AGENT = "cy-music-request"

# Quality tags understood by the upstream service. Not enforced locally.
QUALITY_MAP = {
    "128k": {"name": "MP3 128kbps", "ext": "mp3", "color": "yellow"},
    "320k": {"name": "MP3 320kbps", "ext": "mp3", "color": "green"},
    "flac": {"name": "FLAC Lossless", "ext": "flac", "color": "cyan"},
}


class SourceConfig(BaseModel):
    """A validated configuration model for the upstream source."""

    base_address: str = DEFAULT_BASE_ADDRESS
    account_name: str = DEFAULT_ACCOUNT_NAME
    access_key: str = DEFAULT_ACCESS_KEY
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float | None = None

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("base_address")
    @classmethod
    def validate_base_address(cls, v: str) -> str:
        """Requires an http(s) address and drops any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base address must start with http:// or https://: {v}")
        v = v.rstrip("/")
        if v in ("http:", "https:"):
            raise ValueError("Base address must include a host.")
        return v

    @field_validator("account_name", "access_key")
    @classmethod
    def validate_credentials(cls, v: str) -> str:
        if not v:
            raise ValueError("Account name and access key cannot be empty.")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("Timeout must be a positive number of seconds.")
        return v

    @classmethod
    def build(cls, **options: Any) -> "SourceConfig":
        """
        Creates a config from keyword options, ignoring options set to None.

        Raises:
            ConfigurationError: If validation fails.
        """
        try:
            return cls(**{k: v for k, v in options.items() if v is not None})
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    @classmethod
    def get_ini_keys(cls) -> list[str]:
        """Returns all keys that are expected in the INI file."""
        return list(cls.model_fields)
