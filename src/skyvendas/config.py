"""
Configuration management for skyvendas.

Loads settings from environment variables and .env files.
Priority: Environment vars > .env file > defaults
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from skyvendas.utils.errors import ConfigurationError

DEFAULT_API_BASE_URL = "https://skyvendas-production.up.railway.app"

# Global config singleton
_config: Optional[Config] = None


class Config(BaseModel):
    """Application configuration loaded from environment."""

    # API
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL)
    api_token: str = Field(default="")
    request_timeout: float = Field(default=60.0, gt=0)

    # Page sizes per list
    products_page_size: int = Field(default=10, ge=1)
    posts_page_size: int = Field(default=20, ge=1)
    ads_limit: int = Field(default=100, ge=1)

    # Logging
    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)

    @classmethod
    def from_env(cls) -> Config:
        """Create config from environment variables."""
        try:
            return cls(
                api_base_url=os.getenv("SKYVENDAS_API_BASE_URL", DEFAULT_API_BASE_URL),
                api_token=os.getenv("SKYVENDAS_API_TOKEN", ""),
                request_timeout=os.getenv("SKYVENDAS_REQUEST_TIMEOUT", "60"),
                products_page_size=os.getenv("SKYVENDAS_PRODUCTS_PAGE_SIZE", "10"),
                posts_page_size=os.getenv("SKYVENDAS_POSTS_PAGE_SIZE", "20"),
                ads_limit=os.getenv("SKYVENDAS_ADS_LIMIT", "100"),
                log_level=os.getenv("LOG_LEVEL", "INFO"),
                debug=os.getenv("DEBUG", "false").lower() in ("true", "1"),
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                "Check the SKYVENDAS_* environment variables",
            ) from e

    @classmethod
    def load(cls, env_file: str = ".env") -> Config:
        """Load config from .env file, then environment variables."""
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)

        return cls.from_env()

    @property
    def has_token(self) -> bool:
        """Whether an API token is configured."""
        return bool(self.api_token)


def get_config() -> Config:
    """Get or create the global config singleton."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def reset_config() -> None:
    """Reset the global config (for testing)."""
    global _config
    _config = None
