"""
Process configuration for the concordances server.

Every setting can come from an environment variable; `concordserver.main`
lets command-line flags override them.
"""

import os
import re
from typing import Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from concordances.logging import parse_log_level
from concordances.ontology import is_valid_base_url

ENV_VARS = {
    "app_system_code": "APP_SYSTEM_CODE",
    "app_port": "APP_PORT",
    "public_api_url": "PUBLIC_API_URL",
    "cache_duration": "CACHE_DURATION",
    "log_level": "LOG_LEVEL",
    "db_driver_log_level": "DB_DRIVER_LOG_LEVEL",
    "database_url": "DATABASE_URL",
    "concepts_path": "CONCEPTS_PATH",
}

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration such as ``30s``, ``2h45m`` or ``1.5h`` into seconds."""
    text = value.strip()
    if text in ("0", "+0", "-0"):
        return 0.0
    sign = -1.0 if text.startswith("-") else 1.0
    text = text.lstrip("+-")
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_PART.match(text, position)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    return sign * total


def cache_control_header(cache_duration: str) -> str:
    """Build the Cache-Control value for successful GET responses."""
    return f"max-age={parse_duration(cache_duration):.0f}, public"


class Settings(BaseModel):
    """Server settings."""

    model_config = {"frozen": True}

    app_system_code: str = Field(default="public-concordances-api", description="System code of the application")
    app_port: int = Field(default=8080, ge=1, le=65535, description="Port to listen on")
    public_api_url: str = Field(
        default="http://api.ft.com",
        description="API gateway URL used when building concept API URLs, in the format scheme://host",
    )
    cache_duration: str = Field(default="30s", description="How long GET responses may be cached, e.g. 2h45m")
    log_level: str = Field(default="info", description="Log level of the app")
    db_driver_log_level: str = Field(default="WARN", description="Log level of the database driver")
    database_url: str = Field(default="sqlite:///./concordances.db", description="SQLAlchemy URL of the graph store")
    concepts_path: Optional[str] = Field(default=None, description="Concept JSON file or directory loaded at startup")

    @field_validator("public_api_url")
    @classmethod
    def _check_public_api_url(cls, value: str) -> str:
        if not is_valid_base_url(value):
            raise ValueError(f"invalid public API URL {value!r}, expected scheme://host")
        return value

    @field_validator("cache_duration")
    @classmethod
    def _check_cache_duration(cls, value: str) -> str:
        if parse_duration(value) < 0:
            raise ValueError(f"cache duration {value!r} is negative")
        return value

    @field_validator("log_level", "db_driver_log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        parse_log_level(value)
        return value

    @property
    def cache_control_header(self) -> str:
        return cache_control_header(self.cache_duration)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Settings":
        """Build settings from environment variables; keyword overrides win."""
        environ = os.environ if environ is None else environ
        values = {field: environ[var] for field, var in ENV_VARS.items() if environ.get(var)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
