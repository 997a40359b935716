"""
Configuration Module

This module loads application configuration from environment variables
once at startup and freezes it into a Settings value that is passed to
the app factory and the server bootstrap.

Features:
- Environment loading
- CORS origin parsing
- Port validation
- Body size limits
- MongoDB connection settings

Data Model:
- Settings
- Byte sizes
- Origins

Dependencies:
- dotenv for loading
- os for env

Author: Snapped Development Team
"""

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple, Union

from dotenv import load_dotenv

DEFAULT_PORT = 8000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_MONGODB_URI = "mongodb://localhost:27017"
DEFAULT_DB_NAME = "backend"

# Ceiling for JSON and URL-encoded request bodies
BODY_LIMIT = "16kb"

_BYTE_UNITS = {
    "b": 1,
    "kb": 1024,
    "mb": 1024 ** 2,
    "gb": 1024 ** 3,
}
_BYTE_SIZE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(b|kb|mb|gb)?\s*$", re.IGNORECASE)

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class ConfigurationError(ValueError):
    """Raised when an environment value cannot be turned into a setting."""


def parse_byte_size(value: Union[int, str]) -> int:
    """
    Convert a byte-size string into a number of bytes.

    Args:
        value: Integer byte count or string like "16kb", "1mb", "512"

    Returns:
        int: Size in bytes

    Raises:
        ConfigurationError: If the value is not a valid size
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid byte size: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ConfigurationError(f"Invalid byte size: {value!r}")
        return value

    match = _BYTE_SIZE_RE.match(str(value))
    if not match:
        raise ConfigurationError(f"Invalid byte size: {value!r}")

    amount, unit = match.groups()
    return int(float(amount) * _BYTE_UNITS[(unit or "b").lower()])


def parse_origins(value: Optional[str]) -> Tuple[str, ...]:
    """Split a CORS_ORIGIN value into individual origins. Unset means any origin."""
    origins = tuple(origin.strip().rstrip("/") for origin in (value or "").split(",") if origin.strip())
    return origins or ("*",)


def parse_port(value: Optional[str]) -> int:
    if value is None or value.strip() == "":
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {value!r}")
    if not 0 < port < 65536:
        raise ConfigurationError(f"PORT out of range: {port}")
    return port


def parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r}")


@dataclass(frozen=True)
class Settings:
    """Immutable process-wide configuration."""

    cors_origins: Tuple[str, ...] = ("*",)
    cors_credentials: bool = True
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    body_limit: str = BODY_LIMIT
    mongodb_uri: str = DEFAULT_MONGODB_URI
    db_name: str = DEFAULT_DB_NAME
    log_level: str = "INFO"

    @property
    def body_limit_bytes(self) -> int:
        return parse_byte_size(self.body_limit)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        environ: Mapping to read from. Defaults to os.environ after
            loading a .env file.

    Returns:
        Settings: Frozen configuration

    Raises:
        ConfigurationError: For invalid values
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        cors_origins=parse_origins(environ.get("CORS_ORIGIN")),
        cors_credentials=parse_bool(environ.get("CORS_CREDENTIALS"), True),
        host=environ.get("HOST") or DEFAULT_HOST,
        port=parse_port(environ.get("PORT")),
        mongodb_uri=environ.get("MONGODB_URI") or DEFAULT_MONGODB_URI,
        db_name=environ.get("DB_NAME") or DEFAULT_DB_NAME,
        log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
    )
