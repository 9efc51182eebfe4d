# docstore/core/config.py
"""
Configuration schema and loading for docstore.

A store needs four connection fields (host, user, password, database name)
supplied once at construction. They can come from a dict, a YAML file or the
environment:

    from docstore.core.config import StoreConfig, load_store_config

    config = StoreConfig(host="127.0.0.1", user="app", password="secret", name="app")
    config = load_store_config("docstore.yaml")
    config = StoreConfig.from_env()

The original credential key `pass` is accepted as an alias for `password`.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from docstore.logging.logger import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "DOCSTORE_"


# =============================================================================
# Errors
# =============================================================================


class ConfigError(Exception):
    """Base error for configuration issues."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path:
            message = f"{message} (file: {path})"
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when a config file doesn't exist."""

    pass


class ConfigParseError(ConfigError):
    """Raised when YAML parsing fails."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when config doesn't match schema."""

    pass


# =============================================================================
# Schema
# =============================================================================


class Driver(str, Enum):
    """Backing relational engine."""

    POSTGRES = "postgres"
    SQLITE = "sqlite"  # name is a file path or ":memory:"


class StoreConfig(BaseModel):
    """
    Connection settings for a DocumentStore.

    host/user/password/name mirror the four credential fields of the store;
    the rest tune id generation and the driver.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    host: str = Field(
        default="127.0.0.1",
        description="Host on which the database server is running",
    )
    user: str = Field(
        default="",
        description="User with access to the chosen database",
    )
    password: str = Field(
        default="",
        validation_alias=AliasChoices("password", "pass"),
        description="Password for the user",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Database name (file path for sqlite)",
    )
    driver: Driver = Field(
        default=Driver.POSTGRES,
        description="Backing engine: 'postgres' or 'sqlite'",
    )
    port: Optional[int] = Field(
        default=None,
        ge=1,
        le=65535,
        description="Server port. None = driver default",
    )
    connect_timeout: int = Field(
        default=10,
        ge=1,
        le=600,
        description="Seconds to wait when connecting",
    )
    id_length: int = Field(
        default=10,
        ge=1,
        le=255,
        description="Length of ids generated by push()",
    )
    max_id_attempts: Optional[int] = Field(
        default=100,
        ge=1,
        description="Collision retries for push() before giving up. None = unbounded",
    )

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "StoreConfig":
        """
        Build a config from DOCSTORE_* environment variables.

        Unset variables fall back to the schema defaults.
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for field_name in ("host", "user", "password", "name", "driver", "port"):
            value = environ.get(f"{ENV_PREFIX}{field_name.upper()}")
            if value is not None:
                data[field_name] = value
        return validate_store_config(data)


# =============================================================================
# Loading
# =============================================================================


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML file and return it as a dictionary.

    Raises:
        ConfigNotFoundError: If file doesn't exist
        ConfigParseError: If YAML is invalid
    """
    p = Path(path)

    if not p.exists():
        raise ConfigNotFoundError("Config file not found", path=p)

    if p.is_dir():
        raise ConfigError("Config path is a directory, not a file", path=p)

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigParseError(f"Invalid YAML syntax: {e}", path=p) from e
    except OSError as e:
        raise ConfigParseError(f"Failed to read config: {e}", path=p) from e

    if not isinstance(data, dict):
        raise ConfigParseError("Config root must be a mapping (dict)", path=p)

    logger.debug(f"Loaded config from {p}")
    return data


def load_store_config(path: Union[str, Path]) -> StoreConfig:
    """
    Load and validate a store config file.

    The file may hold the fields at the top level or under a `docstore` key.
    """
    data = load_yaml(path)
    if isinstance(data.get("docstore"), dict):
        data = data["docstore"]
    return validate_store_config(data, Path(path))


def validate_store_config(data: Dict[str, Any], path: Optional[Path] = None) -> StoreConfig:
    """Validate a raw mapping, raising ConfigValidationError on bad fields."""
    try:
        return StoreConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid store config: {e}", path=path) from e


__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "Driver",
    "StoreConfig",
    "load_store_config",
    "load_yaml",
    "validate_store_config",
]
