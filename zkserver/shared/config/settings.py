# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from zkserver.shared.logging import logger

DEFAULT_CONFIG_FILE = "config.toml"
_DEFAULT_SECRETS = ("dev", "development", "test", "")

_DAY_MS = 24 * 60 * 60 * 1000
# Bounds keep datetime arithmetic and Event.wait() timeouts in range
MAX_TOKEN_EXPIRATION_MS = 10 * 365 * _DAY_MS
MAX_PURGE_INTERVAL_MS = 365 * _DAY_MS


class DatabaseConfig(BaseModel):
    pool_size: int = Field(10, ge=1)
    max_overflow: int = Field(5, ge=0)
    pool_timeout: float = Field(30.0, ge=0.1)

    model_config = ConfigDict(frozen=True)


class SecurityConfig(BaseModel):
    cookie_secure: bool = False
    cookie_samesite: str = "Lax"
    # Browser session cookie, not the server-side token lifetime
    session_max_age_days: int = Field(10, ge=1)

    model_config = ConfigDict(frozen=True)

    @field_validator("cookie_secure", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    ip: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    createdirs: bool = False
    db: Path = Path("./mahbloag.db")
    mainsite: str = "https://mahbloag.practica.site/"
    appname: str = "mahbloag"
    domain: str = "practica.site"
    admin_email: str = "admin@practica.site"
    token_expiration_ms: int = Field(7 * _DAY_MS, ge=1, le=MAX_TOKEN_EXPIRATION_MS)
    purge_interval_ms: int = Field(_DAY_MS, ge=1, le=MAX_PURGE_INTERVAL_MS)

    app_env: str = "development"
    secret_key: str = "dev"
    debug_logging: bool = False

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_prefix="ZKSERVER_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    @field_validator("createdirs", "debug_logging", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if self.is_production() and self.secret_key in _DEFAULT_SECRETS:
            logger.warning(
                "config: insecure secret_key in production, session cookies can be forged"
            )
        if self.is_production() and not self.security.cookie_secure:
            logger.warning("config: cookie_secure is disabled in production (use HTTPS!)")
        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(milliseconds=self.token_expiration_ms)

    @property
    def purge_interval(self) -> timedelta:
        return timedelta(milliseconds=self.purge_interval_ms)


def default_config() -> AppConfig:
    """Compiled-in defaults, ignoring the config file and the environment."""
    return AppConfig.model_construct()


def config_path() -> Path:
    return Path(os.getenv("ZKSERVER_CONFIG") or DEFAULT_CONFIG_FILE)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load the TOML config file, falling back to defaults on any problem.

    A missing file is not an error: environment overrides still apply on top of
    the defaults. An unreadable or invalid file yields the plain defaults.
    """
    path = Path(path) if path is not None else config_path()
    if not path.is_file():
        logger.info(f"config: {path} not found, using defaults")
        try:
            return AppConfig()
        except ValueError as exc:
            logger.error(f"config: invalid environment overrides, using defaults: {exc}")
            return default_config()

    try:
        values = TomlConfigSettingsSource(AppConfig, toml_file=path)()
        config = AppConfig(**values)
    except (OSError, ValueError) as exc:
        # tomllib.TOMLDecodeError and pydantic.ValidationError are ValueErrors
        logger.error(f"error loading {path}: {exc}; using defaults")
        return default_config()

    logger.info(f"config: loaded {path}")
    return config


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "config_path",
    "default_config",
    "load_config",
]
