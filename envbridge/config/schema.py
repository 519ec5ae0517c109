"""
Configuration Schema and Models

Pydantic models for the configuration tree. They provide defaults, type
checking and the list of valid dotted keys used to build the environment
variable tables.

Author: envbridge Project
License: MIT
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Type
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""
    TEXT = "text"
    JSON = "json"


class Theme(str, Enum):
    """Portal themes."""
    LIGHT = "light"
    DARK = "dark"
    GREY = "grey"
    AUTO = "auto"


class SectionModel(BaseModel):
    """Base for configuration sections; unknown keys are rejected earlier by the loader."""

    model_config = ConfigDict(
        extra="forbid",
        use_enum_values=True,
        validate_assignment=True,
        validate_default=True
    )


class LogConfig(SectionModel):
    """Logging configuration."""

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Application logging level"
    )
    format: LogFormat = Field(
        default=LogFormat.TEXT,
        description="Log output format"
    )
    file_path: Optional[str] = Field(
        default=None,
        description="Log file path (console only when unset)"
    )
    keep_stdout: bool = Field(
        default=True,
        description="Keep console output when logging to a file"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("file_path")
    @classmethod
    def validate_file_path(cls, v):
        """Ensure log file path is absolute."""
        if v and not Path(v).is_absolute():
            raise ValueError(f"log file_path must be absolute: {v}")
        return v


class ServerConfig(SectionModel):
    """HTTP server configuration."""

    host: str = Field(
        default="0.0.0.0",
        description="Listen address"
    )
    port: int = Field(
        default=9091,
        description="Listen port"
    )
    path: str = Field(
        default="",
        description="Sub-path the portal is served under"
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v):
        """Ensure port is in range."""
        if not 0 < v < 65536:
            raise ValueError(f"port must be between 1 and 65535: {v}")
        return v


class SessionConfig(SectionModel):
    """Session cookie configuration."""

    name: str = Field(
        default="authelia_session",
        description="Session cookie name"
    )
    domain: Optional[str] = Field(
        default=None,
        description="Domain the session cookie is scoped to"
    )
    secret: Optional[str] = Field(
        default=None,
        description="Secret used to encrypt session data"
    )
    expiration: int = Field(
        default=3600,
        description="Session lifetime in seconds"
    )
    inactivity: int = Field(
        default=300,
        description="Inactivity timeout in seconds"
    )


class LocalStorageConfig(SectionModel):
    """SQLite storage configuration."""

    path: Optional[str] = Field(
        default=None,
        description="Path to the SQLite database"
    )


class MySQLStorageConfig(SectionModel):
    """MySQL storage configuration."""

    host: Optional[str] = Field(default=None, description="Database host")
    port: int = Field(default=3306, description="Database port")
    database: Optional[str] = Field(default=None, description="Database name")
    username: Optional[str] = Field(default=None, description="Database user")
    password: Optional[str] = Field(default=None, description="Database password")


class PostgreSQLStorageConfig(SectionModel):
    """PostgreSQL storage configuration."""

    host: Optional[str] = Field(default=None, description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: Optional[str] = Field(default=None, description="Database name")
    username: Optional[str] = Field(default=None, description="Database user")
    password: Optional[str] = Field(default=None, description="Database password")
    ssl_mode: str = Field(default="disable", description="libpq sslmode")


class StorageConfig(SectionModel):
    """Storage backend configuration."""

    encryption_key: Optional[str] = Field(
        default=None,
        description="Key used to encrypt sensitive columns"
    )
    local: LocalStorageConfig = Field(default_factory=LocalStorageConfig)
    mysql: MySQLStorageConfig = Field(default_factory=MySQLStorageConfig)
    postgres: PostgreSQLStorageConfig = Field(default_factory=PostgreSQLStorageConfig)


class SMTPNotifierConfig(SectionModel):
    """SMTP notifier configuration."""

    host: Optional[str] = Field(default=None, description="SMTP server host")
    port: int = Field(default=25, description="SMTP server port")
    username: Optional[str] = Field(default=None, description="SMTP user")
    password: Optional[str] = Field(default=None, description="SMTP password")
    sender: Optional[str] = Field(default=None, description="Envelope sender address")


class NotifierConfig(SectionModel):
    """Notification delivery configuration."""

    disable_startup_check: bool = Field(
        default=False,
        description="Skip the notifier connectivity check at startup"
    )
    smtp: SMTPNotifierConfig = Field(default_factory=SMTPNotifierConfig)


class LDAPConfig(SectionModel):
    """LDAP authentication backend configuration."""

    url: Optional[str] = Field(default=None, description="LDAP server URL")
    base_dn: Optional[str] = Field(default=None, description="Base distinguished name")
    user: Optional[str] = Field(default=None, description="Bind user")
    password: Optional[str] = Field(default=None, description="Bind password")


class AuthenticationBackendConfig(SectionModel):
    """First factor authentication backend configuration."""

    disable_reset_password: bool = Field(
        default=False,
        description="Disable the reset password flow"
    )
    ldap: LDAPConfig = Field(default_factory=LDAPConfig)


class Config(SectionModel):
    """
    Root configuration model.

    Loaded from the YAML configuration file, then overridden by environment
    variables and secret files.
    """

    theme: Theme = Field(default=Theme.LIGHT, description="Portal theme")
    jwt_secret: Optional[str] = Field(
        default=None,
        description="Secret used to sign identity verification tokens"
    )
    default_redirection_url: Optional[str] = Field(
        default=None,
        description="Where to redirect after login when no target is given"
    )
    log: LogConfig = Field(default_factory=LogConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    notifier: NotifierConfig = Field(default_factory=NotifierConfig)
    authentication_backend: AuthenticationBackendConfig = Field(
        default_factory=AuthenticationBackendConfig
    )

    @field_validator("theme", mode="before")
    @classmethod
    def normalize_theme(cls, v):
        """Accept theme names in any case."""
        if isinstance(v, str):
            return v.lower()
        return v


def collect_keys(model: Type[BaseModel], parent: str = "") -> List[str]:
    """
    List the dotted leaf keys of a model, descending into nested sections.

    Args:
        model: Pydantic model class
        parent: Dotted prefix of the model's own section

    Returns:
        Keys in field declaration order
    """
    keys: List[str] = []
    for name, field in model.model_fields.items():
        key = f"{parent}.{name}" if parent else name
        annotation = field.annotation
        if isinstance(annotation, type) and issubclass(annotation, BaseModel):
            keys.extend(collect_keys(annotation, key))
        else:
            keys.append(key)
    return keys


VALID_KEYS = tuple(collect_keys(Config))
