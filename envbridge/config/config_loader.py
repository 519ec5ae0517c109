"""
Configuration Loader

Loads the YAML configuration file, applies environment variable overrides
and secret files, remaps deprecated keys and validates the result against
the configuration schema. Problems are collected on a StructValidator so a
single load reports every issue at once.

Author: envbridge Project
License: MIT
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Set
from dotenv import load_dotenv
from pydantic import ValidationError

from .callbacks import EnvironmentCallback, SecretCallback
from .constants import (
    ENV_PREFIX,
    SECRET_SUFFIX,
    DEFAULT_CONFIG_PATH,
    DEPRECATED_KEYS,
    ERR_FMT_SECRET_ALREADY_DEFINED,
    ERR_FMT_ENV_KEY_UNEXPECTED,
    ERR_FMT_KEY_UNEXPECTED,
    ERR_FMT_KEY_DEPRECATED_CONFLICT,
    ERR_FMT_FILE_PARSE,
    ERR_FMT_FILE_READ,
    ERR_FMT_FILE_NOT_MAPPING,
    ERR_FMT_SCHEMA,
    WARN_FMT_KEY_DEPRECATED,
)
from .errors import ConfigurationError
from .keys import default_env_key_tables
from .naming import flatten, set_path
from .schema import Config, VALID_KEYS
from .validator import StructValidator
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ConfigLoader:
    """
    Configuration loader.

    Sources are applied in order: YAML file, plain environment variables,
    then secret files named by ``*_FILE`` environment variables.
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        prefix: str = ENV_PREFIX,
        strict: bool = True,
        validator: Optional[StructValidator] = None
    ):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to the configuration file. If None, uses
                CONFIG_PATH or the default location.
            environ: Environment to read; defaults to os.environ at load time
            prefix: Environment variable prefix
            strict: Raise ConfigurationError when the load records errors
            validator: Validator to collect into; a new one is created if None
        """
        # Load environment variables from .env if present
        load_dotenv()

        self.config_path = config_path or os.getenv("CONFIG_PATH", DEFAULT_CONFIG_PATH)
        self.environ = environ
        self.prefix = prefix
        self.strict = strict
        self.validator = validator or StructValidator()
        self.tables = default_env_key_tables(prefix)
        self._config: Optional[Config] = None
        self._env_passthrough: Set[str] = set()

    def load(self) -> Optional[Config]:
        """
        Load and validate configuration.

        Returns:
            Validated Config object, or None when not strict and the schema
            validation failed

        Raises:
            ConfigurationError: If strict and any error was recorded
        """
        self.validator.clear()
        self._env_passthrough.clear()
        environ = dict(os.environ if self.environ is None else self.environ)

        values = self._load_yaml()
        env_keys = self._merge_env_vars(values, environ)
        self._merge_secrets(values, environ, env_keys)
        self._apply_deprecations(values)
        self._drop_unexpected_keys(values)

        self._config = self._build(values)

        for warning in self.validator.warnings():
            logger.warning(warning)

        if self.validator.has_errors():
            errors = self.validator.errors()
            logger.error(f"Configuration loaded with {len(errors)} error(s)")
            if self.strict:
                raise ConfigurationError(
                    f"configuration from {self.config_path} has {len(errors)} error(s)",
                    errors
                )
        else:
            logger.info(f"Configuration loaded from {self.config_path}")

        return self._config

    def _load_yaml(self) -> Dict[str, Any]:
        """
        Load the YAML configuration file as dotted keys.

        A missing file yields no values so schema defaults apply.
        """
        config_file = Path(self.config_path)

        if not config_file.exists():
            logger.info(f"Configuration file not found, using defaults: {config_file}")
            return {}

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.validator.push(ERR_FMT_FILE_PARSE % (config_file, e))
            return {}
        except OSError as e:
            self.validator.push(ERR_FMT_FILE_READ % (config_file, e))
            return {}

        if not isinstance(data, dict):
            self.validator.push(ERR_FMT_FILE_NOT_MAPPING % config_file)
            return {}

        return flatten(data)

    def _merge_env_vars(self, values: Dict[str, Any], environ: Mapping[str, str]) -> Set[str]:
        """
        Merge plain environment variables into the values.

        Variables the mapper passes through unchanged are recorded in
        ``self._env_passthrough`` so they can be reported by name.

        Returns:
            Keys set from the environment
        """
        callback = EnvironmentCallback(
            self.tables.key_map,
            self.tables.ignored_keys,
            valid_keys=list(VALID_KEYS) + list(DEPRECATED_KEYS),
            prefix=self.prefix
        )

        env_keys = set()
        for name, raw in environ.items():
            if not name.startswith(self.prefix):
                continue
            key, value = callback(name, raw)
            if not key:
                continue
            values[key] = value
            env_keys.add(key)
            if key == name:
                self._env_passthrough.add(name)
            logger.debug(f"Environment variable {name} -> {key}")

        return env_keys

    def _merge_secrets(
        self,
        values: Dict[str, Any],
        environ: Mapping[str, str],
        env_keys: Set[str]
    ) -> None:
        """Merge secret files named by ``*_FILE`` environment variables."""
        callback = SecretCallback(self.tables.secret_key_map, self.validator)

        for name, path in environ.items():
            if not name.startswith(self.prefix) or not name.endswith(SECRET_SUFFIX):
                continue
            key, value = callback(name, path)
            if not key:
                continue
            if key in env_keys or values.get(key) is not None:
                self.validator.push(ERR_FMT_SECRET_ALREADY_DEFINED % (path, key))
                continue
            values[key] = value

    def _apply_deprecations(self, values: Dict[str, Any]) -> None:
        """Move deprecated keys to their replacements, with a warning."""
        for old, new in DEPRECATED_KEYS.items():
            if old not in values:
                continue
            value = values.pop(old)
            if new in values:
                self.validator.push(ERR_FMT_KEY_DEPRECATED_CONFLICT % (old, new, old))
                continue
            self.validator.push_warning(WARN_FMT_KEY_DEPRECATED % (old, new))
            values[new] = value

    def _drop_unexpected_keys(self, values: Dict[str, Any]) -> None:
        """Remove and report keys the schema does not define."""
        valid = set(VALID_KEYS)
        for key in list(values):
            if key in valid:
                continue
            del values[key]
            if key in self._env_passthrough:
                self.validator.push(ERR_FMT_ENV_KEY_UNEXPECTED % key)
            else:
                self.validator.push(ERR_FMT_KEY_UNEXPECTED % key)

    def _build(self, values: Dict[str, Any]) -> Optional[Config]:
        """Build the nested tree and validate it against the schema."""
        tree: Dict[str, Any] = {}
        for key, value in values.items():
            set_path(tree, key, value)

        try:
            return Config(**tree)
        except ValidationError as e:
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"])
                self.validator.push(ERR_FMT_SCHEMA % (location, error["msg"]))
            return None

    def reload(self) -> Optional[Config]:
        """
        Reload configuration from all sources.

        Returns:
            Reloaded Config object
        """
        return self.load()

    @property
    def config(self) -> Optional[Config]:
        """Get the current configuration object."""
        return self._config


def load_config(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    strict: bool = True
) -> Optional[Config]:
    """
    Convenience function to load configuration.

    Args:
        config_path: Optional path to config file
        environ: Optional environment mapping
        strict: Raise on errors

    Returns:
        Loaded and validated Config object
    """
    loader = ConfigLoader(config_path, environ=environ, strict=strict)
    return loader.load()
