"""
envbridge Configuration Module

Loads the configuration tree from YAML, environment variables and secret
files. Environment variable names are translated to dotted keys by
EnvironmentCallback; ``*_FILE`` variables are resolved by SecretCallback.

Author: envbridge Project
License: MIT
"""

from .callbacks import EnvironmentCallback, SecretCallback, load_secret
from .config_loader import ConfigLoader, load_config
from .errors import ConfigurationError, SecretFileError
from .keys import EnvKeyTables, build_env_key_tables, default_env_key_tables, is_secret_key
from .schema import Config, VALID_KEYS
from .validator import StructValidator

__all__ = [
    "Config",
    "ConfigLoader",
    "ConfigurationError",
    "EnvKeyTables",
    "EnvironmentCallback",
    "SecretCallback",
    "SecretFileError",
    "StructValidator",
    "VALID_KEYS",
    "build_env_key_tables",
    "default_env_key_tables",
    "is_secret_key",
    "load_config",
    "load_secret",
]
