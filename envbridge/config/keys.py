"""
Environment Key Tables

Builds the static lookup tables consumed by the environment translators:
the key map (variable name -> dotted key), the ignore list and the secret
key map (``*_FILE`` variable name -> dotted key).

Author: envbridge Project
License: MIT
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Optional

from .constants import (
    ENV_PREFIX,
    ENV_DELIMITER,
    KEY_DELIMITER,
    SECRET_SUFFIX,
    SECRET_NAMES,
    DEPRECATED_KEYS,
)
from .naming import key_to_env_name
from .schema import VALID_KEYS


def is_secret_key(key: str) -> bool:
    """Whether the value of a dotted key may be supplied through a secret file."""
    return key.rsplit(KEY_DELIMITER, 1)[-1] in SECRET_NAMES


def _frozen_map(data: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class EnvKeyTables:
    """Read-only tables shared by the key mapper and the secret resolver."""
    key_map: Mapping[str, str] = field(default_factory=_frozen_map)
    ignored_keys: FrozenSet[str] = field(default_factory=frozenset)
    secret_key_map: Mapping[str, str] = field(default_factory=_frozen_map)


def build_env_key_tables(
    keys: Iterable[str],
    prefix: str = ENV_PREFIX,
    delimiter: str = ENV_DELIMITER
) -> EnvKeyTables:
    """
    Derive the environment tables from a list of valid dotted keys.

    Every key gets its legacy single-delimiter name (``AUTHELIA_SERVER_PORT``).
    Keys containing the delimiter inside a segment also get the
    double-delimiter name (``AUTHELIA__STORAGE_MYSQL_PASSWORD``), since the
    naming convention alone would split ``mysql_password`` style segments.
    Secret keys get ``_FILE`` names in both forms; those names are ignored
    by the plain mapper and resolved by the secret resolver instead.

    Args:
        keys: Valid dotted configuration keys
        prefix: Variable prefix including its trailing delimiter
        delimiter: Delimiter used in environment variable names

    Returns:
        Frozen EnvKeyTables
    """
    key_map = {}
    ignored = set()
    secret_map = {}
    alt_prefix = prefix + delimiter

    for key in keys:
        key_map[key_to_env_name(key, prefix, delimiter)] = key
        if delimiter in key:
            key_map[key_to_env_name(key, alt_prefix, delimiter)] = key

        if is_secret_key(key):
            for variable_prefix in (prefix, alt_prefix):
                name = key_to_env_name(key, variable_prefix, delimiter, SECRET_SUFFIX)
                ignored.add(name)
                secret_map[name] = key

    return EnvKeyTables(
        key_map=_frozen_map(key_map),
        ignored_keys=frozenset(ignored),
        secret_key_map=_frozen_map(secret_map)
    )


def default_env_key_tables(prefix: str = ENV_PREFIX) -> EnvKeyTables:
    """Tables for the configuration schema, including deprecated keys."""
    return build_env_key_tables(list(VALID_KEYS) + list(DEPRECATED_KEYS), prefix=prefix)
