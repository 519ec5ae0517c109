"""
Naming Helpers

Conversions between environment variable names, dotted configuration keys
and nested configuration trees.

Author: envbridge Project
License: MIT
"""

from typing import Any, Dict, Optional

from .constants import ENV_PREFIX, ENV_DELIMITER, KEY_DELIMITER


def env_name_to_key(
    name: str,
    prefix: str = ENV_PREFIX,
    delimiter: str = ENV_DELIMITER
) -> Optional[str]:
    """
    Translate a double-delimiter environment variable name into a dotted key.

    ``AUTHELIA__SESSION_DOMAIN`` becomes ``session.domain``. Names that do not
    start with the prefix followed by a second delimiter, or that have nothing
    after it, return None. An empty first segment is rejected too, so
    ``AUTHELIA___THEME`` returns None.

    Args:
        name: Environment variable name
        prefix: Variable prefix including its trailing delimiter
        delimiter: Delimiter used in environment variable names

    Returns:
        The candidate key, or None when the convention does not apply
    """
    marker = prefix + delimiter
    if not name.startswith(marker):
        return None

    suffix = name[len(marker):]
    if not suffix or suffix.startswith(delimiter):
        return None

    return suffix.lower().replace(delimiter, KEY_DELIMITER)


def key_to_env_name(
    key: str,
    prefix: str = ENV_PREFIX,
    delimiter: str = ENV_DELIMITER,
    suffix: str = ""
) -> str:
    """
    Build the environment variable name for a dotted key.

    ``storage.mysql.password`` becomes ``AUTHELIA_STORAGE_MYSQL_PASSWORD``.
    """
    return prefix + key.replace(KEY_DELIMITER, delimiter).upper() + suffix


def flatten(tree: Dict[str, Any], parent: str = "") -> Dict[str, Any]:
    """
    Flatten a nested mapping into dotted keys.

    Lists and scalars are leaves. Empty mappings produce no keys.
    """
    flat: Dict[str, Any] = {}
    for name, value in tree.items():
        key = f"{parent}{KEY_DELIMITER}{name}" if parent else str(name)
        if isinstance(value, dict):
            flat.update(flatten(value, key))
        else:
            flat[key] = value
    return flat


def set_path(tree: Dict[str, Any], key: str, value: Any) -> None:
    """Set a dotted key in a nested mapping, creating sections as needed."""
    *sections, leaf = key.split(KEY_DELIMITER)
    node = tree
    for section in sections:
        child = node.get(section)
        if not isinstance(child, dict):
            child = {}
            node[section] = child
        node = child
    node[leaf] = value
