"""
Environment Callbacks

Translators applied to each environment variable during a configuration load:

- EnvironmentCallback maps a variable name to a dotted configuration key.
- SecretCallback maps a ``*_FILE`` variable to a key and reads the secret
  file it points at, recording IO failures on a StructValidator.

Both return a ``(key, value)`` pair; ``("", None)`` means skip the variable.

Author: envbridge Project
License: MIT
"""

from typing import Any, Iterable, Mapping, Optional, Tuple

from .constants import ENV_PREFIX, ENV_DELIMITER
from .errors import SecretFileError
from .naming import env_name_to_key
from .schema import VALID_KEYS
from .validator import StructValidator
from ..utils.logger import get_logger

logger = get_logger(__name__)

ResolvedEntry = Tuple[str, Any]

SKIP: ResolvedEntry = ("", None)


def load_secret(path: str) -> str:
    """
    Read a secret file.

    Trailing newlines are stripped; everything else, carriage returns
    included, is kept verbatim.

    Raises:
        OSError: If the file cannot be opened or read
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(path, 'r', encoding='utf-8', newline='') as f:
        content = f.read()
    return content.rstrip("\n")


class EnvironmentCallback:
    """
    Key mapper for plain environment variables.

    Resolution order:
        1. Ignore list: ``("", None)``
        2. Key map: mapped key with the value unchanged
        3. Double-delimiter convention, when the result is a valid key
        4. Passthrough of the original name and value
    """

    def __init__(
        self,
        key_map: Mapping[str, str],
        ignored_keys: Iterable[str],
        valid_keys: Optional[Iterable[str]] = None,
        prefix: str = ENV_PREFIX,
        delimiter: str = ENV_DELIMITER
    ):
        """
        Args:
            key_map: Variable name -> dotted key
            ignored_keys: Variable names that never become values
            valid_keys: Keys the convention is allowed to produce; defaults
                to the keys of the configuration schema
            prefix: Variable prefix including its trailing delimiter
            delimiter: Delimiter used in variable names
        """
        self.key_map = key_map
        self.ignored_keys = frozenset(ignored_keys)
        self.valid_keys = frozenset(valid_keys if valid_keys is not None else VALID_KEYS)
        self.prefix = prefix
        self.delimiter = delimiter

    def __call__(self, name: str, value: Any) -> ResolvedEntry:
        if name in self.ignored_keys:
            return SKIP

        mapped = self.key_map.get(name)
        if mapped is not None:
            return mapped, value

        candidate = env_name_to_key(name, self.prefix, self.delimiter)
        if candidate is not None and candidate in self.valid_keys:
            return candidate, value

        return name, value


class SecretCallback:
    """
    Secret resolver for ``*_FILE`` environment variables.

    The variable's value is a path; the file's content becomes the value of
    the mapped key. Unknown variable names are skipped silently. Read
    failures are pushed to the validator and resolve to an empty string.
    """

    def __init__(self, key_map: Mapping[str, str], validator: StructValidator):
        self.key_map = key_map
        self.validator = validator

    def __call__(self, name: str, path: str) -> ResolvedEntry:
        key = self.key_map.get(name)
        if key is None:
            return SKIP

        try:
            value = load_secret(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Secret file for key '{key}' could not be read: {path}")
            self.validator.push(SecretFileError(path, key, e))
            return key, ""

        logger.debug(f"Loaded secret for key '{key}' from {path}")
        return key, value
