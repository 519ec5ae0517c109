"""
Structure Validator

Accumulates configuration errors and warnings during a load so that a single
bad value does not abort processing of the rest of the configuration.

Author: envbridge Project
License: MIT
"""

from threading import Lock
from typing import List, Union

from ..utils.logger import get_logger

logger = get_logger(__name__)


class StructValidator:
    """
    Append-only collector of errors and warnings.

    Entries keep insertion order. Appends are serialized so translators may
    share one validator across threads; ordering is only guaranteed within
    a single sequential pass.
    """

    def __init__(self):
        self._errors: List[Exception] = []
        self._warnings: List[str] = []
        self._lock = Lock()

    def push(self, error: Union[Exception, str]) -> None:
        """Record an error. Plain strings are wrapped in a ValueError."""
        if not isinstance(error, Exception):
            error = ValueError(error)
        with self._lock:
            self._errors.append(error)
        logger.debug(f"Configuration error recorded: {error}")

    def push_warning(self, message: str) -> None:
        """Record a warning."""
        with self._lock:
            self._warnings.append(str(message))
        logger.debug(f"Configuration warning recorded: {message}")

    def errors(self) -> List[Exception]:
        with self._lock:
            return list(self._errors)

    def warnings(self) -> List[str]:
        with self._lock:
            return list(self._warnings)

    def has_errors(self) -> bool:
        with self._lock:
            return bool(self._errors)

    def has_warnings(self) -> bool:
        with self._lock:
            return bool(self._warnings)

    def clear(self) -> None:
        """Reset both sequences before an independent load attempt."""
        with self._lock:
            self._errors.clear()
            self._warnings.clear()
