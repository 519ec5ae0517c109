"""
Unit Tests for the Structure Validator

Author: envbridge Project
License: MIT
"""

import threading
import pytest

from envbridge.config.errors import ConfigurationError
from envbridge.config.validator import StructValidator


class TestStructValidator:
    """Test suite for error and warning accumulation."""

    def test_starts_empty(self):
        """Test a new validator has nothing recorded."""
        validator = StructValidator()

        assert validator.errors() == []
        assert validator.warnings() == []
        assert not validator.has_errors()
        assert not validator.has_warnings()

    def test_push_keeps_order(self):
        """Test errors and warnings keep insertion order."""
        validator = StructValidator()

        validator.push(ConfigurationError("first"))
        validator.push("second")
        validator.push_warning("careful")

        assert [str(e) for e in validator.errors()] == ["first", "second"]
        assert validator.warnings() == ["careful"]
        assert validator.has_errors()
        assert validator.has_warnings()

    def test_string_errors_are_wrapped(self):
        """Test plain messages become exceptions."""
        validator = StructValidator()
        validator.push("bad value")

        assert isinstance(validator.errors()[0], ValueError)

    def test_accessors_return_copies(self):
        """Test callers cannot mutate the recorded sequences."""
        validator = StructValidator()
        validator.push("error")

        validator.errors().clear()
        validator.warnings().append("not recorded")

        assert len(validator.errors()) == 1
        assert validator.warnings() == []

    def test_clear(self):
        """Test clear resets both sequences."""
        validator = StructValidator()
        validator.push("error")
        validator.push_warning("warning")

        validator.clear()

        assert validator.errors() == []
        assert validator.warnings() == []

    def test_concurrent_pushes(self):
        """Test appends from several threads are all recorded."""
        validator = StructValidator()

        def worker():
            for i in range(100):
                validator.push(f"error {i}")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(validator.errors()) == 400


class TestConfigurationError:
    """Test suite for the aggregated configuration error."""

    def test_message_lists_errors(self):
        """Test the consolidated report includes every error."""
        error = ConfigurationError("load failed", [ValueError("one"), ValueError("two")])

        assert str(error) == "load failed\n  - one\n  - two"
        assert len(error.errors) == 2

    def test_message_without_errors(self):
        """Test a plain message is unchanged."""
        assert str(ConfigurationError("plain")) == "plain"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
