"""
Unit Tests for Naming Helpers and Key Tables

Author: envbridge Project
License: MIT
"""

import pytest

from envbridge.config.keys import (
    EnvKeyTables,
    build_env_key_tables,
    default_env_key_tables,
    is_secret_key,
)
from envbridge.config.naming import env_name_to_key, key_to_env_name, flatten, set_path
from envbridge.config.schema import VALID_KEYS


class TestNaming:
    """Test suite for name and key conversions."""

    @pytest.mark.parametrize("name, expected", [
        ("AUTHELIA__THEME", "theme"),
        ("AUTHELIA__SESSION_DOMAIN", "session.domain"),
        ("AUTHELIA__KEY_EXAMPLE", "key.example"),
        ("AUTHELIA_THEME", None),
        ("AUTHELIA__", None),
        ("AUTHELIA___THEME", None),
        ("OTHER__THEME", None),
    ])
    def test_env_name_to_key(self, name, expected):
        """Test the double-delimiter convention."""
        assert env_name_to_key(name) == expected

    def test_env_name_to_key_custom_prefix(self):
        """Test the prefix is configurable."""
        assert env_name_to_key("APP__SERVER_PORT", prefix="APP_") == "server.port"

    def test_key_to_env_name(self):
        """Test building variable names from keys."""
        assert key_to_env_name("storage.mysql.password") == "AUTHELIA_STORAGE_MYSQL_PASSWORD"
        assert key_to_env_name("jwt_secret", prefix="AUTHELIA__", suffix="_FILE") == (
            "AUTHELIA__JWT_SECRET_FILE"
        )

    def test_flatten(self):
        """Test nested mappings become dotted keys."""
        tree = {
            "theme": "dark",
            "server": {"port": 9091, "path": ""},
            "storage": {"mysql": {"host": "db"}},
            "notifier": {},
            "list": [1, 2],
        }

        assert flatten(tree) == {
            "theme": "dark",
            "server.port": 9091,
            "server.path": "",
            "storage.mysql.host": "db",
            "list": [1, 2],
        }

    def test_set_path(self):
        """Test dotted keys create nested sections."""
        tree = {"server": {"host": "0.0.0.0"}}

        set_path(tree, "server.port", 9092)
        set_path(tree, "storage.mysql.password", "pw")
        set_path(tree, "theme", "dark")

        assert tree == {
            "server": {"host": "0.0.0.0", "port": 9092},
            "storage": {"mysql": {"password": "pw"}},
            "theme": "dark",
        }


class TestKeyTables:
    """Test suite for key table construction."""

    def test_is_secret_key(self):
        """Test secret detection by last key segment."""
        assert is_secret_key("jwt_secret")
        assert is_secret_key("session.secret")
        assert is_secret_key("storage.mysql.password")
        assert is_secret_key("storage.encryption_key")
        assert not is_secret_key("session.domain")
        assert not is_secret_key("theme")

    def test_key_map_forms(self):
        """Test the double delimiter name is only added for keys containing the delimiter."""
        tables = build_env_key_tables(["theme", "storage.mysql.host", "storage.mysql.fake_password"])

        assert tables.key_map["AUTHELIA_THEME"] == "theme"
        assert "AUTHELIA__THEME" not in tables.key_map
        assert tables.key_map["AUTHELIA_STORAGE_MYSQL_HOST"] == "storage.mysql.host"
        assert "AUTHELIA__STORAGE_MYSQL_HOST" not in tables.key_map
        assert tables.key_map["AUTHELIA_STORAGE_MYSQL_FAKE_PASSWORD"] == "storage.mysql.fake_password"
        assert tables.key_map["AUTHELIA__STORAGE_MYSQL_FAKE_PASSWORD"] == "storage.mysql.fake_password"

    def test_secret_tables(self):
        """Test secret keys get ignored and resolvable _FILE names."""
        tables = build_env_key_tables(["theme", "session.secret"])

        assert tables.ignored_keys == frozenset({
            "AUTHELIA_SESSION_SECRET_FILE",
            "AUTHELIA__SESSION_SECRET_FILE",
        })
        assert dict(tables.secret_key_map) == {
            "AUTHELIA_SESSION_SECRET_FILE": "session.secret",
            "AUTHELIA__SESSION_SECRET_FILE": "session.secret",
        }

    def test_many_to_one(self):
        """Test several variable names resolve to one key."""
        tables = build_env_key_tables(["storage.mysql.fake_password"])

        names = [
            name for name, key in tables.key_map.items()
            if key == "storage.mysql.fake_password"
        ]
        assert sorted(names) == [
            "AUTHELIA_STORAGE_MYSQL_FAKE_PASSWORD",
            "AUTHELIA__STORAGE_MYSQL_FAKE_PASSWORD",
        ]

    def test_tables_are_read_only(self):
        """Test the tables cannot be mutated."""
        tables = build_env_key_tables(["theme"])

        with pytest.raises(TypeError):
            tables.key_map["AUTHELIA_OTHER"] = "other"
        with pytest.raises(AttributeError):
            tables.ignored_keys.add("AUTHELIA_OTHER")

    def test_empty_tables(self):
        """Test default tables are empty."""
        tables = EnvKeyTables()

        assert dict(tables.key_map) == {}
        assert tables.ignored_keys == frozenset()

    def test_default_tables_cover_schema(self):
        """Test every schema key has a legacy variable name."""
        tables = default_env_key_tables()

        for key in VALID_KEYS:
            assert tables.key_map[key_to_env_name(key)] == key
        assert tables.key_map["AUTHELIA_LOGS_LEVEL"] == "logs_level"
        assert "AUTHELIA_JWT_SECRET_FILE" in tables.secret_key_map


class TestValidKeys:
    """Test suite for schema key collection."""

    def test_contains_nested_keys(self):
        """Test nested sections are flattened into dotted keys."""
        assert "theme" in VALID_KEYS
        assert "server.port" in VALID_KEYS
        assert "storage.mysql.password" in VALID_KEYS
        assert "authentication_backend.ldap.password" in VALID_KEYS

    def test_sections_are_not_keys(self):
        """Test section names themselves are not leaf keys."""
        assert "storage" not in VALID_KEYS
        assert "storage.mysql" not in VALID_KEYS


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
