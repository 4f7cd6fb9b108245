"""Tests for AuthorizationConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from chalkcore import (
    DEFAULT_PERMISSION_MAP,
    AuthorizationConfig,
    ConfigurationError,
    LogLevel,
    load_config_from_env,
)


class TestAuthorizationConfig:
    """Tests for AuthorizationConfig model."""

    def test_create_default_config(self) -> None:
        """Test creating a config with defaults."""
        config = AuthorizationConfig()
        assert config.permission_map == {"c": 1, "r": 2, "u": 4, "d": 8}
        assert config.group_permissions == {}
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.sum_of_all_flags() == 15

    def test_default_map_not_shared(self) -> None:
        """Each config gets its own copy of the default table."""
        config = AuthorizationConfig()
        config.permission_map["x"] = 16
        assert "x" not in DEFAULT_PERMISSION_MAP
        assert "x" not in AuthorizationConfig().permission_map

    def test_create_custom_config(self) -> None:
        """Test creating a config with custom tables."""
        config = AuthorizationConfig(
            permission_map={"r": 1, "w": 2, "x": 4},
            group_permissions={"editor": {"post": 3}},
        )
        assert config.sum_of_all_flags() == 7
        assert config.group_permissions["editor"] == {"post": 3}

    def test_flag_not_power_of_two(self) -> None:
        """Flags must be powers of two."""
        with pytest.raises(ValueError, match="power of two"):
            AuthorizationConfig(permission_map={"c": 1, "r": 3})

    def test_flag_zero(self) -> None:
        """Zero is not a flag."""
        with pytest.raises(ValueError, match="power of two"):
            AuthorizationConfig(permission_map={"c": 0})

    def test_duplicate_flags(self) -> None:
        """Two actions cannot share a flag."""
        with pytest.raises(ValueError, match="more than one action"):
            AuthorizationConfig(permission_map={"c": 1, "r": 1})

    def test_multi_character_action(self) -> None:
        """Action codes are single characters."""
        with pytest.raises(ValueError, match="single character"):
            AuthorizationConfig(permission_map={"cr": 1})

    def test_empty_permission_map(self) -> None:
        """At least one action is required."""
        with pytest.raises(ValueError, match="at least one action"):
            AuthorizationConfig(permission_map={})

    def test_negative_floor(self) -> None:
        """Group floors cannot be negative."""
        with pytest.raises(ValueError, match=">= 0"):
            AuthorizationConfig(group_permissions={"editor": {"post": -1}})

    def test_floor_outside_flags(self) -> None:
        """Floors may not carry bits the flag table does not define."""
        with pytest.raises(ValueError, match="outside the action flags"):
            AuthorizationConfig(group_permissions={"editor": {"post": 16}})

    def test_floor_within_custom_flags(self) -> None:
        """Floors are checked against the configured table, not the default."""
        config = AuthorizationConfig(permission_map={"r": 1, "w": 2}, group_permissions={"editor": {"post": 3}})
        assert config.group_permissions["editor"]["post"] == 3
        with pytest.raises(ValueError, match="outside the action flags"):
            AuthorizationConfig(permission_map={"r": 1, "w": 2}, group_permissions={"editor": {"post": 4}})

    def test_floor_in_flag_gap(self) -> None:
        """A bit between two configured flags is not a valid floor."""
        with pytest.raises(ValueError, match="outside the action flags"):
            AuthorizationConfig(permission_map={"a": 1, "b": 4}, group_permissions={"editor": {"post": 2}})
        config = AuthorizationConfig(permission_map={"a": 1, "b": 4}, group_permissions={"editor": {"post": 5}})
        assert config.group_permissions["editor"]["post"] == 5

    def test_log_level_from_string(self) -> None:
        """Test creating config with log level as string."""
        config = AuthorizationConfig(log_level="debug")
        assert config.log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        """Test creating config with invalid log level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            AuthorizationConfig(log_level="INVALID")

    def test_extra_fields_forbidden(self) -> None:
        """Test that extra fields are forbidden."""
        with pytest.raises(Exception):  # Pydantic validation error
            AuthorizationConfig(repo="users")  # type: ignore[call-arg]


class TestConfigAssignment:
    """Tests for validation of reassigned fields."""

    def test_valid_permission_map_assignment(self) -> None:
        """A valid table can replace the current one."""
        config = AuthorizationConfig()
        config.permission_map = {"r": 1, "w": 2}
        assert config.sum_of_all_flags() == 3

    def test_non_power_of_two_assignment(self) -> None:
        """Reassigned tables go through the flag checks."""
        config = AuthorizationConfig()
        with pytest.raises(ValueError, match="power of two"):
            config.permission_map = {"x": 6}
        assert config.permission_map == DEFAULT_PERMISSION_MAP

    def test_duplicate_flag_assignment(self) -> None:
        """Overlapping flags are rejected on assignment too."""
        config = AuthorizationConfig()
        with pytest.raises(ValueError, match="power of two"):
            config.permission_map = {"a": 3, "b": 1}
        with pytest.raises(ValueError, match="more than one action"):
            config.permission_map = {"a": 1, "b": 1}

    def test_negative_floor_assignment(self) -> None:
        """Reassigned group tables are validated."""
        config = AuthorizationConfig()
        with pytest.raises(ValueError, match=">= 0"):
            config.group_permissions = {"editor": {"post": -1}}

    def test_floor_outside_flags_assignment(self) -> None:
        """Floors set after construction are checked against the table."""
        config = AuthorizationConfig()
        with pytest.raises(ValueError, match="outside the action flags"):
            config.group_permissions = {"editor": {"post": 16}}

    def test_shrinking_table_under_floors(self) -> None:
        """A table that no longer covers existing floors is rejected."""
        config = AuthorizationConfig(group_permissions={"editor": {"post": 8}})
        with pytest.raises(ValueError, match="outside the action flags"):
            config.permission_map = {"c": 1, "r": 2}


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        """Test loading config with no environment variables."""
        config = load_config_from_env()
        assert config.permission_map == DEFAULT_PERMISSION_MAP
        assert config.group_permissions == {}
        assert config.log_level == LogLevel.INFO

    @patch.dict(
        os.environ,
        {
            "CHALK_PERMISSION_MAP": '{"r": 1, "w": 2}',
            "CHALK_GROUP_PERMISSIONS": '{"editor": {"post": 3}}',
            "LOG_LEVEL": "DEBUG",
            "LOG_JSON": "yes",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        """Test loading config from environment variables."""
        config = load_config_from_env()
        assert config.permission_map == {"r": 1, "w": 2}
        assert config.group_permissions == {"editor": {"post": 3}}
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True

    @patch.dict(os.environ, {"CHALK_PERMISSION_MAP": "{not json"}, clear=True)
    def test_malformed_json(self) -> None:
        """Unparseable JSON is a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_from_env()
        assert exc_info.value.details["variable"] == "CHALK_PERMISSION_MAP"

    @patch.dict(os.environ, {"CHALK_PERMISSION_MAP": '{"r": 3}'}, clear=True)
    def test_invalid_table_from_env(self) -> None:
        """Env tables go through the same validation."""
        with pytest.raises(ValueError, match="power of two"):
            load_config_from_env()
