"""Configuration contract for chalkcore.

Pydantic-validated configuration holding the two process-wide tables the
authorization engine reads:

- ``permission_map``: action code → power-of-two flag (Action Flag Table).
- ``group_permissions``: group → element → floor bitmask (Group Permission Table).

Build one AuthorizationConfig at process start and pass it to
:class:`chalkcore.Authorization`. Nothing in the library mutates it, so a
single instance can be shared by every caller for the process lifetime.
Direct os.environ usage outside ``load_config_from_env`` is not allowed.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .exceptions import ConfigurationError

DEFAULT_PERMISSION_MAP: dict[str, int] = {"c": 1, "r": 2, "u": 4, "d": 8}


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class AuthorizationConfig(BaseModel):
    """Configuration for an Authorization instance.

    The action flag table must bind single-character action codes to
    pairwise distinct powers of two; encoding relies on the flags being
    disjoint bits.
    """

    permission_map: dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_PERMISSION_MAP),
        description="Action code → flag value (Action Flag Table)",
    )
    group_permissions: dict[str, dict[str, int]] = Field(
        default_factory=dict,
        description="Group name → element name → floor bitmask",
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )

    @field_validator("permission_map")
    @classmethod
    def validate_permission_map(cls, v: dict[str, int]) -> dict[str, int]:
        """Every flag must be a distinct power of two bound to a single character."""
        if not v:
            raise ValueError("permission_map must define at least one action")
        seen: set[int] = set()
        for action, flag in v.items():
            if len(action) != 1:
                raise ValueError(f"Action code {action!r} must be a single character")
            if flag <= 0 or flag & (flag - 1):
                raise ValueError(f"Flag for {action!r} must be a positive power of two, got {flag}")
            if flag in seen:
                raise ValueError(f"Flag {flag} is bound to more than one action")
            seen.add(flag)
        return v

    @field_validator("group_permissions")
    @classmethod
    def validate_group_permissions(cls, v: dict[str, dict[str, int]]) -> dict[str, dict[str, int]]:
        """Floors are non-negative bitmasks."""
        for group, floors in v.items():
            for element, floor in floors.items():
                if floor < 0:
                    raise ValueError(f"Floor for group {group!r} on {element!r} must be >= 0, got {floor}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    @model_validator(mode="after")
    def validate_floors_representable(self) -> "AuthorizationConfig":
        """Floors may only hold bits the flag table defines."""
        full_mask = self.sum_of_all_flags()
        for group, floors in self.group_permissions.items():
            for element, floor in floors.items():
                if floor & ~full_mask:
                    raise ValueError(
                        f"Floor {floor} for group {group!r} on {element!r} has bits outside the action flags"
                    )
        return self

    def sum_of_all_flags(self) -> int:
        """Upper bound for absolute bitmask writes."""
        return sum(self.permission_map.values())

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
    }


def _load_json_env(name: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{name} is not valid JSON: {e}", variable=name) from e


def load_config_from_env() -> AuthorizationConfig:
    """Load configuration from environment variables.

    Environment variables:
    - CHALK_PERMISSION_MAP: JSON object, e.g. ``{"c": 1, "r": 2}``
    - CHALK_GROUP_PERMISSIONS: JSON object, e.g. ``{"editor": {"post": 6}}``
    - LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_JSON: Use JSON log format (true/false, default: false)

    Returns:
        AuthorizationConfig instance with values from environment or defaults.

    Raises:
        ConfigurationError: If a JSON variable cannot be parsed.
    """
    import os

    kwargs: dict[str, Any] = {
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "log_json": os.getenv("LOG_JSON", "false").lower() in ("true", "1", "yes", "on"),
    }

    permission_map_raw = os.getenv("CHALK_PERMISSION_MAP")
    if permission_map_raw:
        kwargs["permission_map"] = _load_json_env("CHALK_PERMISSION_MAP", permission_map_raw)

    group_permissions_raw = os.getenv("CHALK_GROUP_PERMISSIONS")
    if group_permissions_raw:
        kwargs["group_permissions"] = _load_json_env("CHALK_GROUP_PERMISSIONS", group_permissions_raw)

    return AuthorizationConfig(**kwargs)


__all__ = [
    "DEFAULT_PERMISSION_MAP",
    "AuthorizationConfig",
    "LogLevel",
    "load_config_from_env",
]
