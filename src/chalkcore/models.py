"""Core data models for chalkcore.

Subject snapshots are owned by the integrating application's persistence
layer; the engine only ever reads them and produces new desired-state
snapshots through a Changeset.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, Field

from .exceptions import ChalkError

# Fields a changeset is allowed to write.
PERMISSION_FIELDS: tuple[str, ...] = ("superuser", "groups", "permissions")


class Subject(BaseModel):
    """Immutable snapshot of an authorized entity.

    ``superuser`` is ``None`` when the backing record has no superuser
    attribute at all; ``set_superuser`` refuses such records.
    """

    model_config = {"frozen": True}

    id: Optional[str] = None
    superuser: Optional[bool] = None
    groups: list[str] = Field(default_factory=list)
    permissions: dict[str, int] = Field(default_factory=dict)


class Changeset(BaseModel):
    """Validated set of field changes for one subject."""

    model_config = {"frozen": True}

    subject: Subject
    changes: dict[str, Any] = Field(default_factory=dict)

    def apply(self) -> Subject:
        """Return the desired-state snapshot with ``changes`` applied."""
        return Subject.model_validate({**self.subject.model_dump(), **self.changes})


@dataclass(frozen=True)
class PermissionUpdate:
    """Result of ``set_permissions``.

    ``subject`` is the persisted snapshot on success, or the untouched input
    snapshot when ``error`` is set.
    """

    subject: Subject
    error: ChalkError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


__all__ = [
    "PERMISSION_FIELDS",
    "Changeset",
    "PermissionUpdate",
    "Subject",
]
