"""Default Record Validator and an in-memory Persistence Provider.

``FieldWhitelistValidator`` restricts writes to the permission fields and
type-checks values against :class:`Subject`. ``InMemoryPersistenceProvider``
keeps snapshots in a dict keyed by subject id; it suits tests and small
integrations that have no database.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .interfaces import PersistenceProvider, RecordValidator
from .models import PERMISSION_FIELDS, Changeset, Subject

logger = logging.getLogger(__name__)


class FieldWhitelistValidator(RecordValidator):
    """Build changesets that only touch the allowed fields.

    Args:
        strict: Reject attributes outside ``allowed_fields`` with
            ValidationError instead of dropping them.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self.strict = strict

    def build_changeset(
        self,
        subject: Subject,
        attrs: dict[str, Any],
        allowed_fields: Sequence[str] = PERMISSION_FIELDS,
    ) -> Changeset:
        rejected = sorted(key for key in attrs if key not in allowed_fields)
        if rejected:
            if self.strict:
                raise ValidationError(
                    f"Fields not writable through a permissions changeset: {', '.join(rejected)}",
                    fields=rejected,
                )
            logger.warning("Dropping non-writable changeset fields: %s", ", ".join(rejected))

        changes = {key: value for key, value in attrs.items() if key in allowed_fields}
        try:
            Subject.model_validate({**subject.model_dump(), **changes})
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid changeset for subject {subject.id!r}",
                errors=e.errors(include_url=False),
            ) from e
        return Changeset(subject=subject, changes=changes)


class InMemoryPersistenceProvider(PersistenceProvider):
    """Dict-backed subject store keyed by ``Subject.id``."""

    def __init__(self) -> None:
        self._records: dict[str, Subject] = {}

    def insert(self, subject: Subject) -> Subject:
        if subject.id is None:
            raise ValidationError("Subject must have an id to be stored")
        self._records[subject.id] = subject
        return subject

    def get(self, subject_id: str) -> Subject | None:
        return self._records.get(subject_id)

    def update(self, changeset: Changeset) -> Subject:
        subject_id = changeset.subject.id
        if subject_id is None or subject_id not in self._records:
            raise ValidationError(f"Subject {subject_id!r} does not exist", subject_id=subject_id)
        try:
            updated = changeset.apply()
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid changeset for subject {subject_id!r}",
                errors=e.errors(include_url=False),
            ) from e
        self._records[subject_id] = updated
        return updated


__all__ = ["FieldWhitelistValidator", "InMemoryPersistenceProvider"]
