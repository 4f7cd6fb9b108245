from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence

from .models import PERMISSION_FIELDS, Changeset, Subject


class RecordValidator(ABC):
    """Builds changesets, restricting writes to the permission fields."""

    @abstractmethod
    def build_changeset(
        self,
        subject: Subject,
        attrs: Dict[str, Any],
        allowed_fields: Sequence[str] = PERMISSION_FIELDS,
    ) -> Changeset:
        raise NotImplementedError


class PersistenceProvider(ABC):
    """Stores subject records.

    ``update`` applies exactly the fields in the changeset and returns the
    persisted snapshot. Failures are raised as
    :class:`chalkcore.exceptions.ValidationError`. Repeating an identical
    update must be safe.
    """

    @abstractmethod
    def update(self, changeset: Changeset) -> Subject:
        raise NotImplementedError


__all__ = ["PersistenceProvider", "RecordValidator"]
