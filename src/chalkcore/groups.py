"""Group membership queries and updates.

Membership checks over several groups use AND semantics: the subject must
belong to every listed group. Updates persist one changeset per group,
feeding each persisted snapshot into the next step.
"""

from __future__ import annotations

from typing import Any

from .interfaces import PersistenceProvider, RecordValidator
from .logging import get_subject_logger
from .models import Subject
from .selectors import Many, select_groups

logger = get_subject_logger(__name__)


class GroupMembershipManager:
    """Add, remove and query group membership through a persistence provider."""

    __slots__ = ("_provider", "_validator")

    def __init__(self, provider: PersistenceProvider, validator: RecordValidator) -> None:
        self._provider = provider
        self._validator = validator

    def is_member(self, subject: Subject, groups: Any) -> bool:
        """Check if the subject belongs to a group, or to all of several groups.

        An empty sequence is vacuously satisfied.

        Example::

            subject = Subject(groups=["a", "b"])
            manager.is_member(subject, "a")               # True
            manager.is_member(subject, ["a", "b"])        # True
            manager.is_member(subject, ["a", "b", "c"])   # False
        """
        selector = select_groups(groups)
        if isinstance(selector, Many):
            return all(name in subject.groups for name in selector.names)
        return selector.name in subject.groups

    def add_group(self, subject: Subject, groups: Any) -> Subject:
        """Add the subject to one or more groups and persist.

        The stored list is sorted and de-duplicated after each addition.

        Returns:
            The persisted subject (the input subject for an empty sequence).

        Raises:
            ValidationError: Reported by the validator or provider.
        """
        for name in self._names(groups):
            subject = self._persist_groups(subject, sorted(set([*subject.groups, name])))
            logger.info("Added to group '%s'", name, subject=subject)
        return subject

    def remove_group(self, subject: Subject, groups: Any) -> Subject:
        """Remove every occurrence of one or more groups and persist.

        Removing a group the subject is not in still issues an update with
        the unchanged list.
        """
        for name in self._names(groups):
            subject = self._persist_groups(subject, [g for g in subject.groups if g != name])
            logger.info("Removed from group '%s'", name, subject=subject)
        return subject

    @staticmethod
    def _names(groups: Any) -> tuple[str, ...]:
        selector = select_groups(groups)
        if isinstance(selector, Many):
            return selector.names
        return (selector.name,)

    def _persist_groups(self, subject: Subject, groups: list[str]) -> Subject:
        changeset = self._validator.build_changeset(subject, {"groups": groups})
        return self._provider.update(changeset)


__all__ = ["GroupMembershipManager"]
