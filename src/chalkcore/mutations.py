"""Permission and superuser mutations.

``set_permissions`` accepts four value forms, all of which end up as an
absolute integer that is range-checked and persisted:

- ``6``      absolute bitmask
- ``"ru"``   absolute symbolic
- ``"+r"``   current bitmask plus the decoded flags
- ``"-r"``   current bitmask minus the decoded flags

The relative forms use integer arithmetic, not bit operations. Adding an
action the subject already holds carries into the next bit (``2 + "+r"`` is
``4``, i.e. ``u``), and subtracting one it lacks can go negative, which the
range check then rejects.
"""

from __future__ import annotations

from typing import Any

from .exceptions import PermissionOutOfRangeError, ValidationError
from .interfaces import PersistenceProvider, RecordValidator
from .logging import get_subject_logger
from .models import PermissionUpdate, Subject
from .permissions.codec import PermissionCodec
from .permissions.store import get_permissions
from .selectors import normalize_name

logger = get_subject_logger(__name__)


class PermissionMutator:
    """Validates and persists permission and superuser changes."""

    __slots__ = ("_codec", "_provider", "_validator")

    def __init__(
        self,
        codec: PermissionCodec,
        provider: PersistenceProvider,
        validator: RecordValidator,
    ) -> None:
        self._codec = codec
        self._provider = provider
        self._validator = validator

    def set_permissions(self, subject: Subject, element: Any, value: int | str) -> PermissionUpdate:
        """Grant permissions to a subject on an element.

        Args:
            subject: Subject snapshot.
            element: Element name (string or enum member).
            value: Integer bitmask, or a symbolic string optionally
                   prefixed with ``+`` or ``-``.

        Returns:
            PermissionUpdate holding the persisted subject, or the input
            subject with ``error`` set to PermissionOutOfRangeError or the
            provider's ValidationError.

        Raises:
            UnknownActionError: A symbolic value holds an unknown action code.
            ValidationError: ``value`` is neither an integer nor a string.
        """
        name = normalize_name(element)

        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValidationError(
                f"Permission value must be an integer or a string, got {type(value).__name__}",
                element=name,
            )

        if isinstance(value, str):
            if value.startswith("+"):
                value = get_permissions(subject, name) + self._codec.decode(value[1:])
            elif value.startswith("-"):
                value = get_permissions(subject, name) - self._codec.decode(value[1:])
            else:
                value = self._codec.decode(value)

        upper = self._codec.sum_of_all_flags()
        if not 0 <= value <= upper:
            logger.info(
                "Rejected permission value %d on '%s' (allowed 0..%d)",
                value,
                name,
                upper,
                subject=subject,
            )
            return PermissionUpdate(
                subject=subject,
                error=PermissionOutOfRangeError(
                    f"Permission value {value} on {name!r} is outside 0..{upper}",
                    element=name,
                    value=value,
                    maximum=upper,
                ),
            )

        try:
            changeset = self._validator.build_changeset(
                subject,
                {"permissions": {**subject.permissions, name: value}},
            )
            persisted = self._provider.update(changeset)
        except ValidationError as e:
            logger.warning("Persisting permissions on '%s' failed: %s", name, e.message, subject=subject)
            return PermissionUpdate(subject=subject, error=e)
        return PermissionUpdate(subject=persisted)

    def set_superuser(self, subject: Subject, flag: bool) -> Subject:
        """Grant or revoke the superuser role and persist.

        Raises:
            ValidationError: The subject has no superuser attribute, ``flag``
                is not a bool, or the provider rejects the update.
        """
        if subject.superuser is None:
            raise ValidationError(
                f"Subject {subject.id!r} has no superuser attribute",
                subject_id=subject.id,
            )
        if not isinstance(flag, bool):
            raise ValidationError(
                f"Superuser flag must be a bool, got {type(flag).__name__}",
                subject_id=subject.id,
            )
        changeset = self._validator.build_changeset(subject, {"superuser": flag})
        persisted = self._provider.update(changeset)
        logger.info("Set superuser=%s", flag, subject=subject)
        return persisted


__all__ = ["PermissionMutator"]
