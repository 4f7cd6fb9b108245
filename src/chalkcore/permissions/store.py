"""Read access to a subject's element → bitmask mapping."""

from __future__ import annotations

from typing import Any

from ..models import Subject
from ..selectors import normalize_name


def get_permissions(subject: Subject, element: Any) -> int:
    """Get the bitmask a subject holds on an element.

    Args:
        subject: Subject snapshot.
        element: Element name; enum members and other scalars are
                 normalized to strings first.

    Returns:
        The stored bitmask, or ``0`` when the subject has no entry.
    """
    return subject.permissions.get(normalize_name(element), 0)


__all__ = ["get_permissions"]
