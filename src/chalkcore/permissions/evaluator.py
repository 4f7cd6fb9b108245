"""Authorization decision: may a subject perform an action on an element?"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..models import Subject
from ..selectors import normalize_name
from .codec import PermissionCodec
from .elevation import GroupElevationEngine
from .store import get_permissions

logger = logging.getLogger(__name__)


class AuthorizationEvaluator:
    """Answers ``can`` by combining superuser bypass, elevation and decoding."""

    __slots__ = ("_codec", "_elevation")

    def __init__(self, codec: PermissionCodec, elevation: GroupElevationEngine) -> None:
        self._codec = codec
        self._elevation = elevation

    def can(self, subject: Optional[Subject], permission: Any, element: Any) -> bool:
        """Check if a subject may perform ``permission`` on ``element``.

        Decision order:
        1. No subject → ``False``
        2. Superuser → ``True`` (group floors are not consulted)
        3. Elevate with group floors, read the element's bitmask, encode it
           and look for the action code in the canonical string.

        ``permission`` is expected to be a single action code. Longer
        strings are matched as substrings of the canonical string, so
        ``"rc"`` matches a holder of ``rc`` but ``"cr"`` never does.

        Args:
            subject: Subject snapshot or ``None``.
            permission: Action code (string or enum member).
            element: Element name (string or enum member).

        Returns:
            True if access is granted.

        Raises:
            NonRepresentableBitmaskError: The elevated bitmask holds bits
                outside the flag table. Never reported as a plain denial.

        Example::

            evaluator.can(None, "r", "post")                           # False
            evaluator.can(Subject(superuser=True), "d", "post")        # True
            evaluator.can(Subject(permissions={"post": 2}), "r", "post")  # True
        """
        if subject is None:
            return False

        action = normalize_name(permission)
        if len(action) != 1:
            logger.warning(
                "Permission '%s' is not a single action code; matching it as a substring",
                action,
            )

        if subject.superuser is True:
            return True

        elevated = self._elevation.elevate(subject)
        mask = get_permissions(elevated, element)
        granted = action in self._codec.encode(mask)
        if not granted:
            logger.debug(
                "Denied '%s' on '%s' for subject %s (mask=%d)",
                action,
                normalize_name(element),
                subject.id,
                mask,
            )
        return granted


__all__ = ["AuthorizationEvaluator"]
