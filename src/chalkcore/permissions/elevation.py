"""Group floor elevation.

Each group in the group permission table guarantees its members a minimum
("floor") bitmask per element. Elevation applies those floors to a copy of
the subject's permissions for the duration of one check; the result is
never persisted.

A floor replaces the held bitmask whenever the held value is numerically
lower; it is not OR-ed in. Holding ``c`` (1) under an ``editor`` floor of
``ru`` (6) therefore leaves ``ru`` and drops ``c``. Held values at or above
the floor are kept as they are.
"""

from __future__ import annotations

import logging

from ..config import AuthorizationConfig
from ..models import Subject

logger = logging.getLogger(__name__)


def upgrade_to_group(permissions: dict[str, int], floors: dict[str, int]) -> dict[str, int]:
    """Apply one group's floors to a permission mapping.

    Every element named in ``floors`` is processed, not only the element
    being checked.

    Args:
        permissions: Element → bitmask mapping (left untouched).
        floors: Element → floor bitmask for one group.

    Returns:
        New mapping with floors applied.

    Example::

        upgrade_to_group({"post": 1}, {"post": 6})            # {"post": 6}
        upgrade_to_group({"post": 8}, {"post": 6})            # {"post": 8}
        upgrade_to_group({}, {"post": 2, "comment": 3})       # {"post": 2, "comment": 3}
    """
    upgraded = dict(permissions)
    for element, floor in floors.items():
        held = upgraded.get(element)
        if held is None or held < floor:
            upgraded[element] = floor
    return upgraded


class GroupElevationEngine:
    """Computes elevated permission snapshots from group floors."""

    __slots__ = ("_config",)

    def __init__(self, config: AuthorizationConfig) -> None:
        self._config = config

    @property
    def group_permissions(self) -> dict[str, dict[str, int]]:
        return self._config.group_permissions

    def elevate(self, subject: Subject) -> Subject:
        """Return a transient snapshot with every member group's floors applied.

        Groups are folded in list order; groups missing from the table are
        skipped.
        """
        table = self.group_permissions
        permissions = dict(subject.permissions)
        for group in subject.groups:
            if group in table and group in subject.groups:
                permissions = upgrade_to_group(permissions, table[group])
                logger.debug("Applied floors of group '%s' for subject %s", group, subject.id)
        return subject.model_copy(update={"permissions": permissions, "groups": list(subject.groups)})


__all__ = ["GroupElevationEngine", "upgrade_to_group"]
