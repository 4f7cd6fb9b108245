"""Authorization facade.

Wires the codec, elevation engine, evaluator, membership manager and
mutator around one configuration and one persistence provider::

    from chalkcore import Authorization, AuthorizationConfig, InMemoryPersistenceProvider

    auth = Authorization(
        InMemoryPersistenceProvider(),
        config=AuthorizationConfig(group_permissions={"editor": {"post": 6}}),
    )
    auth.can(user, "r", "post")
    auth.set_permissions(user, "post", "+c")
"""

from __future__ import annotations

from typing import Any, Optional

from .config import AuthorizationConfig
from .groups import GroupMembershipManager
from .interfaces import PersistenceProvider, RecordValidator
from .models import Changeset, PermissionUpdate, Subject
from .mutations import PermissionMutator
from .permissions.codec import PermissionCodec
from .permissions.elevation import GroupElevationEngine
from .permissions.evaluator import AuthorizationEvaluator
from .permissions.store import get_permissions
from .providers import FieldWhitelistValidator


class Authorization:
    """Role and permission operations bound to a provider and a config.

    Args:
        provider: Persistence provider used by every mutation.
        validator: Changeset builder; defaults to FieldWhitelistValidator.
        config: Flag and group tables; defaults to AuthorizationConfig().
    """

    def __init__(
        self,
        provider: PersistenceProvider,
        *,
        validator: RecordValidator | None = None,
        config: AuthorizationConfig | None = None,
    ) -> None:
        self.config = config or AuthorizationConfig()
        self.provider = provider
        self.validator = validator or FieldWhitelistValidator()

        self.codec = PermissionCodec(self.config)
        self.elevation = GroupElevationEngine(self.config)
        self.evaluator = AuthorizationEvaluator(self.codec, self.elevation)
        self.groups = GroupMembershipManager(self.provider, self.validator)
        self.mutator = PermissionMutator(self.codec, self.provider, self.validator)

    # ── Configuration ───────────────────────────────────

    @property
    def permission_map(self) -> dict[str, int]:
        """Translation between action codes and their flags."""
        return self.codec.permission_map

    def sum_of_all_flags(self) -> int:
        return self.codec.sum_of_all_flags()

    def permissions_changeset(self, subject: Subject, attrs: dict[str, Any]) -> Changeset:
        """Build a changeset limited to superuser, groups and permissions."""
        return self.validator.build_changeset(subject, attrs)

    # ── Codec ───────────────────────────────────────────

    def encode(self, bitmask: int) -> str:
        return self.codec.encode(bitmask)

    def decode(self, symbolic: str) -> int:
        return self.codec.decode(symbolic)

    # ── Evaluation ──────────────────────────────────────

    def can(self, subject: Optional[Subject], permission: Any, element: Any) -> bool:
        return self.evaluator.can(subject, permission, element)

    def get_permissions(self, subject: Subject, element: Any) -> int:
        return get_permissions(subject, element)

    def elevate(self, subject: Subject) -> Subject:
        return self.elevation.elevate(subject)

    # ── Groups ──────────────────────────────────────────

    def is_member(self, subject: Subject, groups: Any) -> bool:
        return self.groups.is_member(subject, groups)

    def add_group(self, subject: Subject, groups: Any) -> Subject:
        return self.groups.add_group(subject, groups)

    def remove_group(self, subject: Subject, groups: Any) -> Subject:
        return self.groups.remove_group(subject, groups)

    # ── Mutations ───────────────────────────────────────

    def set_permissions(self, subject: Subject, element: Any, value: int | str) -> PermissionUpdate:
        return self.mutator.set_permissions(subject, element, value)

    def set_superuser(self, subject: Subject, flag: bool) -> Subject:
        return self.mutator.set_superuser(subject, flag)


__all__ = ["Authorization"]
