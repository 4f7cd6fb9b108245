"""Permission algebra and authorization decisions.

Provides:
- PermissionCodec: symbolic action codes ↔ integer bitmasks
- get_permissions(): element bitmask lookup on a subject snapshot
- GroupElevationEngine / upgrade_to_group(): group floor elevation
- AuthorizationEvaluator: the ``can`` decision
"""

from .codec import PermissionCodec
from .elevation import GroupElevationEngine, upgrade_to_group
from .evaluator import AuthorizationEvaluator
from .store import get_permissions

__all__ = [
    "AuthorizationEvaluator",
    "GroupElevationEngine",
    "PermissionCodec",
    "get_permissions",
    "upgrade_to_group",
]
