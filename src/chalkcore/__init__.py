"""Role and permission evaluation with bitmask action flags and group floors."""

from .authorization import Authorization
from .config import DEFAULT_PERMISSION_MAP, AuthorizationConfig, LogLevel, load_config_from_env
from .exceptions import (
    ChalkError,
    ConfigurationError,
    NonRepresentableBitmaskError,
    PermissionOutOfRangeError,
    UnknownActionError,
    ValidationError,
    error_registry,
    register_error,
)
from .groups import GroupMembershipManager
from .interfaces import PersistenceProvider, RecordValidator
from .logging import (
    AuthorizationFormatter,
    SubjectLoggerAdapter,
    get_subject_logger,
    safe_preview,
    setup_logging,
)
from .models import PERMISSION_FIELDS, Changeset, PermissionUpdate, Subject
from .mutations import PermissionMutator
from .permissions import (
    AuthorizationEvaluator,
    GroupElevationEngine,
    PermissionCodec,
    get_permissions,
    upgrade_to_group,
)
from .providers import FieldWhitelistValidator, InMemoryPersistenceProvider
from .selectors import normalize_name

__all__ = [
    'Authorization',
    'AuthorizationConfig',
    'DEFAULT_PERMISSION_MAP',
    'LogLevel',
    'load_config_from_env',
    'ChalkError',
    'ConfigurationError',
    'NonRepresentableBitmaskError',
    'PermissionOutOfRangeError',
    'UnknownActionError',
    'ValidationError',
    'error_registry',
    'register_error',
    'PersistenceProvider',
    'RecordValidator',
    'FieldWhitelistValidator',
    'InMemoryPersistenceProvider',
    'PERMISSION_FIELDS',
    'Changeset',
    'PermissionUpdate',
    'Subject',
    'PermissionCodec',
    'GroupElevationEngine',
    'AuthorizationEvaluator',
    'GroupMembershipManager',
    'PermissionMutator',
    'get_permissions',
    'upgrade_to_group',
    'normalize_name',
    'AuthorizationFormatter',
    'SubjectLoggerAdapter',
    'get_subject_logger',
    'safe_preview',
    'setup_logging',
]
