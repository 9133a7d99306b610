"""
Translation between repository file permissions and JCR access-control privileges.
"""

from .errors import (
    AppError,
    InvalidArgumentError,
    NoMappingFoundError,
    UnderlyingSystemError,
    UnknownNamespaceError,
    UnknownPrivilegeError,
)
from .permissions import ALL_PERMISSIONS, RepositoryFilePermission
from .translator import PermissionPrivilegeTranslator

__all__ = [
    "ALL_PERMISSIONS",
    "AppError",
    "InvalidArgumentError",
    "NoMappingFoundError",
    "PermissionPrivilegeTranslator",
    "RepositoryFilePermission",
    "UnderlyingSystemError",
    "UnknownNamespaceError",
    "UnknownPrivilegeError",
]
