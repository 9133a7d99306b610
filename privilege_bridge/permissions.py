"""
Repository file permissions.

The application-level vocabulary that callers grant and check on files.
The set is closed: translation tables are keyed by these members only.
"""
from __future__ import annotations

from enum import Enum
from typing import Final


class RepositoryFilePermission(str, Enum):
    """Permissions a principal can hold on a repository file."""

    READ = "read"
    WRITE = "write"
    READ_ACL = "read_acl"    # read the access control list of the file
    WRITE_ACL = "write_acl"  # change the access control list of the file
    ALL = "all"


ALL_PERMISSIONS: Final[frozenset[RepositoryFilePermission]] = frozenset(
    RepositoryFilePermission
)
