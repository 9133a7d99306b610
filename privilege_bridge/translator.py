"""
Permission <-> privilege translation.

Maps repository file permissions onto the privileges of a JCR-style
access-control system and back. The two lookup tables are fixed; they are
built once per translator and are read-only afterwards, so one instance can
be shared between threads and sessions.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .errors import InvalidArgumentError, NoMappingFoundError
from .permissions import RepositoryFilePermission
from .ports.access_control import AccessControlSession, Privilege
from .privileges import (
    JCR_ADD_CHILD_NODES,
    JCR_ALL,
    JCR_LOCK_MANAGEMENT,
    JCR_MODIFY_ACCESS_CONTROL,
    JCR_MODIFY_PROPERTIES,
    JCR_NAMESPACE_URI,
    JCR_NODE_TYPE_MANAGEMENT,
    JCR_READ,
    JCR_READ_ACCESS_CONTROL,
    JCR_REMOVE_CHILD_NODES,
    JCR_REMOVE_NODE,
    JCR_VERSION_MANAGEMENT,
    JCR_WRITE,
    expand_name,
    is_reserved_name,
    split_prefixed_name,
)

logger = logging.getLogger(__name__)


def _freeze(table: dict) -> Mapping:
    return MappingProxyType({key: frozenset(values) for key, values in table.items()})


class PermissionPrivilegeTranslator:
    """Translate between file permissions and access-control privileges.

    Forward translation resolves privilege names through the caller's
    session. Reverse translation first expands aggregate privileges down to
    their constituents, then looks each one up by its expanded name.
    """

    def __init__(self) -> None:
        self.permission_to_privileges: Mapping[RepositoryFilePermission, frozenset[str]]
        self.privilege_to_permissions: Mapping[str, frozenset[RepositoryFilePermission]]
        self._init_maps()

    def _init_maps(self) -> None:
        self.permission_to_privileges = _freeze({
            RepositoryFilePermission.READ: {JCR_READ},
            RepositoryFilePermission.WRITE: {
                JCR_WRITE,
                JCR_NODE_TYPE_MANAGEMENT,
                JCR_VERSION_MANAGEMENT,
                JCR_LOCK_MANAGEMENT,
            },
            RepositoryFilePermission.READ_ACL: {JCR_READ_ACCESS_CONTROL},
            RepositoryFilePermission.WRITE_ACL: {JCR_MODIFY_ACCESS_CONTROL},
            RepositoryFilePermission.ALL: {JCR_ALL},
        })

        # Built separately: the relation is not symmetric. Version, lock,
        # retention and lifecycle management grant no file permission.
        self.privilege_to_permissions = _freeze({
            JCR_READ: {RepositoryFilePermission.READ},
            JCR_WRITE: {RepositoryFilePermission.WRITE},
            JCR_MODIFY_PROPERTIES: {RepositoryFilePermission.WRITE},
            JCR_ADD_CHILD_NODES: {RepositoryFilePermission.WRITE},
            JCR_REMOVE_NODE: {RepositoryFilePermission.WRITE},
            JCR_REMOVE_CHILD_NODES: {RepositoryFilePermission.WRITE},
            JCR_NODE_TYPE_MANAGEMENT: {RepositoryFilePermission.WRITE},
            JCR_READ_ACCESS_CONTROL: {RepositoryFilePermission.READ_ACL},
            JCR_MODIFY_ACCESS_CONTROL: {RepositoryFilePermission.WRITE_ACL},
            JCR_ALL: {RepositoryFilePermission.ALL},
        })

    def privilege_names_for(self, permission: RepositoryFilePermission) -> frozenset[str]:
        return self.permission_to_privileges.get(permission, frozenset())

    def permissions_for(self, privilege_key: str) -> frozenset[RepositoryFilePermission]:
        return self.privilege_to_permissions.get(privilege_key, frozenset())

    def permissions_to_privileges(
        self,
        session: AccessControlSession,
        permissions: Iterable[RepositoryFilePermission],
    ) -> set[Privilege]:
        """Resolve the privileges that grant ``permissions``.

        Raises:
            InvalidArgumentError: If session is missing, or permissions is None, empty
                or holds anything but RepositoryFilePermission members
            UnderlyingSystemError: If the session cannot resolve a privilege name
            NoMappingFoundError: If no permission has any privilege
        """
        _require_session(session)
        if permissions is None or isinstance(permissions, (str, bytes)):
            raise InvalidArgumentError("permissions must be a collection of permissions")
        requested = list(permissions)
        if not requested:
            raise InvalidArgumentError("permissions must not be empty")
        unknown = [p for p in requested if not isinstance(p, RepositoryFilePermission)]
        if unknown:
            raise InvalidArgumentError(
                "permissions must be RepositoryFilePermission members",
                details={"permissions": [repr(p) for p in unknown]},
            )

        privileges: set[Privilege] = set()
        for permission in set(requested):
            privilege_names = self.privilege_names_for(permission)
            if not privilege_names:
                logger.debug(
                    "skipping permission=%s as it has no corresponding privileges",
                    permission.value,
                )
                continue
            for privilege_name in privilege_names:
                privileges.add(session.resolve_privilege_by_name(privilege_name))

        if not privileges:
            raise NoMappingFoundError(
                "no privileges; see previous 'skipping permission' messages",
                details={"permissions": sorted(p.value for p in requested)},
            )
        return privileges

    def expand_privileges(
        self,
        privileges: Iterable[Privilege],
        session: AccessControlSession | None = None,
    ) -> set[Privilege]:
        """Replace aggregate privileges by their constituents, transitively.

        Privileges in the reserved namespace are kept as they are, even when
        aggregate. With a session, any prefix bound to that namespace counts as
        reserved; without one only the ``jcr`` prefix and the expanded form do.
        The result contains no other aggregate privilege.
        """
        expanded: set[Privilege] = set()
        visited: set[Privilege] = set()
        worklist = list(privileges)
        while worklist:
            privilege = worklist.pop()
            if privilege in visited:
                continue
            visited.add(privilege)
            if privilege.is_aggregate() and not self._is_reserved(session, privilege.name):
                worklist.extend(privilege.constituents())
            else:
                expanded.add(privilege)
        return expanded

    def privileges_to_permissions(
        self,
        session: AccessControlSession,
        privileges: Iterable[Privilege],
    ) -> set[RepositoryFilePermission]:
        """Reduce ``privileges`` to the file permissions they imply.

        Raises:
            InvalidArgumentError: If session or privileges is None
            UnderlyingSystemError: If a namespace prefix cannot be resolved
            NoMappingFoundError: If no privilege maps to a permission
        """
        _require_session(session)
        if privileges is None or isinstance(privileges, (str, bytes)):
            raise InvalidArgumentError("privileges must be a collection of privileges")

        permissions: set[RepositoryFilePermission] = set()
        for privilege in self.expand_privileges(privileges, session):
            lookup_key = self._lookup_key(session, privilege.name)
            mapped = self.permissions_for(lookup_key)
            if not mapped:
                logger.debug(
                    "skipping privilege name=%s as it has no corresponding permissions",
                    lookup_key,
                )
                continue
            permissions.update(mapped)

        if not permissions:
            raise NoMappingFoundError(
                "no permissions; see previous 'skipping privilege' messages"
            )
        return permissions

    @staticmethod
    def _is_reserved(session: AccessControlSession | None, privilege_name: str) -> bool:
        if is_reserved_name(privilege_name):
            return True
        if session is None:
            return False
        prefix, _ = split_prefixed_name(privilege_name)
        return prefix is not None and session.resolve_namespace_uri(prefix) == JCR_NAMESPACE_URI

    @staticmethod
    def _lookup_key(session: AccessControlSession, privilege_name: str) -> str:
        prefix, local_name = split_prefixed_name(privilege_name)
        if prefix is None:
            return privilege_name
        return expand_name(session.resolve_namespace_uri(prefix), local_name)


def _require_session(session: AccessControlSession | None) -> None:
    if session is None:
        raise InvalidArgumentError("session is required")
