"""
In-memory access-control session.

A self-contained implementation of the access-control collaborator: a
namespace registry and a privilege registry seeded with the JCR standard
privilege hierarchy. Used where no live repository session is available and
as the reference behaviour in tests.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Mapping

from ..errors import UnknownNamespaceError, UnknownPrivilegeError
from ..privileges import (
    EMPTY_NAMESPACE_URI,
    EMPTY_PREFIX,
    JCR_NAMESPACE_URI,
    NAMESPACE_SEPARATOR,
    RESERVED_PREFIX,
    STANDARD_PRIVILEGES,
    expand_name,
    is_expanded_name,
    split_prefixed_name,
)

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StandardPrivilege:
    """A named privilege; aggregate when it declares constituents.

    Equality and hashing use the name only, so a privilege resolved twice is
    the same set member.
    """

    name: str
    aggregates: tuple[StandardPrivilege, ...] = field(default=(), compare=False, repr=False)

    def is_aggregate(self) -> bool:
        return bool(self.aggregates)

    def constituents(self) -> tuple[StandardPrivilege, ...]:
        return self.aggregates


class InMemoryAccessControlSession:
    def __init__(self, namespaces: Mapping[str, str] | None = None) -> None:
        # the empty prefix is always bound to the empty namespace
        self._namespaces: dict[str, str] = {
            EMPTY_PREFIX: EMPTY_NAMESPACE_URI,
            RESERVED_PREFIX: JCR_NAMESPACE_URI,
        }
        # keyed by expanded name
        self._privileges: dict[str, StandardPrivilege] = {}

        for prefix, uri in (namespaces or {}).items():
            self.register_namespace(prefix, uri)
        for expanded, constituent_names in STANDARD_PRIVILEGES:
            self.register_privilege(expanded, constituent_names)

    def register_namespace(self, prefix: str, uri: str) -> None:
        if not prefix or not uri:
            raise ValueError("Namespace prefix and URI must not be empty")
        if NAMESPACE_SEPARATOR in prefix:
            raise ValueError(f"Namespace prefix '{prefix}' must not contain '{NAMESPACE_SEPARATOR}'")
        if prefix == RESERVED_PREFIX:
            raise ValueError(f"Namespace prefix '{RESERVED_PREFIX}' is reserved")
        self._namespaces[prefix] = uri
        logger.debug("namespace_registered prefix=%s uri=%s", prefix, uri)

    def resolve_namespace_uri(self, prefix: str) -> str:
        try:
            return self._namespaces[prefix]
        except KeyError:
            raise UnknownNamespaceError(
                f"No namespace registered for prefix '{prefix}'",
                details={"prefix": prefix},
            ) from None

    def register_privilege(
        self,
        name: str,
        constituent_names: Iterable[str] = (),
    ) -> StandardPrivilege:
        """Register a privilege, aggregate when ``constituent_names`` is non-empty.

        Constituents must already be registered, so the hierarchy stays acyclic.

        Raises:
            ValueError: If the privilege is already registered
            UnknownPrivilegeError: If a constituent is not registered
            UnknownNamespaceError: If a name uses an unregistered prefix
        """
        expanded = self._expand(name)
        if expanded in self._privileges:
            raise ValueError(f"Privilege '{name}' is already registered")

        constituents = tuple(
            self.resolve_privilege_by_name(constituent) for constituent in constituent_names
        )
        privilege = StandardPrivilege(name=self._prefixed(expanded), aggregates=constituents)
        self._privileges[expanded] = privilege
        return privilege

    def resolve_privilege_by_name(self, name: str) -> StandardPrivilege:
        expanded = self._expand(name)
        try:
            return self._privileges[expanded]
        except KeyError:
            raise UnknownPrivilegeError(
                f"Unknown privilege '{name}'",
                details={"name": name},
            ) from None

    def _expand(self, name: str) -> str:
        prefix, local_name = split_prefixed_name(name)
        if prefix is None:
            if is_expanded_name(name):
                return name
            return expand_name(EMPTY_NAMESPACE_URI, name)
        return expand_name(self.resolve_namespace_uri(prefix), local_name)

    def _prefixed(self, expanded: str) -> str:
        # Sessions report privilege names in prefixed form.
        if not is_expanded_name(expanded):
            return expanded
        uri, _, local_name = expanded[1:].partition("}")
        if uri == EMPTY_NAMESPACE_URI:
            return local_name
        for prefix, bound_uri in self._namespaces.items():
            if bound_uri == uri:
                return f"{prefix}{NAMESPACE_SEPARATOR}{local_name}"
        return expanded


def build_access_control_session(settings: Settings) -> InMemoryAccessControlSession:
    session = InMemoryAccessControlSession(settings.namespaces)
    for name, constituent_names in settings.custom_privileges.items():
        session.register_privilege(name, constituent_names)
    logger.info(
        "access_control_session_ready namespaces=%d custom_privileges=%d",
        len(settings.namespaces),
        len(settings.custom_privileges),
    )
    return session
