"""
JCR privilege vocabulary.

Privilege names come in three shapes:

- prefixed: ``jcr:read`` (what a session reports from ``Privilege.name``)
- expanded: ``{http://www.jcp.org/jcr/1.0}read`` (independent of prefix bindings)
- bare: ``read`` (no namespace at all)

Lookup tables always use the expanded form so that a prefix bound to the
same URI under a different name resolves identically.
"""
from __future__ import annotations

from typing import Final

JCR_NAMESPACE_URI: Final[str] = "http://www.jcp.org/jcr/1.0"

# Privileges in this prefix are built into the access-control system and
# are never expanded, even when aggregate.
RESERVED_PREFIX: Final[str] = "jcr"

NAMESPACE_SEPARATOR: Final[str] = ":"

# Always bound to each other; ``:read`` and ``read`` are both ``{}read``.
EMPTY_PREFIX: Final[str] = ""
EMPTY_NAMESPACE_URI: Final[str] = ""


def expand_name(namespace_uri: str, local_name: str) -> str:
    return "{" + namespace_uri + "}" + local_name


def is_expanded_name(name: str) -> bool:
    return name.startswith("{") and "}" in name


def split_prefixed_name(name: str) -> tuple[str | None, str]:
    """Split ``prefix:local`` into its parts.

    Expanded and bare names have no prefix and are returned unchanged as the
    local part.
    """
    if is_expanded_name(name):
        return None, name
    prefix, separator, local_name = name.partition(NAMESPACE_SEPARATOR)
    if not separator:
        return None, name
    return prefix, local_name


def is_reserved_name(name: str) -> bool:
    return name.startswith(RESERVED_PREFIX + NAMESPACE_SEPARATOR) or name.startswith(
        "{" + JCR_NAMESPACE_URI + "}"
    )


def _jcr(local_name: str) -> str:
    return expand_name(JCR_NAMESPACE_URI, local_name)


JCR_READ: Final[str] = _jcr("read")
JCR_MODIFY_PROPERTIES: Final[str] = _jcr("modifyProperties")
JCR_ADD_CHILD_NODES: Final[str] = _jcr("addChildNodes")
JCR_REMOVE_NODE: Final[str] = _jcr("removeNode")
JCR_REMOVE_CHILD_NODES: Final[str] = _jcr("removeChildNodes")
JCR_WRITE: Final[str] = _jcr("write")
JCR_READ_ACCESS_CONTROL: Final[str] = _jcr("readAccessControl")
JCR_MODIFY_ACCESS_CONTROL: Final[str] = _jcr("modifyAccessControl")
JCR_LOCK_MANAGEMENT: Final[str] = _jcr("lockManagement")
JCR_VERSION_MANAGEMENT: Final[str] = _jcr("versionManagement")
JCR_NODE_TYPE_MANAGEMENT: Final[str] = _jcr("nodeTypeManagement")
JCR_RETENTION_MANAGEMENT: Final[str] = _jcr("retentionManagement")
JCR_LIFECYCLE_MANAGEMENT: Final[str] = _jcr("lifecycleManagement")
JCR_ALL: Final[str] = _jcr("all")

# Standard privilege hierarchy, in registration order (constituents first).
STANDARD_PRIVILEGES: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    (JCR_READ, ()),
    (JCR_MODIFY_PROPERTIES, ()),
    (JCR_ADD_CHILD_NODES, ()),
    (JCR_REMOVE_NODE, ()),
    (JCR_REMOVE_CHILD_NODES, ()),
    (
        JCR_WRITE,
        (
            JCR_MODIFY_PROPERTIES,
            JCR_ADD_CHILD_NODES,
            JCR_REMOVE_NODE,
            JCR_REMOVE_CHILD_NODES,
        ),
    ),
    (JCR_READ_ACCESS_CONTROL, ()),
    (JCR_MODIFY_ACCESS_CONTROL, ()),
    (JCR_LOCK_MANAGEMENT, ()),
    (JCR_VERSION_MANAGEMENT, ()),
    (JCR_NODE_TYPE_MANAGEMENT, ()),
    (JCR_RETENTION_MANAGEMENT, ()),
    (JCR_LIFECYCLE_MANAGEMENT, ()),
    (
        JCR_ALL,
        (
            JCR_READ,
            JCR_WRITE,
            JCR_READ_ACCESS_CONTROL,
            JCR_MODIFY_ACCESS_CONTROL,
            JCR_LOCK_MANAGEMENT,
            JCR_VERSION_MANAGEMENT,
            JCR_NODE_TYPE_MANAGEMENT,
            JCR_RETENTION_MANAGEMENT,
            JCR_LIFECYCLE_MANAGEMENT,
        ),
    ),
)
