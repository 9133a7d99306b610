"""Shared test fixtures and configuration."""
from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from privilege_bridge.infrastructure.memory_session import InMemoryAccessControlSession
from privilege_bridge.translator import PermissionPrivilegeTranslator


@dataclass(frozen=True)
class FakePrivilege:
    """Privilege double with an arbitrary name and constituents."""

    name: str
    members: tuple["FakePrivilege", ...] = field(default=(), compare=False)

    def is_aggregate(self) -> bool:
        return bool(self.members)

    def constituents(self) -> tuple["FakePrivilege", ...]:
        return self.members


@pytest.fixture
def translator() -> PermissionPrivilegeTranslator:
    return PermissionPrivilegeTranslator()


@pytest.fixture
def session() -> InMemoryAccessControlSession:
    return InMemoryAccessControlSession()


@pytest.fixture
def make_privilege():
    def _make(name: str, *members: FakePrivilege) -> FakePrivilege:
        return FakePrivilege(name=name, members=members)

    return _make


@pytest.fixture(autouse=True)
def clear_settings():
    from privilege_bridge.config import reset_settings

    reset_settings()
    yield
    reset_settings()
