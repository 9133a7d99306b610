from __future__ import annotations

from typing import Collection, Protocol


class Privilege(Protocol):
    @property
    def name(self) -> str:
        ...

    def is_aggregate(self) -> bool:
        ...

    def constituents(self) -> Collection[Privilege]:
        ...


class AccessControlSession(Protocol):
    def resolve_privilege_by_name(self, name: str) -> Privilege:
        ...

    def resolve_namespace_uri(self, prefix: str) -> str:
        ...
