import logging

from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from privilege_bridge.errors import (
    AppError,
    InvalidArgumentError,
    NoMappingFoundError,
    UnderlyingSystemError,
    UnknownNamespaceError,
    UnknownPrivilegeError,
    error_payload,
)
from privilege_bridge.http import register_exception_handlers
from privilege_bridge.infrastructure.memory_session import InMemoryAccessControlSession
from privilege_bridge.permissions import RepositoryFilePermission
from privilege_bridge.translator import PermissionPrivilegeTranslator


def make_client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)
    translator = PermissionPrivilegeTranslator()
    session = InMemoryAccessControlSession()

    @app.get("/permissions/{name}")
    def privileges_for(name: str) -> list[str]:
        permissions = [RepositoryFilePermission(name)] if name != "none" else []
        privileges = translator.permissions_to_privileges(session, permissions)
        return sorted(privilege.name for privilege in privileges)

    @app.get("/privileges/{name}")
    def permissions_for(name: str) -> list[str]:
        privilege = session.resolve_privilege_by_name(name)
        return sorted(p.value for p in translator.privileges_to_permissions(session, [privilege]))

    return TestClient(app)


def test_error_defaults() -> None:
    assert InvalidArgumentError().code == "INVALID_ARGUMENT"
    assert InvalidArgumentError().status_code == status.HTTP_400_BAD_REQUEST
    assert NoMappingFoundError().status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert UnknownPrivilegeError().code == "UNKNOWN_PRIVILEGE"
    assert UnknownNamespaceError().status_code == status.HTTP_502_BAD_GATEWAY


def test_collaborator_errors_share_a_base() -> None:
    assert issubclass(UnknownPrivilegeError, UnderlyingSystemError)
    assert issubclass(UnknownNamespaceError, UnderlyingSystemError)
    assert issubclass(UnderlyingSystemError, AppError)


def test_error_overrides() -> None:
    exc = NoMappingFoundError("nothing", details={"permissions": ["delete"]})

    assert str(exc) == "nothing"
    assert exc.details == {"permissions": ["delete"]}
    assert NoMappingFoundError().details is None


def test_error_payload_shape() -> None:
    assert error_payload("NO_MAPPING_FOUND", "no permissions") == {
        "error": {"code": "NO_MAPPING_FOUND", "message": "no permissions", "details": None}
    }


def test_handler_passes_successful_translation() -> None:
    client = make_client()

    response = client.get("/permissions/read")

    assert response.status_code == 200
    assert response.json() == ["jcr:read"]


def test_handler_renders_invalid_argument() -> None:
    client = make_client()

    response = client.get("/permissions/none")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["error"]["code"] == "INVALID_ARGUMENT"


def test_handler_renders_no_mapping() -> None:
    client = make_client()

    response = client.get("/privileges/jcr:lockManagement")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"]["code"] == "NO_MAPPING_FOUND"


def test_handler_renders_unknown_privilege() -> None:
    client = make_client()

    response = client.get("/privileges/jcr:fly")

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.json() == {
        "error": {
            "code": "UNKNOWN_PRIVILEGE",
            "message": "Unknown privilege 'jcr:fly'",
            "details": {"name": "jcr:fly"},
        }
    }


def test_handler_logs_client_errors_as_warnings(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="privilege_bridge.http")
    client = make_client()

    client.get("/permissions/none")

    [record] = [r for r in caplog.records if r.name == "privilege_bridge.http"]
    assert record.levelno == logging.WARNING
    assert "[INVALID_ARGUMENT] path=/permissions/none" in record.getMessage()


def test_handler_logs_server_errors_as_errors(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="privilege_bridge.http")
    client = make_client()

    client.get("/privileges/jcr:lockManagement")

    [record] = [r for r in caplog.records if r.name == "privilege_bridge.http"]
    assert record.levelno == logging.ERROR
    assert "[NO_MAPPING_FOUND]" in record.getMessage()
