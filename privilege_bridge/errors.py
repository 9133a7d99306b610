from typing import Any

from fastapi import status


class AppError(Exception):
    code: str = "APP_ERROR"
    message: str = "Application error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    details: Any | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        if details is not None:
            self.details = details

        super().__init__(self.message)


class InvalidArgumentError(AppError):
    code = "INVALID_ARGUMENT"
    message = "Invalid argument"
    status_code = status.HTTP_400_BAD_REQUEST


class NoMappingFoundError(AppError):
    """Raised when a translation yields nothing where a non-empty result is required.

    This points at a gap between the permission and privilege vocabularies,
    not at a bad request, hence the 5xx status.
    """

    code = "NO_MAPPING_FOUND"
    message = "No mapping found"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UnderlyingSystemError(AppError):
    """Raised by the access-control system when it cannot resolve a name."""

    code = "UNDERLYING_SYSTEM_ERROR"
    message = "Access-control system error"
    status_code = status.HTTP_502_BAD_GATEWAY


class UnknownPrivilegeError(UnderlyingSystemError):
    code = "UNKNOWN_PRIVILEGE"
    message = "Unknown privilege"


class UnknownNamespaceError(UnderlyingSystemError):
    code = "UNKNOWN_NAMESPACE"
    message = "Unknown namespace prefix"


def error_payload(
    code: str,
    message: str,
    details: Any | None = None,
) -> dict[str, Any]:
    return {"error": {"code": code, "message": message, "details": details}}
