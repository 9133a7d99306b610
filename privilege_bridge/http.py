import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .errors import AppError, error_payload

logger = logging.getLogger(__name__)


def _log_error(request: Request, exc: AppError) -> None:
    log_message = f"[{exc.code}] path={request.url.path} message={exc.message}"
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(log_message)
    else:
        logger.warning(log_message)


def register_exception_handlers(app: FastAPI) -> None:
    """Render translation errors raised inside request handlers as JSON."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        _log_error(request, exc)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(exc.code, exc.message, exc.details),
        )
