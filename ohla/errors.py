"""Application error types and their rendering into the response envelope.

Every failure the core can produce is an ``AppError`` subclass. Each class
fixes its HTTP status and error tag, so the exception handler registered in
``register_exception_handlers`` is the only place errors become responses.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ohla.schemas.response import ApiResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    error_type = "internal_server_error"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message

    @property
    def details(self) -> str | None:
        return None


# ---------------------------------------------------------------------------
# Configuration store
# ---------------------------------------------------------------------------

class StoreError(AppError):
    """Base for failures raised by the node profile store."""


class NotFoundError(StoreError):
    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Record not found"):
        super().__init__(message)


class InvalidInputError(StoreError):
    error_type = "invalid_input"

    def __init__(self, reason: str):
        super().__init__(f"Invalid input: {reason}")


class DatabaseError(StoreError):
    error_type = "database_error"

    def __init__(self, reason: str):
        super().__init__(f"Database error: {reason}")


class ConfigError(AppError):
    error_type = "config_error"

    def __init__(self, reason: str):
        super().__init__(f"Configuration error: {reason}")


# ---------------------------------------------------------------------------
# Remote node RPC
# ---------------------------------------------------------------------------

class RemoteRpcError(AppError):
    """Base for every way a call to the remote node can fail."""

    status_code = 502
    error_type = "bitcoin_rpc_error"


class RemoteConnectionError(RemoteRpcError):
    error_type = "bitcoin_rpc_connection_error"

    def __init__(self, reason: str):
        super().__init__(f"Failed to connect to Bitcoin node: {reason}")
        self.reason = reason


class RemoteProtocolError(RemoteRpcError):
    error_type = "bitcoin_rpc_error"

    def __init__(self, code: int, rpc_message: str):
        super().__init__(f"Bitcoin RPC error (code {code}): {rpc_message}")
        self.code = code
        self.rpc_message = rpc_message

    @property
    def details(self) -> str | None:
        return f"RPC error code: {self.code}, message: {self.rpc_message}"


class RemoteParseError(RemoteRpcError):
    error_type = "bitcoin_rpc_parse_error"

    def __init__(self, reason: str):
        super().__init__(f"Failed to parse Bitcoin RPC response: {reason}")
        self.reason = reason


class RemoteEmptyResultError(RemoteRpcError):
    error_type = "bitcoin_rpc_no_result"

    def __init__(self):
        super().__init__("Bitcoin RPC returned no result")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: str | None = None,
) -> JSONResponse:
    body = ApiResponse(status=status_code, message=message, error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def _app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.error_type, exc.message, exc.details)


async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, "http_error", str(exc.detail))


async def _validation_exc_handler(request: Request, exc: RequestValidationError):
    return error_response(
        422, "validation_error", "Request validation failed", _summarize_validation_errors(exc)
    )


async def _unhandled_exc_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "internal_server_error", "Internal server error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exc_handler)
    app.add_exception_handler(RequestValidationError, _validation_exc_handler)
    app.add_exception_handler(Exception, _unhandled_exc_handler)
