from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Type

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from domain.exceptions import (
    AuthenticationFailed,
    AuthenticationMissing,
    AuthorizationDenied,
    CsvParseError,
    DomainError,
    PersistenceFailure,
    RepositoryError,
    RequestMalformed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: List[Tuple[Type[DomainError], int]] = [
    (AuthenticationMissing, 401),
    (AuthenticationFailed, 401),
    (AuthorizationDenied, 403),
    (RequestMalformed, 400),
    (CsvParseError, 400),
    (PersistenceFailure, 500),
    (RepositoryError, 500),
]


def error_response(status_code: int, error: str, details: Any = None, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": error}
    if details is not None:
        body["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _details(exc: DomainError) -> Any:
    if isinstance(exc, CsvParseError):
        return exc.diagnostics
    if isinstance(exc, PersistenceFailure):
        return {"phase": exc.phase, "message": exc.details}
    if isinstance(exc, RepositoryError):
        return {"operation": exc.operation, "message": exc.details}
    return None


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = next((code for cls, code in STATUS_BY_ERROR if isinstance(exc, cls)), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return error_response(status_code, str(exc), _details(exc), headers=headers)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Invalid request", exc.errors())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal server error", str(exc))
