"""
Exception handlers - map domain errors to HTTP responses.

Business-rule violations become ``{"detail": message, "kind": kind}``
with a stable status per kind. Storage failures are logged with their
cause and reported with a generic message only.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import AccountError, StorageFailure

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    "validation_error": status.HTTP_400_BAD_REQUEST,
    "invalid_id": status.HTTP_400_BAD_REQUEST,
    "invalid_token": status.HTTP_400_BAD_REQUEST,
    "same_password": status.HTTP_400_BAD_REQUEST,
    "weak_password": status.HTTP_400_BAD_REQUEST,
    "upload_rejected": status.HTTP_400_BAD_REQUEST,
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "not_verified": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "duplicate_email": status.HTTP_409_CONFLICT,
    "already_verified": status.HTTP_409_CONFLICT,
    "already_seller": status.HTTP_409_CONFLICT,
    "storage_failure": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "kind": exc.kind},
    )


async def storage_failure_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    logger.error(
        "Storage failure on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": StorageFailure.default_message, "kind": StorageFailure.kind},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorageFailure, storage_failure_handler)
    app.add_exception_handler(AccountError, account_error_handler)
