"""
Exception handlers.

Maps domain exceptions to HTTP responses with a FailureDetail body.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from deckvault.clients.mtgjson import MTGJSONError
from deckvault.clients.scryfall import ScryfallError
from deckvault.models.failure import FailureDetail, FailureKind, KnownError
from deckvault.storage.port import PersistenceError

logger = logging.getLogger(__name__)


def _failure_response(status_code: int, failure: FailureDetail) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=failure.model_dump(mode="json"))


async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    return _failure_response(exc.status_code, exc.to_detail())


async def persistence_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.error("Storage failure: %s", exc)
    return _failure_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        FailureDetail(
            kind=FailureKind.STORAGE_UNAVAILABLE,
            message="Your change was applied but could not be saved.",
            detail=str(exc),
            suggestion="Check the database connection and try again.",
        ),
    )


async def external_api_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.warning("Card data source failure: %s", exc)
    return _failure_response(
        status.HTTP_502_BAD_GATEWAY,
        FailureDetail(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message="The card database could not be reached.",
            detail=str(exc),
            suggestion="Try again in a moment.",
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(KnownError, known_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(ScryfallError, external_api_error_handler)
    app.add_exception_handler(MTGJSONError, external_api_error_handler)
