"""Response envelope, request dependencies and exception handlers shared by the routers."""
from typing import Generic, Optional, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from lively_langs.exceptions import UserError
from lively_langs.logging_config import get_logger
from lively_langs.store import Listing, Store

logger = get_logger(__name__)

T = TypeVar("T")

INTERNAL_ERROR = "internal server error"
PARTIAL_ERROR = "partial internal server error"


class Envelope(BaseModel, Generic[T]):
    """Every JSON response: ``{"content": ..., "error": ...}``; error omitted when unset."""
    content: Optional[T] = None
    error: Optional[str] = None


def get_store(request: Request) -> Store:
    """Dependency to get the application's store."""
    return request.app.state.store


def listing_envelope(listing: Listing) -> dict:
    """Envelope for a bulk read; a partial read still succeeds but says so."""
    if listing.partial:
        return {"content": listing.items, "error": PARTIAL_ERROR}
    return {"content": listing.items}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"content": None, "error": message})


# ========== Exception handlers ==========

async def user_error_handler(request: Request, exc: UserError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = tuple(first.get("loc", ()))
    if not loc or loc == ("body",) or first.get("type") == "json_invalid":
        message = "invalid JSON"
    else:
        message = f"invalid value for '{loc[-1]}'"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Error handling {request.method} {request.url.path}: {exc!r}", exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
