"""
Translation of domain errors into HTTP responses.

STATUS_BY_KIND is the single place where error kinds become status codes;
it must cover every BookingErrorKind.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hotel_booking.core.exceptions import BookingError, BookingErrorKind
from hotel_booking.core.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_KIND = {
    BookingErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    BookingErrorKind.NOT_ELIGIBLE: status.HTTP_403_FORBIDDEN,
    BookingErrorKind.ROOM_FULL: status.HTTP_403_FORBIDDEN,
    BookingErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
}

_missing = set(BookingErrorKind) - set(STATUS_BY_KIND)
if _missing:
    raise RuntimeError(f"No status code mapped for error kinds: {sorted(k.value for k in _missing)}")


async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
    logger.info("booking_error", kind=exc.kind.value, detail=exc.message)
    return JSONResponse(status_code=STATUS_BY_KIND[exc.kind], content={"detail": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("request_validation_failed", errors=len(exc.errors()))
    return JSONResponse(
        status_code=STATUS_BY_KIND[BookingErrorKind.VALIDATION],
        content={"detail": "Invalid request"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


EXCEPTION_HANDLERS = {
    BookingError: booking_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
