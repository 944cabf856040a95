# Third-party imports
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import sentry_sdk
from starlette.exceptions import HTTPException as StarletteHTTPException

# Local application imports
from app.core.monitoring.logging import get_logger
from app.schemas.common import ErrorResponse

logger = get_logger(__name__)

# Map specific HTTP status codes to custom error codes
ERROR_CODES = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    422: "unprocessable_entity",
    429: "too_many_requests",
    500: "internal_server_error",
}

MAX_VALIDATION_ERRORS = 5


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,  # noqa
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        error_code = ERROR_CODES.get(exc.status_code, "error")
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        response = ErrorResponse.from_error(code=error_code, message=detail)
        return JSONResponse(status_code=exc.status_code, content=response.model_dump(), headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,  # noqa
        exc: RequestValidationError,
    ) -> JSONResponse:
        error_details = []
        for error in exc.errors():
            message = error.get("msg", "")

            # Drop pydantic's "Value error, " prefix from custom validator messages
            val_error_prefix = "Value error, "
            if message.startswith(val_error_prefix):
                message = message[len(val_error_prefix) :]

            location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            error_details.append(f"{location}: {message}" if location else message)

        shown = error_details[:MAX_VALIDATION_ERRORS]
        if len(error_details) > MAX_VALIDATION_ERRORS:
            shown.append("...and more errors")
        detail = "; ".join(shown) if shown else "Invalid request data"

        response = ErrorResponse.from_error(code="bad_request", message=detail, details=error_details)
        return JSONResponse(status_code=400, content=response.model_dump())

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        sentry_sdk.capture_exception(exc)
        response = ErrorResponse.from_error(
            code="internal_server_error",
            message="An unexpected error occurred. Please try again later.",
        )
        return JSONResponse(status_code=500, content=response.model_dump())
