"""Error taxonomy and the JSON error envelope."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

# Initialize logger
logger = structlog.get_logger(__name__)


class StoreError(Exception):
    """Base class for failures raised by the stores."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StoreError):
    """Malformed or out-of-range input."""

    status_code = 400


class NotFoundError(StoreError):
    """Referenced entity or tag does not exist."""

    status_code = 404


class ConflictError(StoreError):
    """Duplicate unique key."""

    status_code = 409


class InternalError(StoreError):
    """Unexpected failure in an external collaborator."""

    status_code = 500


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(error: dict) -> str:
    """Prefer the message a validator raised itself over pydantic's generic text."""
    if error.get("type") == "json_invalid":
        return "Request body must be valid JSON"

    if error.get("type") == "value_error":
        ctx = error.get("ctx") or {}
        if ctx.get("error") is not None:
            return str(ctx["error"])
        return error.get("msg", "").removeprefix("Value error, ")

    location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query"))
    message = error.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers that render every failure as ``{"error": message}``."""

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message)
        else:
            logger.info(
                "request_rejected",
                path=request.url.path,
                status_code=exc.status_code,
                error=exc.message,
            )
        return _error_response(exc.status_code, exc.message)

    async def handle_validation_error(
        request: Request, exc: RequestValidationError | PydanticValidationError
    ):
        errors = exc.errors()
        message = _describe_validation_error(errors[0]) if errors else "Invalid request"
        logger.info("request_validation_failed", path=request.url.path, error=message)
        return _error_response(400, message)

    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(PydanticValidationError, handle_validation_error)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))
