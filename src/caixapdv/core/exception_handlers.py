"""Global exception handlers for FastAPI."""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from caixapdv.core.errors import AppError, ErrorResponse
from caixapdv.core.logging import get_logger

logger = get_logger(__name__)


def _error_json(status_code: int, code: str, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(code=code, message=message, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """
    Handle all AppError exceptions and convert to JSON response.

    Returns standardized error format:
    {
        "success": false,
        "code": "NOT_FOUND",
        "message": "Venda with ID xyz not found",
        "details": {"resource": "Venda", "resource_id": "xyz"}
    }
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app_error",
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        cause=repr(exc.__cause__) if exc.__cause__ else None,
    )
    error_response = exc.to_response()
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(exclude_none=True),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map body/path validation failures to a 400 envelope naming the fields."""
    fields = []
    for err in exc.errors():
        # Drop the leading "body"/"path" segment
        loc = [str(p) for p in err.get("loc", ())[1:]]
        fields.append({"field": ".".join(loc) or "body", "error": err.get("msg", "")})

    names = ", ".join(f["field"] for f in fields)
    logger.warning("request.invalid", path=request.url.path, fields=fields)
    return _error_json(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        f"Invalid or missing fields: {names}",
        {"fields": fields},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unhandled database failures become a 500 envelope."""
    logger.error(
        "db.error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return _error_json(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_ERROR",
        "Database error while processing the request",
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (404 route, 405 method) in the failure envelope."""
    logger.error(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
    )
    return _error_json(exc.status_code, "HTTP_ERROR", str(exc.detail))


def register_exception_handlers(app) -> None:
    """Register all custom exception handlers with FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
