"""Error taxonomy and the handlers that render it in the response envelope.

Routes raise the ``HTTPException`` subclasses below; services raise plain
``ValueError`` / ``LookupError`` and leave the HTTP mapping to the route.
Every failure leaves the API as ``{"status": "error", "message": ...}``.
"""
import logging
import traceback

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings

logger = logging.getLogger(__name__)


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Validation errors", errors: list[dict] | None = None):
        super().__init__(status_code=400, detail=detail)
        self.errors = errors or []


class Unauthorized(HTTPException):
    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(status_code=401, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Access denied. Insufficient permissions."):
        super().__init__(status_code=403, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=404, detail=detail)


class Conflict(HTTPException):
    # 400, not 409
    def __init__(self, detail: str = "Duplicate field value entered"):
        super().__init__(status_code=400, detail=detail)


class ServerError(HTTPException):
    def __init__(self, detail: str = "Server Error"):
        super().__init__(status_code=500, detail=detail)


def error_body(message: str, errors: list[dict] | None = None, stack: str | None = None) -> dict:
    body = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    if stack and not settings.is_production:
        body["stack"] = stack
    return body


def _field_errors(exc: RequestValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header", "cookie")]
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.append({"field": ".".join(loc) or "body", "message": msg})
    return out


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and not isinstance(exc, NotFound) and exc.detail == "Not Found":
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    errors = getattr(exc, "errors", None)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, errors),
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content=error_body("Validation errors", _field_errors(exc)))


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=400, content=error_body("Duplicate field value entered"))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=error_body("Server Error", stack=stack))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
