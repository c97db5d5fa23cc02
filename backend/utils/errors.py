# backend/utils/errors.py
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _db_message(exc: SQLAlchemyError) -> str:
    # Raw driver message, e.g. "UNIQUE constraint failed: products.name"
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _field_errors(exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        errors.append({
            "location": loc[0] if loc else None,
            "path": ".".join(loc[1:]),
            "msg": err.get("msg"),
            "type": err.get("type"),
        })
    return errors


def add_error_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
        return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"errors": _field_errors(exc)})

    @app.exception_handler(SQLAlchemyError)
    async def db_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"error": _db_message(exc)})
