"""
Error translation.

Every failure leaves the service as {"error": "<message>"}:
client input problems are 400, missing shipments 404 and store failures 500.
"""
from typing import Any, Dict, Sequence
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from shipment_service.core.logging_config import get_logger

logger = get_logger(__name__)

# Malformed JSON is reported before unknown fields, unknown fields before field errors
_PRIORITY = {"json_invalid": 0, "extra_forbidden": 1}

def error_body(message: str) -> Dict[str, str]:
    return {"error": message}

def describe_validation_error(errors: Sequence[Dict[str, Any]]) -> str:
    """Single message for the first failing input"""
    if not errors:
        return "invalid request"
    error = min(errors, key=lambda e: _PRIORITY.get(e.get("type"), 2))
    kind = error.get("type")
    loc = tuple(error.get("loc", ()))
    # loc is ("body", <field>) for body fields
    field = loc[1] if len(loc) > 1 and isinstance(loc[1], str) else None
    ctx = error.get("ctx") or {}

    if kind == "json_invalid":
        return f"invalid json: {ctx.get('error', error.get('msg'))}"
    if kind == "extra_forbidden":
        return f'invalid json: unknown field "{field}"'
    if kind == "missing":
        if field is None:
            return "invalid json: request body is required"
        return f"{field} is required"
    if kind == "value_error" and "error" in ctx:
        return str(ctx["error"])
    if field is None:
        return f"invalid json: {error.get('msg')}"
    return f"invalid json: {field}: {error.get('msg')}"

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )

async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(describe_validation_error(exc.errors())),
    )

async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Storage error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(str(exc)),
    )

def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)
