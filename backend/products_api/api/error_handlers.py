"""Error Handlers - global exception handlers for the Products API.

Invariants:
    - ProductsApiError → its own envelope and HTTP status (InputValidationError → {"errors": [...]})
    - RequestValidationError → 400 in the same field-level {"errors": [...]} shape
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (ProductsApiError), framework validation (Pydantic), catch-all
    - Framework validation errors reshaped so clients see one 400 format regardless of origin
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError

from products_api.core.errors import DatabaseError, ErrorSeverity, ProductsApiError

logger = logging.getLogger(__name__)

_LOCATIONS = {"path": "params", "body": "body", "query": "query", "header": "headers"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_products_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_products_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(ProductsApiError)
    async def products_error_handler(request: Request, exc: ProductsApiError):
        """Handle all Products API errors."""
        if isinstance(exc, DatabaseError):
            logger.error(
                f"DatabaseError: {exc.detail}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
        elif exc.http_status >= 500:
            logger.error(
                f"ProductsApiError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
        else:
            logger.warning(
                f"ProductsApiError: {exc.message}",
                extra={"error_code": exc.code, "path": request.url.path},
            )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(
                build_validation_error_response(exc.errors()),
            ),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def build_validation_error_response(errors: list[dict]) -> dict:
    """Reshape framework validation errors into the field-error list."""
    details = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ())]
        location = _LOCATIONS.get(loc[0], loc[0]) if loc else "body"
        detail = {"type": "field"}
        if "input" in e:
            detail["value"] = e["input"]
        detail.update(
            msg=e["msg"],
            param=".".join(loc[1:]),
            location=location,
        )
        details.append(detail)
    return {"errors": details}
