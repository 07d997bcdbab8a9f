"""Products API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ProductsApiError → structured JSON responses
    - CORS restricted to the single FRONTEND_URL origin (not hardcoded)
    - Database initialized on startup via lifespan; a failed connection is logged,
      the server still starts

Design Decisions:
    - Lifespan over @app.on_event
    - Middleware order (outermost first): access log → strict origin → CORS headers
    - Built-in docs_url disabled: /docs served by api/routes/docs.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from products_api.api.cors import register_cors
from products_api.api.error_handlers import register_error_handlers
from products_api.api.routes import docs, health, products
from products_api.config import get_settings
from products_api.infrastructure.database import connect_db, init_db
from products_api.infrastructure.observability import AccessLogMiddleware, setup_logging

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {
        "name": "Products",
        "description": "API operations related to products",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await connect_db(manager, create_schema=settings.database_auto_create)
    logger.info("Products API started")
    yield
    logger.info("Products API shutting down")
    await manager.dispose()


app = FastAPI(
    title="REST API Python / FastAPI",
    version="1.0.0",
    description="API docs for Products",
    openapi_tags=OPENAPI_TAGS,
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

settings = get_settings()
register_cors(
    app, settings.frontend_url,
    allow_missing=settings.cors_allow_missing_origin,
)
app.add_middleware(AccessLogMiddleware)

register_error_handlers(app)

# Routes - explicit registration
app.include_router(health.router)
app.include_router(products.router)
app.include_router(docs.router)
