"""API Documentation - Swagger UI served at /docs over the generated OpenAPI document.

Invariants:
    - /docs is outside the product router and the OpenAPI schema itself
    - The UI always points at the app's own openapi_url

Design Decisions:
    - Custom route over FastAPI's built-in docs_url: the page title comes from settings
"""

from fastapi import APIRouter, Request
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse

from products_api.config import get_settings

router = APIRouter(tags=["docs"])

SWAGGER_UI_PARAMETERS = {
    "docExpansion": "list",
    "defaultModelsExpandDepth": 1,
    "tryItOutEnabled": True,
}


@router.get("/docs", include_in_schema=False)
async def swagger_ui(request: Request) -> HTMLResponse:
    return get_swagger_ui_html(
        openapi_url=request.app.openapi_url,
        title=get_settings().docs_title,
        swagger_ui_parameters=SWAGGER_UI_PARAMETERS,
    )
