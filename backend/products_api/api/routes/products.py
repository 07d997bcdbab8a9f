"""Product Routes - CRUD handlers over the Product resource.

Invariants:
    - Every {id} route runs PRODUCT_ID_RULES before the handler (non-integer id → 400)
    - Body routes run their field rules before the handler (invalid body → 400)
    - Each handler makes exactly one repository call and holds no state between requests
    - Missing product → ResourceNotFoundError (404); store failure → DatabaseError (500)

Design Decisions:
    - Validation dependency listed before the repository dependency: bad input is
      rejected before a DB session is opened
    - Repository injected via get_product_repository: tests swap the store without patching
    - PATCH /{id} registered once (toggle is the only partial update)
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from products_api.api.validation import ValidatedRequest, validate_request
from products_api.core.errors import ErrorContext, ResourceNotFoundError
from products_api.core.repository_protocols import ProductLike, ProductRepository
from products_api.core.validation_rules import (
    PRODUCT_CREATE_RULES, PRODUCT_ID_RULES, PRODUCT_UPDATE_RULES,
)
from products_api.infrastructure.database import get_db
from products_api.infrastructure.product_repository import SqlAlchemyProductRepository
from products_api.schemas.product import (
    MessageResponse, ProductCreate, ProductResponse, ProductUpdate,
    ValidationErrorResponse,
)

router = APIRouter(prefix="/api/products", tags=["Products"])

_BAD_REQUEST = {
    status.HTTP_400_BAD_REQUEST: {
        "model": ValidationErrorResponse,
        "description": "Bad request - invalid ID or invalid input data",
    },
}
_NOT_FOUND = {
    status.HTTP_404_NOT_FOUND: {"description": "Product not found"},
}


def _request_body(schema: type) -> dict:
    """OpenAPI requestBody for routes that parse the body themselves."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        },
    }


async def get_product_repository(
    db: AsyncSession = Depends(get_db),
) -> ProductRepository:
    """FastAPI dependency for the product store."""
    return SqlAlchemyProductRepository(db)


def _found_or_404(product: ProductLike | None, product_id: int) -> ProductLike:
    if product is None:
        raise ResourceNotFoundError(
            "Product", str(product_id), ErrorContext(product_id=product_id),
        )
    return product


@router.get(
    "/", response_model=list[ProductResponse],
    summary="Get a list of products",
    description="Return a list of products",
)
@router.get("", response_model=list[ProductResponse], include_in_schema=False)
async def get_products(
    repo: ProductRepository = Depends(get_product_repository),
):
    return await repo.list_all()


@router.get(
    "/{id}", response_model=ProductResponse,
    summary="Get a product by id",
    description="Return a product based on its unique ID",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    dependencies=[Depends(validate_request(PRODUCT_ID_RULES))],
)
async def get_product_by_id(
    id: int = Path(description="The ID of the product", examples=[1]),
    repo: ProductRepository = Depends(get_product_repository),
):
    return _found_or_404(await repo.get(id), id)


@router.post(
    "/", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    description="Return a new record in the database",
    responses=_BAD_REQUEST,
    openapi_extra=_request_body(ProductCreate),
)
@router.post(
    "", response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED, include_in_schema=False,
)
async def create_product(
    data: ValidatedRequest = Depends(validate_request(PRODUCT_CREATE_RULES)),
    repo: ProductRepository = Depends(get_product_repository),
):
    return await repo.create(
        name=data.body["name"], price=data.body["price"],
    )


@router.put(
    "/{id}", response_model=ProductResponse,
    summary="Update a product with user input",
    description="Return the updated product",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    openapi_extra=_request_body(ProductUpdate),
)
async def update_product(
    data: ValidatedRequest = Depends(validate_request(PRODUCT_UPDATE_RULES)),
    id: int = Path(description="The ID of the product", examples=[1]),
    repo: ProductRepository = Depends(get_product_repository),
):
    product = await repo.update(
        id,
        name=data.body["name"],
        price=data.body["price"],
        availability=data.body["availability"],
    )
    return _found_or_404(product, id)


@router.patch(
    "/{id}", response_model=ProductResponse,
    summary="Update product availability",
    description="Flip the availability flag and return the updated product",
    operation_id="updateProductAvailability",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    dependencies=[Depends(validate_request(PRODUCT_ID_RULES))],
)
async def update_availability(
    id: int = Path(description="The ID of the product", examples=[1]),
    repo: ProductRepository = Depends(get_product_repository),
):
    return _found_or_404(await repo.toggle_availability(id), id)


@router.delete(
    "/{id}", response_model=MessageResponse,
    summary="Delete a product by a given ID",
    description="Remove the product and return a confirmation message",
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    dependencies=[Depends(validate_request(PRODUCT_ID_RULES))],
)
async def delete_product(
    id: int = Path(description="The ID of the product", examples=[1]),
    repo: ProductRepository = Depends(get_product_repository),
):
    if not await repo.delete(id):
        raise ResourceNotFoundError(
            "Product", str(id), ErrorContext(product_id=id),
        )
    return {"message": "Product deleted"}
