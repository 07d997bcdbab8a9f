"""Product Schemas - Pydantic models describing the public API contract.

Invariants:
    - ProductResponse exposes id, name, price, availability only (timestamps stay internal)
    - ProductCreate / ProductUpdate document request bodies in OpenAPI; request
      validation itself runs through core/validation_rules.py

Design Decisions:
    - from_attributes=True: handlers return ORM rows, response_model serializes them
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from products_api.core.validation_rules import NAME_MAX_LENGTH


class ProductCreate(BaseModel):
    """Body of POST /api/products."""
    name: str = Field(
        min_length=1, max_length=NAME_MAX_LENGTH,
        examples=["Curved monitor 24 inches"],
    )
    price: float = Field(gt=0, examples=[300])


class ProductUpdate(ProductCreate):
    """Body of PUT /api/products/{id} - every field required."""
    availability: bool = Field(examples=[True])


class ProductResponse(BaseModel):
    """Product as returned by every read and write endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="The Product ID", examples=[1])
    name: str = Field(
        description="The Product name", examples=["Curved monitor 24 inches"],
    )
    price: float = Field(description="The product price", examples=[300])
    availability: bool = Field(
        description="The product availability", examples=[True],
    )


class MessageResponse(BaseModel):
    message: str = Field(examples=["Product deleted"])


class FieldErrorDetail(BaseModel):
    type: str = "field"
    value: Any = None
    msg: str
    param: str
    location: str


class ValidationErrorResponse(BaseModel):
    """400 body - one entry per failed check."""
    errors: list[FieldErrorDetail]
