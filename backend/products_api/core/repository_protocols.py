"""Boundary Protocols - contract between product handlers and the store.

Invariants:
    - Handlers depend on ProductRepository, never on the ORM session directly
    - Mutating methods return None (or False) when the product does not exist;
      the caller decides how absence is surfaced
    - Implementations commit per mutating call - no cross-request transactions

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests inject a plain fake
    - Async in Protocol: implementations do IO; handlers await at this boundary only
"""

from typing import Protocol


class ProductLike(Protocol):
    """Structural contract for Product rows returned by the store."""
    id: int
    name: str
    price: float
    availability: bool


class ProductRepository(Protocol):
    """Contract for product persistence - implemented by infrastructure."""
    async def list_all(self) -> list[ProductLike]: ...
    async def get(self, product_id: int) -> ProductLike | None: ...
    async def create(self, name: str, price: float) -> ProductLike: ...
    async def update(
        self, product_id: int, name: str, price: float, availability: bool,
    ) -> ProductLike | None: ...
    async def toggle_availability(self, product_id: int) -> ProductLike | None: ...
    async def delete(self, product_id: int) -> bool: ...
