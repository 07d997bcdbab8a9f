"""Product ORM - the single persisted entity.

Invariants:
    - id is an autoincrement integer primary key, assigned by the store, never reused
    - price > 0 (CHECK constraint backs the request-level rule)
    - availability defaults to true on insert
    - name length bounded by NAME_MAX_LENGTH (request rule rejects longer names first)
    - id fits a 32-bit signed INTEGER on every backend (ID_MIN..ID_MAX)
    - updated_at refreshed on every UPDATE

Design Decisions:
    - Float for price: JSON numbers round-trip without Decimal-to-string serialization
    - Timestamps kept for bookkeeping but excluded from API responses
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from products_api.core.validation_rules import NAME_MAX_LENGTH
from products_api.db.base import Base

ID_MIN = -(2 ** 31)
ID_MAX = 2 ** 31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Product(Base):
    """Product row - name, price and availability flag."""
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_positive"),
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    availability: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
