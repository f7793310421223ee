"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``CreateProductDTO``: input for product creation.
- ``ProductProfileDTO``: output with the stored product fields plus the
  display-only fields computed by ``projection.project_product``.

The input DTO only coerces types and normalises whitespace/timezones;
business rules (lengths, ranges, category rules) live in ``validators.py``
so every violation can be reported at once.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.products.constants import DEFAULT_STOCK_QUANTITY

# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Normalises:
    - surrounding whitespace on ``name``, ``brand``, ``sku`` and ``category``.
    - ``release_date`` to an aware UTC datetime (naive values are UTC).
    - an empty ``image_url`` to ``None``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    brand: str
    sku: str
    category: str
    price: Decimal
    release_date: datetime
    image_url: Optional[str] = None
    stock_quantity: int = DEFAULT_STOCK_QUANTITY

    @field_validator("name", "brand", "sku", "category")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator("release_date")
    @classmethod
    def release_date_as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("image_url")
    @classmethod
    def blank_image_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductProfileDTO(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    brand: str
    sku: str
    category: str
    price: Decimal
    created_at: datetime
    updated_at: Optional[datetime] = None
    release_date: datetime
    image_url: Optional[str] = None
    is_available: bool
    stock_quantity: int

    # Display-only fields
    category_display_name: str
    formatted_price: str
    product_age: str
    brand_initials: str
    availability_status: str
