"""Builds ``Product`` entities from validated creation requests."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import uuid6
from django.utils import timezone

from modules.products.dtos import CreateProductDTO
from modules.products.models import Product
from modules.products.projection import effective_price


def build_product(dto: CreateProductDTO, now: Optional[datetime] = None) -> Product:
    """Construct an unsaved ``Product`` from a request that passed validation.

    Assigns a fresh UUIDv7, ``created_at = now``, ``updated_at = None`` and
    ``is_available = stock_quantity > 0``.  The stored price is the effective
    price, so the Home discount is applied exactly once, here.  Every other
    field is copied as-is.
    """
    return Product(
        id=uuid6.uuid7(),
        created_at=now or timezone.now(),
        updated_at=None,
        name=dto.name,
        brand=dto.brand,
        sku=dto.sku,
        category=dto.category,
        price=effective_price(dto.category, dto.price),
        release_date=dto.release_date,
        image_url=dto.image_url,
        is_available=dto.stock_quantity > 0,
        stock_quantity=dto.stock_quantity,
    )
