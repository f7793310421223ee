"""Display fields for product responses.

Each derived field is a plain function of the product (and, for the age,
the current time).  ``project_product`` assembles them into a
``ProductProfileDTO``; it performs no I/O, so projecting the same product
twice with the same ``now`` yields equal profiles.
"""

from __future__ import annotations

import math
from datetime import datetime
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal
from typing import Optional

from django.utils import timezone

from modules.products.constants import (
    CLASSIC_DAYS,
    DAYS_PER_MONTH,
    DAYS_PER_YEAR,
    HOME_DISCOUNT_RATE,
    LIMITED_STOCK_THRESHOLD,
    NEW_RELEASE_DAYS,
    UNCATEGORIZED_LABEL,
    ProductCategory,
)
from modules.products.dtos import ProductProfileDTO
from modules.products.models import Product

CENTS = Decimal("0.01")


def category_display_name(category: str) -> str:
    if category in ProductCategory.values:
        return ProductCategory(category).label
    return UNCATEGORIZED_LABEL


def effective_price(category: str, price: Decimal) -> Decimal:
    """Price after category discounts, in cents as the store keeps it.

    Home gets 10% off.  Every result is rounded half-even to two decimals,
    the same rounding the ``DecimalField`` column applies on save.
    """
    if category == ProductCategory.HOME:
        price = price * HOME_DISCOUNT_RATE
    return price.quantize(CENTS, rounding=ROUND_HALF_EVEN)


def format_price(price: Decimal) -> str:
    return f"${Decimal(price).quantize(CENTS, rounding=ROUND_HALF_UP)}"


def visible_image_url(category: str, image_url: Optional[str]) -> Optional[str]:
    # Home products never expose an image.
    if category == ProductCategory.HOME:
        return None
    return image_url


def product_age(release_date: datetime, now: datetime) -> str:
    days = (now - release_date).total_seconds() / 86400
    if days < NEW_RELEASE_DAYS:
        return "New Release"
    if days < DAYS_PER_YEAR:
        return f"{math.floor(days / DAYS_PER_MONTH)} months old"
    if days < CLASSIC_DAYS:
        return f"{math.floor(days / DAYS_PER_YEAR)} years old"
    if days == CLASSIC_DAYS:
        return "Classic"
    return "Vintage"


def brand_initials(brand: Optional[str]) -> str:
    words = (brand or "").split()
    if not words:
        return "?"
    if len(words) == 1:
        return words[0][0].upper()
    return f"{words[0][0]}{words[-1][0]}".upper()


def availability_status(is_available: bool, stock_quantity: int) -> str:
    # The flag wins over the quantity.
    if not is_available:
        return "Out of Stock"
    if stock_quantity <= 0:
        return "Unavailable"
    if stock_quantity == 1:
        return "Last Item"
    if stock_quantity <= LIMITED_STOCK_THRESHOLD:
        return "Limited Stock"
    return "In Stock"


def project_product(product: Product, now: Optional[datetime] = None) -> ProductProfileDTO:
    """Build the response profile for a persisted product.

    ``product.price`` is already the effective price (see
    ``factories.build_product``), so no discount is applied here.
    """
    now = now or timezone.now()
    return ProductProfileDTO(
        id=product.id,
        name=product.name,
        brand=product.brand,
        sku=product.sku,
        category=product.category,
        price=product.price,
        created_at=product.created_at,
        updated_at=product.updated_at,
        release_date=product.release_date,
        image_url=visible_image_url(product.category, product.image_url),
        is_available=product.is_available,
        stock_quantity=product.stock_quantity,
        category_display_name=category_display_name(product.category),
        formatted_price=format_price(product.price),
        product_age=product_age(product.release_date, now),
        brand_initials=brand_initials(product.brand),
        availability_status=availability_status(
            product.is_available, product.stock_quantity
        ),
    )
