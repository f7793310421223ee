"""Product model for the catalog.

Storage rules:
- ``id`` is a UUIDv7 assigned by ``factories.build_product`` and never changes.
- ``created_at`` is assigned at construction; ``updated_at`` stays ``NULL``
  until a product is updated (no update path exists yet).
- ``price`` holds the effective (post-discount) price.
- ``is_available`` is derived from stock at construction and never re-derived.
- ``sku`` is indexed but not unique: uniqueness is checked by ``ProductService``
  before insert.
"""

from __future__ import annotations

import uuid6
from django.db import models

from modules.products.constants import (
    BRAND_MAX_LENGTH,
    DEFAULT_STOCK_QUANTITY,
    IMAGE_URL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    SKU_MAX_LENGTH,
    ProductCategory,
)


class Product(models.Model):
    """Catalog product (aggregate root)."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid6.uuid7,
        editable=False,
    )
    created_at = models.DateTimeField()
    updated_at = models.DateTimeField(null=True, blank=True, default=None)

    name = models.CharField(max_length=NAME_MAX_LENGTH)
    brand = models.CharField(max_length=BRAND_MAX_LENGTH)
    sku = models.CharField(max_length=SKU_MAX_LENGTH, db_index=True)
    category = models.CharField(max_length=20, choices=ProductCategory.choices)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    release_date = models.DateTimeField()
    image_url = models.URLField(max_length=IMAGE_URL_MAX_LENGTH, null=True, blank=True, default=None)
    is_available = models.BooleanField(default=True)
    stock_quantity = models.PositiveIntegerField(default=DEFAULT_STOCK_QUANTITY)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name", "brand"], name="products_name_brand_idx"),
            models.Index(fields=["created_at"], name="products_created_at_idx"),
        ]

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.sku} - {self.name}"
