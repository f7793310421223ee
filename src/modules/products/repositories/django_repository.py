"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups return plain booleans/counts; the Service Layer decides what a
hit means.  Database errors raised on insert are wrapped in
``ProductPersistenceFailure`` with the original exception chained.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import structlog
from django.db import DatabaseError, transaction

from modules.products.exceptions import ProductPersistenceFailure
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def exists_by_sku(self, sku: str, *, correlation_id: str = "") -> bool:
        return Product.objects.filter(sku=sku).exists()

    def exists_by_name_and_brand(
        self, name: str, brand: str, *, correlation_id: str = ""
    ) -> bool:
        return Product.objects.filter(name=name, brand=brand).exists()

    def count_created_on(self, day: date, *, correlation_id: str = "") -> int:
        """Count products created within ``day`` (UTC midnight to midnight).

        Uses an explicit range instead of ``created_at__date`` so the result
        does not depend on the active Django time zone.
        """
        start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        end = start + timedelta(days=1)
        return Product.objects.filter(
            created_at__gte=start, created_at__lt=end
        ).count()

    def insert(self, product: Product, *, correlation_id: str = "") -> Product:
        """Insert a new product row (``INSERT`` only, never ``UPDATE``)."""
        log = logger.bind(correlation_id=correlation_id, sku=product.sku)
        try:
            with transaction.atomic():
                product.save(force_insert=True)
        except DatabaseError as exc:
            log.error("product.insert_failed", error=str(exc))
            raise ProductPersistenceFailure(
                f"Could not persist product with SKU '{product.sku}'."
            ) from exc

        log.info("product.saved", product_id=str(product.id))
        return product
