"""Product repository interface (Dependency Inversion Principle).

The creation pipeline only needs the look-ups behind its uniqueness and
daily-cap rules plus a single insert.  Service-layer code depends on this
abstraction, never on Django ORM directly.

Every method takes a keyword ``correlation_id`` so store calls can be tied
back to the request that issued them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(ABC):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def exists_by_sku(self, sku: str, *, correlation_id: str = "") -> bool:
        """Return ``True`` if any product uses ``sku``."""

    @abstractmethod
    def exists_by_name_and_brand(
        self, name: str, brand: str, *, correlation_id: str = ""
    ) -> bool:
        """Return ``True`` if a product with this exact name and brand exists."""

    @abstractmethod
    def count_created_on(self, day: date, *, correlation_id: str = "") -> int:
        """Count products whose ``created_at`` falls on ``day`` (UTC)."""

    @abstractmethod
    def insert(self, product: Product, *, correlation_id: str = "") -> Product:
        """Persist a new product.

        Raises:
            ProductPersistenceFailure: the write did not complete.
        """
