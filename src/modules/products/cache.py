"""Cache invalidation for product listings.

``IProductCache`` is the only cache operation the creation pipeline needs;
``DjangoProductCache`` backs it with Django's cache framework (django-redis
in production, local memory in tests).
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import structlog
from django.core.cache import BaseCache, cache

logger = structlog.get_logger(__name__)


class IProductCache(ABC):
    @abstractmethod
    def invalidate(self, key: str, *, correlation_id: str = "") -> None:
        """Drop ``key``; a missing key is not an error."""


class DjangoProductCache(IProductCache):
    def __init__(self, backend: BaseCache | None = None) -> None:
        self._cache = backend or cache

    def invalidate(self, key: str, *, correlation_id: str = "") -> None:
        """Best-effort delete: backend errors are logged, never raised."""
        try:
            removed = self._cache.delete(key)
        except Exception:
            logger.exception(
                "product.cache_invalidation_failed",
                key=key,
                correlation_id=correlation_id,
            )
            return
        logger.info(
            "product.cache_invalidated",
            key=key,
            removed=bool(removed),
            correlation_id=correlation_id,
        )
