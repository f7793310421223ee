"""Product service layer (Use Cases).

Orchestrates product creation, delegating persistence to the injected
``IProductRepository``, cache invalidation to ``IProductCache`` and
metrics to ``IMetricsSink``.

Creation sequence:
1. Assign an operation id (log/metric correlation only).
2. Validation phase: SKU existence check, then the validation rules.
3. Build the entity.
4. Insert it.
5. Invalidate the "all products" cache entry.
6. Project the persisted entity into a ``ProductProfileDTO``.
7. Emit a metrics record with per-phase durations.

The sequence is not wrapped in a transaction: a completed insert is kept
even if a later step fails.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

import structlog
from django.conf import settings
from django.utils import timezone

from modules.products.constants import DEFAULT_CACHE_KEY
from modules.products.exceptions import (
    DuplicateSku,
    ProductPersistenceFailure,
    ProductValidationFailed,
)
from modules.products.factories import build_product
from modules.products.metrics import ProductCreationMetrics, Stopwatch
from modules.products.projection import project_product

if TYPE_CHECKING:
    from modules.products.cache import IProductCache
    from modules.products.dtos import CreateProductDTO, ProductProfileDTO
    from modules.products.metrics import IMetricsSink
    from modules.products.repositories.interfaces import IProductRepository
    from modules.products.validators import ProductValidator

logger = structlog.get_logger(__name__)


def new_operation_id() -> str:
    return uuid.uuid4().hex[:8]


class ProductService:
    """Application service for the product creation use-case.

    Collaborators are injected through the constructor (DIP).  ``validator``
    is optional so the SKU guard and the rule set can run independently.
    """

    def __init__(
        self,
        repository: IProductRepository,
        cache: IProductCache,
        metrics: IMetricsSink,
        validator: Optional[ProductValidator] = None,
        cache_key: Optional[str] = None,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        self._repo = repository
        self._cache = cache
        self._metrics = metrics
        self._validator = validator
        self._cache_key = cache_key or getattr(settings, "PRODUCTS", {}).get(
            "CACHE_KEY", DEFAULT_CACHE_KEY
        )
        self._clock = clock

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_product(
        self, dto: CreateProductDTO, correlation_id: str = ""
    ) -> ProductProfileDTO:
        """Validate, persist and project a new product.

        Raises:
            DuplicateSku: a product with ``dto.sku`` already exists.
            ProductValidationFailed: one or more validation rules failed.
            ProductPersistenceFailure: the store rejected the insert.
        """
        operation_id = new_operation_id()
        now = self._clock()
        total_watch = Stopwatch()
        log = logger.bind(
            operation_id=operation_id,
            correlation_id=correlation_id,
            sku=dto.sku,
        )
        log.info(
            "product.creation_started",
            name=dto.name,
            brand=dto.brand,
            category=dto.category,
        )

        def emit(success: bool, validation_ms: float, db_ms: float, reason: Optional[str] = None) -> None:
            self._metrics.record(
                ProductCreationMetrics(
                    operation_id=operation_id,
                    product_name=dto.name,
                    sku=dto.sku,
                    category=dto.category,
                    validation_duration_ms=validation_ms,
                    db_duration_ms=db_ms,
                    total_duration_ms=total_watch.stop(),
                    success=success,
                    error_reason=reason,
                    correlation_id=correlation_id,
                )
            )

        # Validation phase
        validation_watch = Stopwatch()
        log.info("product.sku_validation_performed")
        if self._repo.exists_by_sku(dto.sku, correlation_id=correlation_id):
            log.error("product.duplicate_sku")
            emit(False, validation_watch.stop(), 0.0, "Duplicate SKU")
            raise DuplicateSku(f"Product with SKU '{dto.sku}' already exists.")

        if self._validator is not None:
            result = self._validator.validate(
                dto, correlation_id=correlation_id, now=now
            )
            if not result.is_valid:
                log.warning(
                    "product.validation_failed",
                    violations=[f"{v.field}: {v.message}" for v in result.violations],
                )
                emit(False, validation_watch.stop(), 0.0, "Validation failed")
                raise ProductValidationFailed(result.violations)
        validation_ms = validation_watch.stop()

        # Persistence, cache and projection phases
        db_watch: Optional[Stopwatch] = None
        try:
            product = build_product(dto, now=now)

            log.info("product.database_operation_started")
            db_watch = Stopwatch()
            product = self._repo.insert(product, correlation_id=correlation_id)
            db_watch.stop()
            log.info(
                "product.database_operation_completed",
                product_id=str(product.id),
            )

            self._cache.invalidate(self._cache_key, correlation_id=correlation_id)

            profile = project_product(product, now=now)
        except ProductPersistenceFailure as exc:
            log.error("product.creation_failed", error=str(exc))
            emit(False, validation_ms, db_watch.stop() if db_watch else 0.0, str(exc))
            raise
        except Exception as exc:
            log.exception("product.creation_failed", error=repr(exc))
            emit(False, validation_ms, db_watch.stop() if db_watch else 0.0, repr(exc))
            raise

        emit(True, validation_ms, db_watch.stop())
        log.info(
            "product.creation_completed",
            product_id=str(product.id),
            name=product.name,
        )
        return profile
