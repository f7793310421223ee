"""Product creation metrics.

One ``ProductCreationMetrics`` record is emitted per creation attempt,
successful or not.  The default sink writes it as a single structlog event
(``product.creation_metrics``) so it lands in the JSON log stream next to
the request's other lines.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProductCreationMetrics:
    operation_id: str
    product_name: str
    sku: str
    category: str
    validation_duration_ms: float
    db_duration_ms: float
    total_duration_ms: float
    success: bool
    error_reason: Optional[str] = None
    correlation_id: str = ""


class IMetricsSink(ABC):
    @abstractmethod
    def record(self, metrics: ProductCreationMetrics) -> None:
        """Accept a metrics record (write-only)."""


class StructlogMetricsSink(IMetricsSink):
    def record(self, metrics: ProductCreationMetrics) -> None:
        fields = asdict(metrics)
        fields["error_reason"] = metrics.error_reason or "None"
        if metrics.success:
            logger.info("product.creation_metrics", **fields)
        else:
            logger.warning("product.creation_metrics", **fields)


class Stopwatch:
    """Monotonic timer reporting elapsed milliseconds.

    ``elapsed_ms`` keeps counting until ``stop`` is called; afterwards it is
    frozen at the stop time.
    """

    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._end: Optional[float] = None

    def stop(self) -> float:
        if self._end is None:
            self._end = time.perf_counter()
        return self.elapsed_ms

    @property
    def elapsed_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000, 3)
