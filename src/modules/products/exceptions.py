"""Product domain exceptions.

Raised by the Service Layer when product creation cannot complete.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from modules.products.validators import Violation


class ProductValidationFailed(Exception):
    """The creation request broke one or more validation rules.

    ``violations`` keeps every failed rule in evaluation order so the
    caller can correct all of them in one go.
    """

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations = tuple(violations)
        super().__init__(
            "; ".join(f"{v.field}: {v.message}" for v in self.violations)
        )


class DuplicateSku(Exception):
    """A product with the same SKU already exists."""


class ProductPersistenceFailure(Exception):
    """The store could not persist the product."""
