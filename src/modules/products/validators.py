"""Validation rules for product creation requests.

Each rule is an independent predicate paired with the field it reports on
and a user-facing message.  Rules are tagged by kind:

- ``FIELD``: looks at a single request field.
- ``CROSS_FIELD``: relates two or more request fields.
- ``STORE``: needs a read-only look-up through ``IProductRepository``.

A rule may carry a ``when`` guard (used for the category-conditional rules).
``ProductValidator.validate`` evaluates every applicable rule eagerly and
collects all violations, in rule order, instead of stopping at the first.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from datetime import timezone as dt_timezone
from enum import Enum
from typing import Callable, List, Optional, Tuple
from urllib.parse import urlsplit

import structlog
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone

from modules.products.constants import (
    BANNED_NAME_WORDS,
    BRAND_MAX_LENGTH,
    BRAND_MIN_LENGTH,
    BRAND_PATTERN,
    CLOTHING_BRAND_MIN_LENGTH,
    DEFAULT_DAILY_CREATION_LIMIT,
    DEFAULT_SKU_FORMAT,
    ELECTRONICS_MAX_AGE_YEARS,
    ELECTRONICS_MIN_PRICE,
    EXPENSIVE_PRICE_THRESHOLD,
    EXPENSIVE_STOCK_LIMIT,
    HIGH_VALUE_PRICE_THRESHOLD,
    HIGH_VALUE_STOCK_LIMIT,
    HOME_MAX_PRICE,
    HOME_RESTRICTED_WORDS,
    IMAGE_EXTENSIONS,
    IMAGE_SCHEMES,
    IMAGE_URL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_MAX,
    RELEASE_DATE_FLOOR,
    SKU_FORMATS,
    SKU_MAX_LENGTH,
    STOCK_MAX,
    TECHNOLOGY_KEYWORDS,
    ProductCategory,
)
from modules.products.dtos import CreateProductDTO
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

CROSS_FIELD = "cross_field"


class RuleKind(str, Enum):
    FIELD = "field"
    CROSS_FIELD = "cross_field"
    STORE = "store"


@dataclass(frozen=True)
class Violation:
    field: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    violations: Tuple[Violation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule predicate may look at."""

    dto: CreateProductDTO
    now: datetime
    repository: IProductRepository
    correlation_id: str = ""


@dataclass(frozen=True)
class Rule:
    field: str
    message: str
    check: Callable[[RuleContext], bool]
    kind: RuleKind = RuleKind.FIELD
    when: Optional[Callable[[CreateProductDTO], bool]] = None

    def applies_to(self, dto: CreateProductDTO) -> bool:
        return self.when is None or self.when(dto)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def contains_any(text: str, words: Tuple[str, ...]) -> bool:
    """Case-insensitive substring match against any of ``words``."""
    lowered = text.lower()
    return any(word.lower() in lowered for word in words)


def is_valid_image_url(url: str) -> bool:
    """Absolute http(s) URL whose path ends in an image extension."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return (
        parts.scheme.lower() in IMAGE_SCHEMES
        and bool(parts.netloc)
        and parts.path.lower().endswith(IMAGE_EXTENSIONS)
    )


def years_before(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return moment.replace(year=moment.year - years, day=28)


def resolve_sku_pattern(sku_format: str) -> re.Pattern[str]:
    """Compile the regex for a named SKU format policy.

    Raises:
        ImproperlyConfigured: ``sku_format`` is not a known policy.
    """
    try:
        return re.compile(SKU_FORMATS[sku_format])
    except KeyError:
        raise ImproperlyConfigured(
            f"Unknown SKU format {sku_format!r}; "
            f"expected one of {sorted(SKU_FORMATS)}."
        ) from None


def _is_category(category: ProductCategory) -> Callable[[CreateProductDTO], bool]:
    return lambda dto: dto.category == category


# ---------------------------------------------------------------------------
# Store-dependent predicates
# ---------------------------------------------------------------------------


def _name_unique_for_brand(ctx: RuleContext) -> bool:
    dto = ctx.dto
    if not dto.name or not dto.brand:
        return True
    exists = ctx.repository.exists_by_name_and_brand(
        dto.name, dto.brand, correlation_id=ctx.correlation_id
    )
    if exists:
        logger.warning(
            "product.duplicate_name",
            name=dto.name,
            brand=dto.brand,
            correlation_id=ctx.correlation_id,
        )
    return not exists


def _sku_unique(ctx: RuleContext) -> bool:
    if not ctx.dto.sku:
        return True
    exists = ctx.repository.exists_by_sku(
        ctx.dto.sku, correlation_id=ctx.correlation_id
    )
    if exists:
        logger.warning(
            "product.duplicate_sku",
            sku=ctx.dto.sku,
            correlation_id=ctx.correlation_id,
        )
    return not exists


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class ProductValidator:
    """Evaluates a ``CreateProductDTO`` against the product creation rules.

    ``sku_format`` and ``daily_limit`` default to ``settings.PRODUCTS``;
    ``clock`` defaults to ``django.utils.timezone.now``.
    """

    def __init__(
        self,
        repository: IProductRepository,
        sku_format: Optional[str] = None,
        daily_limit: Optional[int] = None,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        product_settings = getattr(settings, "PRODUCTS", {})
        self._repo = repository
        self._clock = clock
        self.sku_format = sku_format or product_settings.get(
            "SKU_FORMAT", DEFAULT_SKU_FORMAT
        )
        self._sku_pattern = resolve_sku_pattern(self.sku_format)
        self.daily_limit = (
            daily_limit
            if daily_limit is not None
            else product_settings.get("DAILY_CREATION_LIMIT", DEFAULT_DAILY_CREATION_LIMIT)
        )
        self.rules = self._build_rules()

    def validate(
        self,
        dto: CreateProductDTO,
        correlation_id: str = "",
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        ctx = RuleContext(
            dto=dto,
            now=now or self._clock(),
            repository=self._repo,
            correlation_id=correlation_id,
        )
        violations = [
            Violation(field=rule.field, message=rule.message)
            for rule in self.rules
            if rule.applies_to(dto) and not rule.check(ctx)
        ]
        if violations:
            logger.info(
                "product.validation_rules_failed",
                sku=dto.sku,
                violations=len(violations),
                correlation_id=correlation_id,
            )
        return ValidationResult(violations=tuple(violations))

    # ------------------------------------------------------------------
    # Rule set
    # ------------------------------------------------------------------

    def _daily_limit_not_reached(self, ctx: RuleContext) -> bool:
        count = self._repo.count_created_on(
            ctx.now.astimezone(dt_timezone.utc).date(),
            correlation_id=ctx.correlation_id,
        )
        if count >= self.daily_limit:
            logger.warning(
                "product.daily_limit_reached",
                count=count,
                limit=self.daily_limit,
                correlation_id=ctx.correlation_id,
            )
            return False
        return True

    def _build_rules(self) -> List[Rule]:
        sku_pattern = self._sku_pattern
        electronics = _is_category(ProductCategory.ELECTRONICS)
        home = _is_category(ProductCategory.HOME)
        clothing = _is_category(ProductCategory.CLOTHING)

        return [
            # Name
            Rule("name", "Product name cannot be empty.", lambda c: bool(c.dto.name)),
            Rule(
                "name",
                f"Product name must be between 1 and {NAME_MAX_LENGTH} characters.",
                lambda c: len(c.dto.name) <= NAME_MAX_LENGTH,
            ),
            Rule(
                "name",
                "Product name contains inappropriate content.",
                lambda c: not contains_any(c.dto.name, BANNED_NAME_WORDS),
            ),
            Rule(
                "name",
                "Product name already exists for this brand (duplicate).",
                _name_unique_for_brand,
                kind=RuleKind.STORE,
            ),
            # Brand
            Rule("brand", "Brand cannot be empty.", lambda c: bool(c.dto.brand)),
            Rule(
                "brand",
                f"Brand must be between {BRAND_MIN_LENGTH} and {BRAND_MAX_LENGTH} characters.",
                lambda c: not c.dto.brand
                or BRAND_MIN_LENGTH <= len(c.dto.brand) <= BRAND_MAX_LENGTH,
            ),
            Rule(
                "brand",
                "Brand name contains invalid characters.",
                lambda c: not c.dto.brand or re.fullmatch(BRAND_PATTERN, c.dto.brand) is not None,
            ),
            # SKU
            Rule("sku", "SKU cannot be empty.", lambda c: bool(c.dto.sku)),
            Rule(
                "sku",
                "Invalid SKU format.",
                lambda c: not c.dto.sku or sku_pattern.fullmatch(c.dto.sku) is not None,
            ),
            Rule(
                "sku",
                f"SKU must be at most {SKU_MAX_LENGTH} characters.",
                lambda c: len(c.dto.sku) <= SKU_MAX_LENGTH,
            ),
            Rule(
                "sku",
                "SKU already exists in the system.",
                _sku_unique,
                kind=RuleKind.STORE,
            ),
            # Category
            Rule(
                "category",
                "Invalid product category.",
                lambda c: c.dto.category in ProductCategory.values,
            ),
            # Price
            Rule("price", "Price must be greater than 0.", lambda c: c.dto.price > 0),
            Rule(
                "price",
                f"Price must be less than {PRICE_MAX}.",
                lambda c: c.dto.price < PRICE_MAX,
            ),
            # Release date
            Rule(
                "release_date",
                "Release date cannot be in the future.",
                lambda c: c.dto.release_date <= c.now,
            ),
            Rule(
                "release_date",
                "Release date must be after 1900.",
                lambda c: c.dto.release_date > RELEASE_DATE_FLOOR,
            ),
            # Stock
            Rule(
                "stock_quantity",
                f"Stock quantity must be between 0 and {STOCK_MAX}.",
                lambda c: 0 <= c.dto.stock_quantity <= STOCK_MAX,
            ),
            # Image URL (only when supplied)
            Rule(
                "image_url",
                "Invalid image URL format.",
                lambda c: is_valid_image_url(c.dto.image_url or ""),
                when=lambda dto: bool(dto.image_url),
            ),
            Rule(
                "image_url",
                f"Image URL must be at most {IMAGE_URL_MAX_LENGTH} characters.",
                lambda c: len(c.dto.image_url or "") <= IMAGE_URL_MAX_LENGTH,
            ),
            # Cross-field
            Rule(
                CROSS_FIELD,
                f"Products costing more than ${EXPENSIVE_PRICE_THRESHOLD} must not "
                f"exceed {EXPENSIVE_STOCK_LIMIT} units in stock.",
                lambda c: c.dto.price <= EXPENSIVE_PRICE_THRESHOLD
                or c.dto.stock_quantity <= EXPENSIVE_STOCK_LIMIT,
                kind=RuleKind.CROSS_FIELD,
            ),
            # Electronics
            Rule(
                "price",
                f"Electronics must have a minimum price of ${ELECTRONICS_MIN_PRICE}.",
                lambda c: c.dto.price >= ELECTRONICS_MIN_PRICE,
                when=electronics,
            ),
            Rule(
                "name",
                "Electronics product names must include technology-related words.",
                lambda c: contains_any(c.dto.name, TECHNOLOGY_KEYWORDS),
                when=electronics,
            ),
            Rule(
                "release_date",
                f"Electronics must be released within the last {ELECTRONICS_MAX_AGE_YEARS} years.",
                lambda c: c.dto.release_date > years_before(c.now, ELECTRONICS_MAX_AGE_YEARS),
                when=electronics,
            ),
            # Home
            Rule(
                "price",
                f"Home products must not exceed a price of ${HOME_MAX_PRICE}.",
                lambda c: c.dto.price <= HOME_MAX_PRICE,
                when=home,
            ),
            Rule(
                "name",
                "Home product name contains inappropriate or restricted terms.",
                lambda c: not contains_any(c.dto.name, HOME_RESTRICTED_WORDS),
                when=home,
            ),
            # Clothing
            Rule(
                "brand",
                f"Clothing brand names must be at least {CLOTHING_BRAND_MIN_LENGTH} characters long.",
                lambda c: len(c.dto.brand) >= CLOTHING_BRAND_MIN_LENGTH,
                when=clothing,
            ),
            # Global business rules
            Rule(
                CROSS_FIELD,
                "Daily limit reached.",
                self._daily_limit_not_reached,
                kind=RuleKind.STORE,
            ),
            Rule(
                CROSS_FIELD,
                f"High-value products (over ${HIGH_VALUE_PRICE_THRESHOLD}) cannot exceed "
                f"{HIGH_VALUE_STOCK_LIMIT} items in stock.",
                lambda c: c.dto.price <= HIGH_VALUE_PRICE_THRESHOLD
                or c.dto.stock_quantity <= HIGH_VALUE_STOCK_LIMIT,
                kind=RuleKind.CROSS_FIELD,
            ),
        ]
