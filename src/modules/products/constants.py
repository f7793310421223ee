"""Product domain constants.

Category choices, display names and the word lists and limits used by the
creation rules in ``validators.py`` and the display fields in
``projection.py``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from django.db import models


class ProductCategory(models.TextChoices):
    ELECTRONICS = "Electronics", "Electronics & Technology"
    CLOTHING = "Clothing", "Clothing & Fashion"
    BOOKS = "Books", "Books & Media"
    HOME = "Home", "Home & Garden"


UNCATEGORIZED_LABEL = "Uncategorized"

# ---------------------------------------------------------------------------
# SKU format policies
# ---------------------------------------------------------------------------

SKU_FORMATS: dict[str, str] = {
    "alphanumeric": r"^[A-Za-z0-9-]{5,20}$",
    "numeric": r"^[0-9]+$",
}

DEFAULT_SKU_FORMAT = "alphanumeric"

# ---------------------------------------------------------------------------
# Field limits
# ---------------------------------------------------------------------------

NAME_MAX_LENGTH = 200
BRAND_MIN_LENGTH = 2
BRAND_MAX_LENGTH = 100
BRAND_PATTERN = r"^[A-Za-z0-9\s\-\.'’]+$"
SKU_MAX_LENGTH = 64

PRICE_MAX = Decimal("10000")
STOCK_MAX = 100_000
DEFAULT_STOCK_QUANTITY = 1

RELEASE_DATE_FLOOR = datetime(1900, 1, 1, tzinfo=timezone.utc)

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
IMAGE_SCHEMES = ("http", "https")
IMAGE_URL_MAX_LENGTH = 2048

# ---------------------------------------------------------------------------
# Word lists (case-insensitive substring matches)
# ---------------------------------------------------------------------------

BANNED_NAME_WORDS = ("fake", "test", "invalid")
TECHNOLOGY_KEYWORDS = ("tech", "smart", "digital", "AI", "gadget", "electronic", "device")
HOME_RESTRICTED_WORDS = ("weapon", "explosive", "restricted", "dangerous")

# ---------------------------------------------------------------------------
# Business rules
# ---------------------------------------------------------------------------

EXPENSIVE_PRICE_THRESHOLD = Decimal("100")
EXPENSIVE_STOCK_LIMIT = 20

HIGH_VALUE_PRICE_THRESHOLD = Decimal("500")
HIGH_VALUE_STOCK_LIMIT = 10

ELECTRONICS_MIN_PRICE = Decimal("50")
ELECTRONICS_MAX_AGE_YEARS = 5

HOME_MAX_PRICE = Decimal("200")
HOME_DISCOUNT_RATE = Decimal("0.9")

CLOTHING_BRAND_MIN_LENGTH = 3

DEFAULT_DAILY_CREATION_LIMIT = 500
DEFAULT_CACHE_KEY = "all_products"

# ---------------------------------------------------------------------------
# Display thresholds (in days)
# ---------------------------------------------------------------------------

NEW_RELEASE_DAYS = 30
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
CLASSIC_DAYS = 1825

LIMITED_STOCK_THRESHOLD = 5
