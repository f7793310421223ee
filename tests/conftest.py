from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from rest_framework.test import APIClient

FIXED_NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Keep the local-memory cache from leaking between tests."""
    from django.core.cache import cache

    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def fixed_now():
    """A frozen 'now' for clock-dependent rules and display fields."""
    return FIXED_NOW


@pytest.fixture()
def create_payload():
    """Factory for valid CreateProductDTO keyword arguments (Books by default)."""

    def _make(now=FIXED_NOW, **overrides):
        data = {
            "name": "The Pragmatic Programmer",
            "brand": "Addison Wesley",
            "sku": "BOOK-00001",
            "category": "Books",
            "price": Decimal("39.99"),
            "release_date": now - timedelta(days=400),
            "image_url": "https://cdn.example.com/covers/pragmatic.jpg",
            "stock_quantity": 12,
        }
        data.update(overrides)
        return data

    return _make
