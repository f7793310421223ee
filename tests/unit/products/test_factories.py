"""Unit tests for build_product (entity construction)."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

import pytest

from modules.products.dtos import CreateProductDTO
from modules.products.factories import build_product
from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestBuildProduct:
    def test_assigns_identity_and_timestamps(self, create_payload, fixed_now):
        product = build_product(CreateProductDTO(**create_payload()), now=fixed_now)

        assert isinstance(product.id, UUID)
        assert product.id.version == 7
        assert product.created_at == fixed_now
        assert product.updated_at is None

    def test_copies_request_fields(self, create_payload, fixed_now):
        dto = CreateProductDTO(**create_payload())
        product = build_product(dto, now=fixed_now)

        assert product.name == dto.name
        assert product.brand == dto.brand
        assert product.sku == dto.sku
        assert product.category == dto.category
        assert product.price == dto.price
        assert product.release_date == dto.release_date
        assert product.image_url == dto.image_url
        assert product.stock_quantity == dto.stock_quantity

    def test_each_call_gets_a_new_id(self, create_payload, fixed_now):
        dto = CreateProductDTO(**create_payload())
        assert build_product(dto, now=fixed_now).id != build_product(dto, now=fixed_now).id

    @pytest.mark.parametrize("stock, available", [(0, False), (1, True), (40, True)])
    def test_availability_follows_stock(self, create_payload, fixed_now, stock, available):
        dto = CreateProductDTO(**create_payload(stock_quantity=stock))
        assert build_product(dto, now=fixed_now).is_available is available

    def test_home_price_is_stored_discounted(self, create_payload, fixed_now):
        dto = CreateProductDTO(
            **create_payload(category="Home", name="Oak Table", price=Decimal("149.99"))
        )
        product = build_product(dto, now=fixed_now)

        assert product.price == Decimal("134.99")
        # Image is stored; only the profile hides it.
        assert product.image_url == dto.image_url

    def test_does_not_touch_the_database(self, create_payload, fixed_now):
        build_product(CreateProductDTO(**create_payload()), now=fixed_now)
        assert Product.objects.count() == 0
