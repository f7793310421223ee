"""Product API views.

Exposes ``ProductService.create_product`` via HTTP using a DRF ViewSet.
Domain exceptions are caught and translated into appropriate HTTP status
codes; anything unexpected propagates to Django's 500 handling after the
service has logged it.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List

import structlog
from drf_spectacular.utils import extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.cache import DjangoProductCache
from modules.products.dtos import CreateProductDTO, ProductProfileDTO
from modules.products.exceptions import (
    DuplicateSku,
    ProductPersistenceFailure,
    ProductValidationFailed,
)
from modules.products.metrics import StructlogMetricsSink
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.products.validators import ProductValidator

logger = structlog.get_logger(__name__)

CREATE_FIELDS = (
    "name",
    "brand",
    "sku",
    "category",
    "price",
    "release_date",
    "image_url",
    "stock_quantity",
)


def _pydantic_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "non_field_errors",
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


class ProductViewSet(GenericViewSet):
    """ViewSet for product creation.

    Wires ``ProductService`` with the Django ORM repository, the Django
    cache and the structlog metrics sink (DIP).
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        repository = ProductDjangoRepository()
        self._service = ProductService(
            repository=repository,
            cache=DjangoProductCache(),
            metrics=StructlogMetricsSink(),
            validator=ProductValidator(repository=repository),
        )

    @extend_schema(request=CreateProductDTO, responses={201: ProductProfileDTO})
    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        if not isinstance(request.data, Mapping):
            return Response(
                {
                    "detail": "Invalid product payload.",
                    "errors": [
                        {"field": "non_field_errors", "message": "Expected a JSON object."}
                    ],
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        data: Dict[str, Any] = {
            field: request.data[field] for field in CREATE_FIELDS if field in request.data
        }

        try:
            dto = CreateProductDTO(**data)
        except PydanticValidationError as exc:
            return Response(
                {"detail": "Invalid product payload.", "errors": _pydantic_errors(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )

        correlation_id = getattr(request, "correlation_id", "")

        try:
            profile = self._service.create_product(dto, correlation_id=correlation_id)
        except ProductValidationFailed as exc:
            return Response(
                {
                    "detail": "Product validation failed.",
                    "errors": [
                        {"field": v.field, "message": v.message}
                        for v in exc.violations
                    ],
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        except DuplicateSku as exc:
            return Response(
                {"detail": str(exc)},
                status=status.HTTP_409_CONFLICT,
            )
        except ProductPersistenceFailure:
            logger.error(
                "product.create_request_failed",
                sku=dto.sku,
                correlation_id=correlation_id,
            )
            return Response(
                {"detail": "The product could not be saved."},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            profile.model_dump(mode="json"),
            status=status.HTTP_201_CREATED,
            headers={"Location": f"/api/v1/products/{profile.id}/"},
        )
