import logging
import uuid

import pytest


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_falls_back_to_correlation_id_header(self, client):
        response = client.get("/health", HTTP_X_CORRELATION_ID="upstream-cid-77")
        assert response["X-Request-ID"] == "upstream-cid-77"

    def test_request_id_wins_over_correlation_id(self, client):
        response = client.get(
            "/health",
            HTTP_X_REQUEST_ID="req-id",
            HTTP_X_CORRELATION_ID="corr-id",
        )
        assert response["X-Request-ID"] == "req-id"

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )


class TestSensitiveDataMasking:
    @pytest.mark.parametrize(
        "value, secret",
        [
            ("password='s3cret123'", "s3cret123"),
            ("token=abc123xyz", "abc123xyz"),
            ("secret: hunter2", "hunter2"),
            ("Authorization=Bearer.eyJhbGciOi", "Bearer.eyJhbGciOi"),
        ],
    )
    def test_sensitive_values_masked(self, value, secret):
        from config.settings import mask_sensitive_data

        result = mask_sensitive_data(None, None, {"event": "test", "data": value})
        assert secret not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_product_fields_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {
            "event": "product.creation_started",
            "sku": "BOOK-00001",
            "name": "The Pragmatic Programmer",
            "stock_quantity": 12,
        }
        result = mask_sensitive_data(None, None, event_dict)
        assert result["sku"] == "BOOK-00001"
        assert result["name"] == "The Pragmatic Programmer"
        assert result["stock_quantity"] == 12
        assert result["event"] == "product.creation_started"
