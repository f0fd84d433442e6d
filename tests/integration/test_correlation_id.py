import logging
import uuid

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_api_responses_carry_request_id(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        response = client.get("/api/crackers")
        assert response.status_code == 200
        assert response["X-Request-ID"] == cid

    def test_error_responses_carry_request_id(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        response = client.get("/api/orders/not-a-uuid")
        assert response.status_code == 400
        assert response["X-Request-ID"] == cid

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_asset_delete_failure_logged_with_request_id(
        self, api_client, fake_asset_store, png_bytes, caplog
    ):
        created = api_client.post(
            "/api/crackers",
            {
                "englishName": "Chakkar Big",
                "tamilName": "சக்கரம் பெரியது",
                "originalRate": "300",
                "discountRate": "150",
                "category": "Ground Chakkars",
                "image": SimpleUploadedFile("chakkar.png", png_bytes, "image/png"),
            },
            format="multipart",
        ).json()
        fake_asset_store.fail_destroy = True

        with caplog.at_level(logging.INFO):
            response = api_client.delete(
                f"/api/crackers/{created['id']}", HTTP_X_REQUEST_ID="cid-delete-789"
            )

        assert response.status_code == 200
        failures = [
            record.getMessage()
            for record in caplog.records
            if "cracker.asset_delete_failed" in record.getMessage()
        ]
        assert failures
        assert "cid-delete-789" in failures[0]
