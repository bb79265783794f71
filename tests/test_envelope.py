"""
==============================================================================
Gateway Envelope Tests
==============================================================================
"""

import pytest

from product_catalog.core.exceptions import AppException, ErrorKind
from product_catalog.gateway import envelope
from product_catalog.schemas.product import ClientProductPayload


class TestFieldMapping:
    """Tests for backend/client field renames."""

    def test_to_client_renames_fields(self):
        record = {
            "id": 1,
            "name": "Widget",
            "country": "MX",
            "sku": "CT-MX-1",
            "created_at": "2024-01-01T00:00:00",
            "updated_at": "2024-01-02T00:00:00",
            "deleted_at": None,
        }

        assert envelope.to_client(record) == {
            "id": 1,
            "name": "Widget",
            "countryCode": "MX",
            "sku": "CT-MX-1",
            "createdAt": "2024-01-01T00:00:00",
            "updatedAt": "2024-01-02T00:00:00",
            "deletedAt": None,
        }

    def test_to_backend_renames_country_code(self):
        payload = ClientProductPayload(name=" Widget ", countryCode="mx")
        assert envelope.to_backend(payload) == {"name": "Widget", "country": "mx"}

    def test_to_client_list(self):
        records = [{"id": 1, "country": "MX"}, {"id": 2, "country": "US"}]
        assert envelope.to_client_list(records) == [
            {"id": 1, "countryCode": "MX"},
            {"id": 2, "countryCode": "US"},
        ]


class TestValidation:
    """Tests for the gateway's local body check."""

    @pytest.mark.parametrize("payload, missing", [
        ({}, ["name", "countryCode"]),
        ({"name": "Widget"}, ["countryCode"]),
        ({"countryCode": "MX"}, ["name"]),
        ({"name": "   ", "countryCode": "MX"}, ["name"]),
        ({"name": "Widget", "countryCode": ""}, ["countryCode"]),
    ])
    def test_missing_fields_raise_400(self, payload, missing):
        with pytest.raises(AppException) as exc_info:
            envelope.require_product_fields(ClientProductPayload(**payload))

        error = exc_info.value
        assert error.kind == ErrorKind.VALIDATION_ERROR
        assert error.status_code == 400
        assert error.details == {"missing_fields": missing}

    def test_complete_payload_passes(self):
        payload = ClientProductPayload(name="Widget", countryCode="MX")
        assert envelope.require_product_fields(payload) is payload


class TestEnvelopes:
    """Tests for success/failure shapes."""

    def test_success_and_message(self):
        assert envelope.success([]) == {"success": True, "data": []}
        assert envelope.message("done") == {"success": True, "message": "done"}

    def test_failure_envelope_omits_empty_details(self):
        error = AppException("boom", ErrorKind.INTERNAL_ERROR)
        assert error.to_dict() == {"success": False, "error": "boom"}

    def test_failure_envelope_with_details(self):
        error = AppException("nope", ErrorKind.CONFLICT, {"existing_product_id": 3})
        assert error.status_code == 409
        assert error.to_dict() == {
            "success": False,
            "error": "nope",
            "details": {"existing_product_id": 3},
        }

    @pytest.mark.parametrize("status, kind", [
        (400, ErrorKind.VALIDATION_ERROR),
        (403, ErrorKind.FORBIDDEN),
        (404, ErrorKind.NOT_FOUND),
        (409, ErrorKind.CONFLICT),
        (422, ErrorKind.VALIDATION_ERROR),
        (500, ErrorKind.INTERNAL_ERROR),
        (502, ErrorKind.INTERNAL_ERROR),
        (503, ErrorKind.SERVICE_UNAVAILABLE),
    ])
    def test_kind_from_status(self, status, kind):
        assert ErrorKind.from_status(status) == kind
