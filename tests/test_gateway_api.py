"""
==============================================================================
Gateway API Tests
==============================================================================

End-to-end tests of the gateway. The ``gateway`` client reaches the real
catalog backend in-process; ``make_gateway_client`` scripts failures.

==============================================================================
"""

import httpx
import pytest
from fastapi.testclient import TestClient


def create(gateway: TestClient, name: str = "Widget", country_code: str = "mx"):
    return gateway.post("/api/products", json={"name": name, "countryCode": country_code})


class TestGatewayProducts:
    """Product operations through the gateway and the catalog backend."""

    def test_create_maps_fields(self, gateway: TestClient):
        response = create(gateway, "Widget", "mx")

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        data = body["data"]
        assert data["name"] == "Widget"
        assert data["countryCode"] == "MX"
        assert data["sku"] == "CT-MX-1"
        assert data["deletedAt"] is None
        assert "createdAt" in data and "updatedAt" in data
        assert "country" not in data and "created_at" not in data

    def test_list_products(self, gateway: TestClient):
        create(gateway, "Widget", "mx")
        create(gateway, "Gadget", "us")

        response = gateway.get("/api/products")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert [p["sku"] for p in body["data"]] == ["CT-MX-1", "CT-US-2"]

    def test_list_empty(self, gateway: TestClient):
        response = gateway.get("/api/products")
        assert response.json() == {"success": True, "data": []}

    def test_get_product(self, gateway: TestClient):
        created = create(gateway).json()["data"]

        response = gateway.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["countryCode"] == "MX"

    def test_get_unknown_product(self, gateway: TestClient):
        response = gateway.get("/api/products/404")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Product not found"}

    def test_update_product(self, gateway: TestClient):
        created = create(gateway).json()["data"]

        response = gateway.put(
            f"/api/products/{created['id']}",
            json={"name": "Widget", "countryCode": "ca"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["countryCode"] == "CA"
        assert data["sku"] == f"CT-CA-{created['id']}"

    def test_update_conflict_is_relayed(self, gateway: TestClient):
        existing = create(gateway, "Widget", "mx").json()["data"]
        other = create(gateway, "Gadget", "mx").json()["data"]

        response = gateway.put(
            f"/api/products/{other['id']}",
            json={"name": "Widget", "countryCode": "MX"},
        )

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "A product with the same name and country already exists."
        assert body["details"]["upstream_details"]["existing_product_id"] == existing["id"]

    def test_delete_then_recreate_conflicts(self, gateway: TestClient):
        created = create(gateway).json()["data"]

        deleted = gateway.delete(f"/api/products/{created['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "message": "Product deleted successfully"}

        response = create(gateway)

        assert response.status_code == 409
        assert response.json()["success"] is False

    def test_update_deleted_product_forbidden(self, gateway: TestClient):
        created = create(gateway).json()["data"]
        gateway.delete(f"/api/products/{created['id']}")

        response = gateway.put(
            f"/api/products/{created['id']}",
            json={"name": "Widget Pro", "countryCode": "MX"},
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Product is deleted. It can only be restored."

    def test_restore_product(self, gateway: TestClient):
        created = create(gateway).json()["data"]
        gateway.delete(f"/api/products/{created['id']}")

        response = gateway.patch(f"/api/products/{created['id']}/restore")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Product restored"}
        assert gateway.get(f"/api/products/{created['id']}").json()["data"]["deletedAt"] is None

    def test_delete_unknown_product(self, gateway: TestClient):
        response = gateway.delete("/api/products/77")

        assert response.status_code == 404
        assert response.json()["error"] == "Product ID does not exist"


class TestGatewayValidation:
    """Local checks that never reach the backend."""

    def test_missing_country_code_is_400(self, make_gateway_client, scripted_backend):
        backend = scripted_backend(lambda request: httpx.Response(500))
        gateway = make_gateway_client(httpx.MockTransport(backend))

        response = gateway.post("/api/products", json={"name": "Widget"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Fields 'name' and 'countryCode' are required"
        assert body["details"] == {"missing_fields": ["countryCode"]}
        assert backend.calls == []

    def test_blank_name_on_update_is_400(self, make_gateway_client, scripted_backend):
        backend = scripted_backend(lambda request: httpx.Response(500))
        gateway = make_gateway_client(httpx.MockTransport(backend))

        response = gateway.put("/api/products/1", json={"name": "  ", "countryCode": "MX"})

        assert response.status_code == 400
        assert backend.calls == []

    def test_non_integer_id_is_400(self, make_gateway_client, scripted_backend):
        backend = scripted_backend(lambda request: httpx.Response(500))
        gateway = make_gateway_client(httpx.MockTransport(backend))

        response = gateway.get("/api/products/abc")

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert backend.calls == []


class TestGatewayResilience:
    """Backend failures as seen by gateway clients."""

    def test_backend_down(self, make_gateway_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        gateway = make_gateway_client(httpx.MockTransport(handler))

        response = gateway.get("/api/products")

        assert response.status_code == 503
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Backend service is unavailable"
        assert body["details"]["service"] == "catalog-service"
        assert body["details"]["status"] == "unavailable"

    def test_timeout(self, make_gateway_client, scripted_backend):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        gateway = make_gateway_client(
            httpx.MockTransport(scripted_backend(handler)), request_timeout_ms=100
        )

        response = gateway.post("/api/products", json={"name": "Widget", "countryCode": "MX"})

        assert response.status_code == 504
        body = response.json()
        assert body["error"] == "Request timed out while creating product"
        assert body["details"]["status"] == "timeout"
        assert body["details"]["timeout_ms"] == 100

    def test_refused_after_healthy_probe(self, make_gateway_client, scripted_backend):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        gateway = make_gateway_client(httpx.MockTransport(scripted_backend(handler)))

        response = gateway.delete("/api/products/1")

        assert response.status_code == 503
        assert response.json()["details"]["status"] == "connection_refused"


    @pytest.mark.parametrize("backend_response", [
        httpx.Response(200),
        httpx.Response(200, json={"products": []}),
        httpx.Response(200, json="not a list"),
    ])
    def test_list_with_malformed_backend_body(self, make_gateway_client, scripted_backend, backend_response):
        gateway = make_gateway_client(
            httpx.MockTransport(scripted_backend(lambda request: backend_response))
        )

        response = gateway.get("/api/products")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Unexpected product list from backend service",
        }


class TestGatewayHealth:
    """Tests for the gateway health endpoint."""

    def test_healthy(self, gateway: TestClient):
        response = gateway.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "components": {"gateway": "healthy", "catalog-service": "healthy"},
        }

    def test_degraded(self, make_gateway_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        gateway = make_gateway_client(httpx.MockTransport(handler))

        response = gateway.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["components"]["catalog-service"] == "unavailable"
