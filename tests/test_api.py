"""
==============================================================================
Catalog Backend API Tests
==============================================================================

Tests for the catalog backend REST endpoints.

==============================================================================
"""

import pytest
from fastapi.testclient import TestClient


def create(client: TestClient, name: str = "Widget", country: str = "MX"):
    return client.post("/api/products", json={"name": name, "country": country})


class TestHealthEndpoints:
    """Tests for the liveness probe."""

    def test_health_check(self, client: TestClient):
        response = client.get("/api/health-check")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestProductEndpoints:
    """Tests for product lifecycle endpoints."""

    def test_create_product(self, client: TestClient):
        response = create(client, "Widget", "mx")

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Widget"
        assert data["country"] == "MX"
        assert data["sku"] == "CT-MX-1"
        assert data["deleted_at"] is None
        assert "created_at" in data and "updated_at" in data

    def test_create_duplicate_returns_409(self, client: TestClient):
        create(client)

        response = create(client)

        assert response.status_code == 409
        body = response.json()
        assert body["success"] is False
        assert "already exists" in body["error"]

    def test_create_validation_error(self, client: TestClient):
        response = client.post("/api/products", json={"name": "Widget"})

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["details"]["errors"][0]["field"] == "country"

    @pytest.mark.parametrize("country", ["m ", " m", "  m  "])
    def test_create_rejects_one_letter_country_padded_with_spaces(self, client: TestClient, country):
        response = create(client, "Widget", country)

        assert response.status_code == 422
        assert response.json()["details"]["errors"][0]["field"] == "country"
        assert client.get("/api/products").json() == []

    def test_update_rejects_one_letter_country(self, client: TestClient):
        created = create(client).json()

        response = client.put(
            f"/api/products/{created['id']}",
            json={"name": "Widget", "country": " c "},
        )

        assert response.status_code == 422
        assert client.get(f"/api/products/{created['id']}").json()["country"] == "MX"

    def test_padded_country_is_trimmed(self, client: TestClient):
        response = create(client, "Widget", " us ")

        assert response.status_code == 201
        assert response.json()["country"] == "US"
        assert response.json()["sku"] == "CT-US-1"

    def test_list_includes_deleted(self, client: TestClient):
        first = create(client, "Widget", "MX").json()
        create(client, "Gadget", "US")
        client.delete(f"/api/products/{first['id']}")

        response = client.get("/api/products")

        assert response.status_code == 200
        products = response.json()
        assert len(products) == 2
        assert products[0]["deleted_at"] is not None
        assert products[1]["deleted_at"] is None

    def test_get_product(self, client: TestClient):
        created = create(client).json()

        response = client.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["sku"] == "CT-MX-1"

    def test_get_unknown_product(self, client: TestClient):
        response = client.get("/api/products/123")

        assert response.status_code == 404
        assert response.json()["error"] == "Product ID does not exist"

    def test_update_product(self, client: TestClient):
        created = create(client).json()

        response = client.put(
            f"/api/products/{created['id']}",
            json={"name": "Widget", "country": "ca"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["country"] == "CA"
        assert data["sku"] == f"CT-CA-{created['id']}"

    def test_update_conflict_reports_existing_id(self, client: TestClient):
        existing = create(client, "Widget", "MX").json()
        other = create(client, "Gadget", "MX").json()

        response = client.put(
            f"/api/products/{other['id']}",
            json={"name": "Widget", "country": "MX"},
        )

        assert response.status_code == 409
        details = response.json()["details"]
        assert details["existing_product_id"] == existing["id"]
        assert details["conflict_fields"] == {"name": "Widget", "country": "MX"}

    def test_update_deleted_product_forbidden(self, client: TestClient):
        created = create(client).json()
        client.delete(f"/api/products/{created['id']}")

        response = client.put(
            f"/api/products/{created['id']}",
            json={"name": "Widget Pro", "country": "MX"},
        )

        assert response.status_code == 403
        assert "only be restored" in response.json()["error"]

    def test_delete_and_restore(self, client: TestClient):
        created = create(client).json()

        deleted = client.delete(f"/api/products/{created['id']}")
        assert deleted.status_code == 200
        assert deleted.json() == {"message": "Product deleted successfully"}

        again = client.delete(f"/api/products/{created['id']}")
        assert again.status_code == 403

        restored = client.patch(f"/api/products/{created['id']}/restore")
        assert restored.status_code == 200
        assert restored.json() == {"message": "Product restored"}

        assert client.get(f"/api/products/{created['id']}").json()["deleted_at"] is None

    def test_restore_unknown_product(self, client: TestClient):
        response = client.patch("/api/products/9/restore")
        assert response.status_code == 404

    def test_recreate_after_delete_conflicts(self, client: TestClient):
        created = create(client).json()
        client.delete(f"/api/products/{created['id']}")

        response = create(client)

        assert response.status_code == 409
