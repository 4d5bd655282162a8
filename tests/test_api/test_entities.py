"""
Tests for the entity API endpoints.

Tests cover:
- Creating records
- Listing with search, filters, sorting and pagination
- Getting individual records
- Updating and deleting records
- CSV export/import/template
- Unknown namespaces and health checks
"""

import json
import pytest
from fastapi.testclient import TestClient
from typing import Dict, Any

from services.registry import ServiceRegistry
from tests.conftest import assert_datetime_format


def create_record(client: TestClient, namespace: str, data: Dict[str, Any], user: str = None) -> Dict[str, Any]:
    headers = {"X-User-Id": user} if user else {}
    response = client.post(f"/entities/{namespace}/", json=data, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestEntityCreation:
    """Tests for creating records (POST /entities/{namespace}/)."""

    def test_create_category(self, client: TestClient):
        """Test creating a category."""
        response = client.post(
            "/entities/categories/",
            json={"name": "Natural Stone", "code": "NS"},
            headers={"X-User-Id": "user-1"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == body["data"]["id"]
        assert body["data"]["name"] == "Natural Stone"
        assert body["data"]["created_by"] == "user-1"
        assert body["data"]["is_deleted"] is False
        assert assert_datetime_format(body["data"]["created_at"])

    def test_create_category_invalid(self, client: TestClient):
        """Test creating a category without code returns 422."""
        response = client.post("/entities/categories/", json={"name": "Natural Stone"})

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert "code" in detail["errors"]

    def test_create_delivery_order(self, client: TestClient, delivery_order_data: Dict[str, Any]):
        """Test creating a delivery order fills its defaults."""
        record = create_record(client, "delivery-orders", delivery_order_data)

        assert record["status"] == "draft"
        assert record["delivery_order_number"].startswith("DO/")
        assert record["total_quantity"] == 9.0

    def test_create_unknown_namespace(self, client: TestClient):
        """Test posting to an unknown namespace returns 404."""
        response = client.post("/entities/unicorns/", json={"name": "x"})

        assert response.status_code == 404
        assert response.json()["error"] == "NotFoundException"

    def test_create_price_list_without_items(self, client: TestClient):
        """Test creating a price list without items returns 422."""
        response = client.post(
            "/entities/price-lists/",
            json={"name": "Retail 2024", "effective_from": "2024-01-01", "items": []}
        )

        assert response.status_code == 422
        assert "items" in response.json()["detail"]["errors"]


class TestEntityListing:
    """Tests for listing records (GET /entities/{namespace}/)."""

    @pytest.fixture
    def warehouses(self, client: TestClient):
        return [
            create_record(client, "warehouses", {"name": "Main", "code": "WH1", "capacity": 5}),
            create_record(client, "warehouses", {"name": "North", "code": "WH2", "capacity": 1}),
            create_record(client, "warehouses", {"name": "South", "code": "WH3", "capacity": 1}),
        ]

    def test_list_warehouses(self, client: TestClient, warehouses):
        """Test listing warehouses with default pagination."""
        response = client.get("/entities/warehouses/")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total"] == 3
        assert body["page"] == 1
        assert body["page_size"] == 25
        assert body["pagination"]["total_pages"] == 1

    def test_list_warehouses_sorted(self, client: TestClient, warehouses):
        """Test listing warehouses sorted by capacity."""
        response = client.get("/entities/warehouses/", params={"sort_by": "capacity", "sort_dir": "asc"})

        assert [item["name"] for item in response.json()["data"]] == ["North", "South", "Main"]

    def test_list_warehouses_json_filter(self, client: TestClient, warehouses):
        """Test listing warehouses with a JSON between filter."""
        filters = json.dumps({"capacity": {"operator": "between", "min": 2, "max": 10}})
        response = client.get("/entities/warehouses/", params={"filters": filters})

        assert [item["name"] for item in response.json()["data"]] == ["Main"]

    def test_search_warehouses(self, client: TestClient, warehouses):
        """Test searching warehouses by code."""
        response = client.get("/entities/warehouses/", params={"q": "wh2"})
        assert response.json()["total"] == 1

    def test_list_warehouses_second_page(self, client: TestClient, warehouses):
        """Test the second page of warehouses."""
        response = client.get("/entities/warehouses/", params={"page": 2, "page_size": 2})
        body = response.json()

        assert len(body["data"]) == 1
        assert body["total"] == 3
        assert body["pagination"]["has_previous"] is True
        assert body["pagination"]["has_next"] is False

    def test_list_warehouses_page_size_capped(self, client: TestClient, warehouses):
        """Test an oversized page size is capped."""
        response = client.get("/entities/warehouses/", params={"page_size": 1000})
        assert response.json()["page_size"] == 100

    def test_list_warehouses_invalid_json_filter(self, client: TestClient):
        """Test malformed JSON filters return 422."""
        response = client.get("/entities/warehouses/", params={"filters": "{not json"})
        assert response.status_code == 422

    def test_list_warehouses_non_object_filter(self, client: TestClient):
        """Test non-object filters return 422."""
        response = client.get("/entities/warehouses/", params={"filters": "[1, 2]"})
        assert response.status_code == 422

    def test_list_warehouses_invalid_sort_dir(self, client: TestClient):
        """Test an unknown sort direction returns 422."""
        response = client.get("/entities/warehouses/", params={"sort_dir": "sideways"})
        assert response.status_code == 422


class TestEntityRetrieval:
    """Tests for getting a record (GET /entities/{namespace}/{id})."""

    def test_get_vendor(self, client: TestClient):
        """Test getting a vendor by id."""
        record = create_record(client, "vendors", {"name": "PT Vendor", "code": "V1", "city": "Jakarta"})
        response = client.get(f"/entities/vendors/{record['id']}")

        assert response.status_code == 200
        assert response.json()["city"] == "Jakarta"

    def test_get_vendor_not_found(self, client: TestClient):
        """Test getting an unknown vendor returns 404."""
        response = client.get("/entities/vendors/missing")
        assert response.status_code == 404


class TestEntityUpdate:
    """Tests for updating records (PATCH /entities/{namespace}/{id})."""

    def test_update_department(self, client: TestClient):
        """Test updating a department."""
        record = create_record(client, "departments", {"name": "Sales", "code": "S"}, user="u1")
        response = client.patch(
            f"/entities/departments/{record['id']}",
            json={"name": "Sales & Marketing"},
            headers={"X-User-Id": "u2"}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Sales & Marketing"
        assert data["code"] == "S"
        assert data["created_by"] == "u1"
        assert data["updated_by"] == "u2"

    def test_update_department_not_found(self, client: TestClient):
        """Test updating an unknown department returns 404."""
        response = client.patch("/entities/departments/missing", json={"name": "x"})
        assert response.status_code == 404

    def test_update_category_invalid(self, client: TestClient):
        """Test blanking a category code returns 422."""
        record = create_record(client, "categories", {"name": "Natural Stone", "code": "NS"})
        response = client.patch(f"/entities/categories/{record['id']}", json={"code": ""})

        assert response.status_code == 422


class TestEntityDeletion:
    """Tests for soft deleting records (DELETE /entities/{namespace}/{id})."""

    def test_delete_project(self, client: TestClient, registry: ServiceRegistry):
        """Test deleting a project keeps a tombstone."""
        record = create_record(client, "projects", {"name": "Tower A", "code": "TA"})
        response = client.delete(f"/entities/projects/{record['id']}", headers={"X-User-Id": "u3"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert client.get(f"/entities/projects/{record['id']}").status_code == 404
        assert client.get("/entities/projects/").json()["total"] == 0

        stored = registry.get("projects").repository.load("projects")
        assert stored[0]["is_deleted"] is True

    def test_delete_project_twice(self, client: TestClient):
        """Test deleting a project twice returns 404."""
        record = create_record(client, "projects", {"name": "Tower A", "code": "TA"})
        client.delete(f"/entities/projects/{record['id']}")

        assert client.delete(f"/entities/projects/{record['id']}").status_code == 404


class TestEntityCsv:
    """Tests for CSV endpoints."""

    def test_export_sizes(self, client: TestClient):
        """Test exporting sizes as CSV."""
        create_record(client, "sizes", {"name": "60x60", "code": "S60"})
        response = client.get("/entities/sizes/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.startswith("name,code,id")

    def test_sizes_template(self, client: TestClient):
        """Test the sizes CSV template."""
        response = client.get("/entities/sizes/template")

        assert response.status_code == 200
        assert response.text == "name,description,status,code\n"

    def test_import_categories(self, client: TestClient):
        """Test importing categories from CSV."""
        response = client.post(
            "/entities/categories/import",
            content="name,code\nGranite,GRN\nNo Code,\n",
            headers={"Content-Type": "text/csv", "X-User-Id": "importer"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["imported"] == 1
        assert body["errors"][0].startswith("Row 2:")
        listed = client.get("/entities/categories/").json()["data"]
        assert [item["created_by"] for item in listed] == ["importer"]


class TestRootAndHealth:
    """Tests for root and health endpoints."""

    def test_root(self, client: TestClient):
        """Test the root endpoint lists namespaces."""
        response = client.get("/")

        assert response.status_code == 200
        assert "delivery-orders" in response.json()["namespaces"]

    def test_health(self, client: TestClient):
        """Test the health check endpoint."""
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "connected"
        assert body["timestamp"].endswith("+07:00")
