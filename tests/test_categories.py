"""Tests for the category endpoints."""

import asyncio

from fastapi.testclient import TestClient


def category_names(client: TestClient):
    return [c["name"] for c in client.get("/api/categories").json()]


class TestListCategories:
    """Tests for GET /api/categories."""

    def test_ordered_by_position(self, client: TestClient, create_product) -> None:
        create_product(name="Cola", category="Drinks")
        create_product(name="Crisps", category="Snacks")
        create_product(name="Apple", category="Fruit")

        response = client.get("/api/categories")
        assert response.status_code == 200
        categories = response.json()
        assert [(c["name"], c["position"]) for c in categories] == [
            ("Drinks", 0),
            ("Snacks", 1),
            ("Fruit", 2),
        ]


class TestReorderCategories:
    """Tests for PUT /api/categories/order."""

    def test_reorder(self, client: TestClient, create_product) -> None:
        for category in ("Drinks", "Snacks", "Fruit"):
            create_product(category=category)

        response = client.put(
            "/api/categories/order", json={"orderedCategories": ["Fruit", "Drinks", "Snacks"]}
        )
        assert response.status_code == 200
        assert response.json()["data"]["matched"] == 3
        assert category_names(client) == ["Fruit", "Drinks", "Snacks"]

    def test_unknown_names_are_skipped(self, client: TestClient, create_product) -> None:
        create_product(category="Drinks")
        create_product(category="Snacks")

        response = client.put(
            "/api/categories/order", json={"orderedCategories": ["Ghost", "Snacks", "Drinks"]}
        )
        assert response.status_code == 200
        assert response.json()["data"] == {"matched": 2, "requested": 3}

        positions = {c["name"]: c["position"] for c in client.get("/api/categories").json()}
        assert positions == {"Snacks": 1, "Drinks": 2}

    def test_missing_list(self, client: TestClient) -> None:
        response = client.put("/api/categories/order", json={})
        assert response.status_code == 400


class TestRenameCategory:
    """Tests for PUT /api/categories/{name}."""

    def test_rename_cascades_to_products(self, client: TestClient, create_product) -> None:
        create_product(name="Crisps", category="Snacks")
        create_product(name="Nuts", category="Snacks")
        create_product(name="Cola", category="Drinks")

        response = client.put("/api/categories/Snacks", json={"newName": "Savoury"})
        assert response.status_code == 200
        assert response.json() == {"previous_name": "Snacks", "name": "Savoury", "products_updated": 2}

        products = client.get("/api/products").json()
        assert sorted((p["name"], p["category"]) for p in products) == [
            ("Cola", "Drinks"),
            ("Crisps", "Savoury"),
            ("Nuts", "Savoury"),
        ]
        categories = client.get("/api/categories").json()
        assert [(c["name"], c["position"], c["product_count"]) for c in categories] == [
            ("Savoury", 0, 2),
            ("Drinks", 1, 1),
        ]

    def test_conflict_mutates_nothing(self, client: TestClient, db, create_product) -> None:
        create_product(name="Crisps", category="Snacks")
        create_product(name="Cola", category="Drinks")

        response = client.put("/api/categories/Snacks", json={"newName": "Drinks"})
        assert response.status_code == 409
        assert "already exists" in response.json()["message"]

        assert sorted(category_names(client)) == ["Drinks", "Snacks"]
        assert asyncio.run(db.products.count_documents({"category": "Snacks"})) == 1
        assert asyncio.run(db.products.count_documents({"category": "Drinks"})) == 1

    def test_missing_new_name(self, client: TestClient, create_product) -> None:
        create_product(category="Snacks")
        response = client.put("/api/categories/Snacks", json={})
        assert response.status_code == 400

    def test_blank_new_name(self, client: TestClient, create_product) -> None:
        create_product(category="Snacks")
        response = client.put("/api/categories/Snacks", json={"newName": "   "})
        assert response.status_code == 400

    def test_unknown_category(self, client: TestClient) -> None:
        response = client.put("/api/categories/Ghost", json={"newName": "Spirit"})
        assert response.status_code == 404

    def test_name_with_spaces(self, client: TestClient, create_product) -> None:
        create_product(category="Hot Drinks")
        response = client.put("/api/categories/Hot%20Drinks", json={"newName": "Coffee & Tea"})
        assert response.status_code == 200
        assert category_names(client) == ["Coffee & Tea"]


class TestDeleteCategory:
    """Tests for DELETE /api/categories/{name}."""

    def test_delete_removes_products(self, client: TestClient, create_product) -> None:
        create_product(name="Crisps", category="Snacks")
        create_product(name="Nuts", category="Snacks")
        create_product(name="Cola", category="Drinks")

        response = client.delete("/api/categories/Snacks")
        assert response.status_code == 200
        assert response.json()["data"] == {"name": "Snacks", "products_deleted": 2}

        assert [p["name"] for p in client.get("/api/products").json()] == ["Cola"]
        assert category_names(client) == ["Drinks"]

    def test_delete_missing(self, client: TestClient) -> None:
        response = client.delete("/api/categories/Ghost")
        assert response.status_code == 404


class TestNamesWithSlashes:
    """Category names may contain '/' since products accept any name."""

    def test_rename(self, client: TestClient, create_product) -> None:
        create_product(category="Food/Drinks")
        response = client.put("/api/categories/Food%2FDrinks", json={"newName": "Beverages"})
        assert response.status_code == 200, response.text
        assert category_names(client) == ["Beverages"]
        assert client.get("/api/products").json()[0]["category"] == "Beverages"

    def test_delete(self, client: TestClient, create_product) -> None:
        create_product(category="Food/Drinks")
        response = client.delete("/api/categories/Food/Drinks")
        assert response.status_code == 200, response.text
        assert response.json()["data"]["name"] == "Food/Drinks"
        assert client.get("/api/products").json() == []

    def test_reorder_route_still_wins(self, client: TestClient, create_product) -> None:
        create_product(category="Snacks")
        response = client.put("/api/categories/order", json={"orderedCategories": ["Snacks"]})
        assert response.status_code == 200
        assert response.json()["data"]["matched"] == 1
