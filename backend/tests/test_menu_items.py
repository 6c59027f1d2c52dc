"""
Tests for the menu item endpoints.
"""
import pytest

from app.core.constants import LimitsConstants
from app.db.crud_menu_items import menu_item
from app.db.models import MenuItemModel


def test_menu_and_item_lifecycle(client):
    """Create a menu, add an item with defaults, delete it twice."""
    menu = client.post(
        "/api/menus",
        json={"restaurantId": 1, "name": "Dinner", "templateId": "modern"},
    )
    assert menu.status_code == 201
    menu_id = menu.json()["menu"]["id"]
    assert isinstance(menu_id, int)

    created = client.post("/api/menuItems", json={"menuId": menu_id, "name": "Soup"})
    assert created.status_code == 201
    item = created.json()["item"]
    assert item["price"] == 0
    assert item["category"] == ""
    assert item["description"] == ""
    assert item["menu_id"] == menu_id

    deleted = client.delete("/api/menuItems", params={"itemId": item["id"]})
    assert deleted.json() == {"success": True}

    again = client.delete("/api/menuItems", params={"itemId": item["id"]})
    assert again.status_code == 404
    assert again.json() == {"error": "Item not found"}


def test_create_item_with_all_fields(client, menu_id):
    response = client.post(
        "/api/menuItems",
        json={
            "menuId": menu_id,
            "name": "Steak Frites",
            "description": "Hanger steak, hand-cut fries",
            "price": 24.5,
            "category": "Mains",
        },
    )

    assert response.status_code == 201
    item = response.json()["item"]
    assert item["description"] == "Hanger steak, hand-cut fries"
    assert item["price"] == 24.5
    assert item["category"] == "Mains"


def test_blank_price_defaults_to_zero(client, menu_id):
    response = client.post("/api/menuItems", json={"menuId": menu_id, "name": "Water", "price": ""})

    assert response.status_code == 201
    assert response.json()["item"]["price"] == 0


def test_non_numeric_price_returns_400(client, menu_id):
    response = client.post("/api/menuItems", json={"menuId": menu_id, "name": "Water", "price": "free"})
    assert response.status_code == 400


def test_upsert_with_id_updates_item(client, menu_id):
    item = client.post(
        "/api/menuItems",
        json={"menuId": menu_id, "name": "Soup", "price": 6, "category": "Starters"},
    ).json()["item"]

    body = {"id": item["id"], "menuId": menu_id, "name": "Soup of the Day", "price": 7.25, "category": "Starters"}
    first = client.post("/api/menuItems", json=body)
    second = client.post("/api/menuItems", json=body)

    assert first.status_code == 200
    assert second.status_code == 200
    updated = second.json()["item"]
    assert updated["id"] == item["id"]
    assert updated["name"] == "Soup of the Day"
    assert updated["price"] == 7.25

    items = client.get("/api/menuItems", params={"menuId": menu_id}).json()["menuItems"]
    assert len(items) == 1


def test_update_keeps_owning_menu(client, restaurant_id, menu_id):
    other = client.post(
        "/api/menus",
        json={"restaurantId": restaurant_id, "name": "Lunch", "templateId": "classic"},
    ).json()["menu"]
    item = client.post("/api/menuItems", json={"menuId": menu_id, "name": "Soup"}).json()["item"]

    response = client.post(
        "/api/menuItems",
        json={"id": item["id"], "menuId": other["id"], "name": "Soup"},
    )

    assert response.status_code == 200
    assert response.json()["item"]["menu_id"] == menu_id


def test_update_unknown_item_returns_404(client, menu_id):
    response = client.post("/api/menuItems", json={"id": 777, "menuId": menu_id, "name": "Ghost"})

    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}


@pytest.mark.parametrize("body", [{"name": "Soup"}, {"menuId": 1}, {"menuId": 1, "name": ""}])
def test_upsert_missing_required_fields_returns_400(client, body):
    response = client.post("/api/menuItems", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: menuId, name"}


def test_list_items_requires_menu_id(client, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("database should not be queried")

    monkeypatch.setattr(menu_item, "get_by_menu", fail)

    response = client.get("/api/menuItems")

    assert response.status_code == 400
    assert response.json() == {"error": "Missing menuId parameter"}


def test_list_items_of_empty_menu(client, menu_id):
    response = client.get("/api/menuItems", params={"menuId": menu_id})

    assert response.status_code == 200
    assert response.json() == {"menuItems": []}


def test_list_items_in_insertion_order(client, menu_id):
    for name in ["Bread", "Soup", "Tart"]:
        client.post("/api/menuItems", json={"menuId": menu_id, "name": name})

    items = client.get("/api/menuItems", params={"menuId": menu_id}).json()["menuItems"]

    assert [i["name"] for i in items] == ["Bread", "Soup", "Tart"]


def test_delete_item_requires_item_id(client, monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("database should not be queried")

    monkeypatch.setattr(menu_item, "remove", fail)

    response = client.delete("/api/menuItems")
    assert response.status_code == 400


def test_database_error_surfaces_as_500(client, menu_id, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(menu_item, "get_by_menu", broken)

    response = client.get("/api/menuItems", params={"menuId": menu_id})

    assert response.status_code == 500
    assert response.json() == {"error": "connection reset"}


@pytest.mark.parametrize("price", ["NaN", "inf", "-inf", -1, "100000000"])
def test_out_of_range_price_returns_400(client, db_session, menu_id, price):
    """Prices must be finite, non-negative and fit NUMERIC(10, 2)."""
    response = client.post("/api/menuItems", json={"menuId": menu_id, "name": "Soup", "price": price})

    assert response.status_code == 400
    assert "price" in response.json()["error"]
    assert db_session.query(MenuItemModel).count() == 0
    assert client.get("/api/menuItems", params={"menuId": menu_id}).json() == {"menuItems": []}


def test_price_is_rounded_to_cents(client, menu_id):
    created = client.post("/api/menuItems", json={"menuId": menu_id, "name": "Soup", "price": 12.345})
    assert created.json()["item"]["price"] == 12.35

    item_id = created.json()["item"]["id"]
    updated = client.post(
        "/api/menuItems",
        json={"id": item_id, "menuId": menu_id, "name": "Soup", "price": "7.004"},
    )
    assert updated.json()["item"]["price"] == 7.0


@pytest.mark.parametrize("field,limit", [
    ("name", LimitsConstants.NAME_MAX_LENGTH),
    ("category", LimitsConstants.CATEGORY_MAX_LENGTH),
])
def test_over_long_text_returns_400(client, db_session, menu_id, field, limit):
    body = {"menuId": menu_id, "name": "Soup", field: "x" * (limit + 1)}

    response = client.post("/api/menuItems", json=body)

    assert response.status_code == 400
    assert field in response.json()["error"]
    assert db_session.query(MenuItemModel).count() == 0

    body[field] = "x" * limit
    assert client.post("/api/menuItems", json=body).status_code == 201


def test_zero_ids_are_looked_up_not_rejected(client):
    """An id of 0 is present, it just matches nothing."""
    assert client.get("/api/menuItems", params={"menuId": 0}).json() == {"menuItems": []}

    response = client.delete("/api/menuItems", params={"itemId": 0})
    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}
