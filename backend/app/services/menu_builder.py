"""
Menu builder client.

Holds the editable form state of the menu creator (selected restaurant,
selected menu, item list, template) and talks to the HTTP API to hydrate
and persist it. Local edits are buffered and only written on save, except
that removing an already persisted item deletes it immediately.
"""
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from app.core.constants import MenuConstants
from app.core.logging import get_logger

logger = get_logger("services.menu_builder")

EDITABLE_ITEM_FIELDS = ("name", "description", "price", "category")


class BuilderState(str, Enum):
    """Where the builder is in the select/edit flow."""

    NO_RESTAURANT = "no_restaurant"
    NO_MENU = "no_menu"
    EDITING_MENU = "editing_menu"
    DRAFTING_MENU = "drafting_menu"


class MenuBuilderError(Exception):
    """A call to the menu API failed or the builder is in the wrong state."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _blank_item() -> Dict[str, Any]:
    return {"name": "", "description": "", "price": "", "category": ""}


def _local_item(row: Dict[str, Any]) -> Dict[str, Any]:
    """Keep the editable subset of an item row plus its id."""
    item = {"id": row["id"]}
    item.update({field: row.get(field) for field in EDITABLE_ITEM_FIELDS})
    return item


class MenuBuilder:
    """
    Client-side state machine for building one restaurant's menus.

    Args:
        client: An httpx client whose base URL points at the API
    """

    def __init__(self, client: httpx.Client):
        self.client = client
        self.state = BuilderState.NO_RESTAURANT
        self.restaurant_id: Optional[int] = None
        self.saved_menus: List[Dict[str, Any]] = []
        self._reset_menu()

    def _reset_menu(self) -> None:
        self.menu_id: Optional[int] = None
        self.menu_name = ""
        self.template_id = MenuConstants.DEFAULT_TEMPLATE
        self.items: List[Dict[str, Any]] = []
        self.is_dirty = False

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise MenuBuilderError(str(e)) from e

        if response.is_error:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            logger.error(f"{method} {url} -> {response.status_code}: {message}")
            raise MenuBuilderError(message, response.status_code)

        return response.json()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def list_restaurants(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/restaurants")["restaurants"]

    def select_restaurant(self, restaurant_id: int) -> None:
        """Switch restaurant, loading its menus and dropping menu/item state."""
        data = self._request("GET", "/api/menus", params={"restaurantId": restaurant_id})
        self.restaurant_id = restaurant_id
        self.saved_menus = data["menus"]
        self._reset_menu()
        self.state = BuilderState.NO_MENU

    def select_menu(self, menu_id: Optional[int]) -> None:
        """Load an existing menu into the buffer, or start a new one if ``menu_id`` is None."""
        if menu_id is None:
            self.new_menu()
            return
        self._require_restaurant()

        menu = next((m for m in self.saved_menus if m["id"] == menu_id), None)
        if menu is None:
            menu = self._request("GET", f"/api/menus/{menu_id}")["menu"]
            if menu.get("restaurant_id") != self.restaurant_id:
                raise MenuBuilderError(
                    f"Menu {menu_id} does not belong to restaurant {self.restaurant_id}"
                )
        data = self._request("GET", "/api/menuItems", params={"menuId": menu_id})

        self.menu_id = menu_id
        self.menu_name = menu.get("name") or ""
        self.template_id = menu.get("template_id") or MenuConstants.DEFAULT_TEMPLATE
        self.items = [_local_item(row) for row in data["menuItems"]]
        self.is_dirty = False
        self.state = BuilderState.EDITING_MENU

    def new_menu(self) -> None:
        self._require_restaurant()
        self._reset_menu()
        self.state = BuilderState.DRAFTING_MENU

    # ------------------------------------------------------------------
    # Local edits
    # ------------------------------------------------------------------

    def rename(self, name: str) -> None:
        self._require_menu()
        self.menu_name = name
        self.is_dirty = True

    def set_template(self, template_id: str) -> None:
        self._require_menu()
        if not MenuConstants.is_valid_template(template_id):
            raise ValueError(f"Unknown template: {template_id}")
        self.template_id = template_id
        self.is_dirty = True

    def add_item(self, **fields: Any) -> Dict[str, Any]:
        """Append an unsaved item, optionally prefilled."""
        self._require_menu()
        item = _blank_item()
        for field, value in fields.items():
            self._check_field(field)
            item[field] = value
        self.items.append(item)
        self.is_dirty = True
        return item

    def update_item(self, index: int, field: str, value: Any) -> None:
        self._require_menu()
        self._check_field(field)
        self.items[index] = {**self.items[index], field: value}
        self.is_dirty = True

    def remove_item(self, index: int) -> None:
        """Drop an item; persisted items are deleted on the server right away."""
        self._require_menu()
        item = self.items[index]
        if item.get("id"):
            self._request("DELETE", "/api/menuItems", params={"itemId": item["id"]})
        del self.items[index]
        self.is_dirty = True

    def enhance_item_description(self, index: int, brand_voice: Optional[str] = None) -> str:
        """Ask the API to rewrite an item's description and store the result locally."""
        self._require_menu()
        item = self.items[index]
        data = self._request(
            "POST",
            "/api/ai/enhanceDescription",
            json={
                "name": item.get("name") or "",
                "oldDescription": item.get("description") or "",
                "brandVoice": brand_voice,
            },
        )
        self.update_item(index, "description", data["newDescription"])
        return data["newDescription"]

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, atomic: bool = False) -> Dict[str, Any]:
        """
        Persist the menu and its items.

        By default the menu is upserted first and then each item in order,
        one request at a time; a failure part way leaves earlier items saved.
        With ``atomic`` everything goes through one transactional request.

        Returns:
            The saved menu row
        """
        self._require_menu()
        body = {
            "id": self.menu_id,
            "restaurantId": self.restaurant_id,
            "name": self.menu_name,
            "templateId": self.template_id,
        }

        if atomic:
            body["items"] = self.items
            data = self._request("POST", "/api/menus/save", json=body)
            menu = data["menu"]
            self._remember_menu(menu)
            self.items = [_local_item(row) for row in data["menuItems"]]
        else:
            menu = self._request("POST", "/api/menus", json=body)["menu"]
            self._remember_menu(menu)
            for item in self.items:
                saved = self._request(
                    "POST",
                    "/api/menuItems",
                    json={
                        "id": item.get("id"),
                        "menuId": menu["id"],
                        "name": item.get("name"),
                        "description": item.get("description"),
                        "price": item.get("price"),
                        "category": item.get("category"),
                    },
                )["item"]
                item["id"] = saved["id"]

        self.is_dirty = False
        logger.info(f"Saved menu {menu['id']} with {len(self.items)} items")
        return menu

    def _remember_menu(self, menu: Dict[str, Any]) -> None:
        if self.menu_id is None:
            self.saved_menus.append(menu)
        else:
            self.saved_menus = [menu if m["id"] == menu["id"] else m for m in self.saved_menus]
        self.menu_id = menu["id"]
        self.state = BuilderState.EDITING_MENU

    # ------------------------------------------------------------------
    # Guards
    # ------------------------------------------------------------------

    def _require_restaurant(self) -> None:
        if self.state == BuilderState.NO_RESTAURANT:
            raise MenuBuilderError("No restaurant selected")

    def _require_menu(self) -> None:
        if self.state not in (BuilderState.EDITING_MENU, BuilderState.DRAFTING_MENU):
            raise MenuBuilderError("No menu selected")

    @staticmethod
    def _check_field(field: str) -> None:
        if field not in EDITABLE_ITEM_FIELDS:
            raise ValueError(f"Unknown item field: {field}")
