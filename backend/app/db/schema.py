"""
Pydantic schemas for API request/response models.
These define the structure of data flowing through the API.

Request bodies use the camelCase keys of the HTTP contract (snake_case is
accepted too); rows are returned with their column names.
"""
from typing import Annotated, Optional, List
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.constants import MenuTemplate, MenuConstants, LimitsConstants

# NUMERIC(10, 2): finite and non-negative
Price = Annotated[float, Field(ge=0, le=LimitsConstants.PRICE_MAX, allow_inf_nan=False)]


def round_price(value: Optional[float]) -> Optional[float]:
    """Round a price to the stored number of decimal places (half up)."""
    if value is None:
        return None
    step = Decimal(1).scaleb(-LimitsConstants.PRICE_DECIMAL_PLACES)
    return float(Decimal(str(value)).quantize(step, rounding=ROUND_HALF_UP))


class CamelModel(BaseModel):
    """Base for request bodies sent by the menu builder UI."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Restaurants
# ---------------------------------------------------------------------------

class RestaurantCreate(BaseModel):
    """Restaurant creation schema."""
    name: Optional[str] = Field(None, max_length=LimitsConstants.NAME_MAX_LENGTH)


class Restaurant(BaseModel):
    """Restaurant row."""
    id: int
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Menus
# ---------------------------------------------------------------------------

class MenuCreate(BaseModel):
    """Fields needed to insert a menu."""
    restaurant_id: int
    name: str
    template_id: MenuTemplate = MenuTemplate.MODERN

    model_config = ConfigDict(use_enum_values=True)


class MenuUpdate(BaseModel):
    """Fields an update may change. The owning restaurant is fixed."""
    name: str
    template_id: MenuTemplate

    model_config = ConfigDict(use_enum_values=True)


class MenuUpsertRequest(CamelModel):
    """Body of POST /menus: update when id is present, insert otherwise."""
    id: Optional[int] = None
    restaurant_id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=LimitsConstants.NAME_MAX_LENGTH)
    template_id: Optional[str] = Field(None, max_length=LimitsConstants.TEMPLATE_MAX_LENGTH)


class Menu(BaseModel):
    """Menu row."""
    id: int
    restaurant_id: int
    name: str
    template_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Menu items
# ---------------------------------------------------------------------------

class MenuItemFields(BaseModel):
    """Editable item fields with their insert defaults."""
    name: str = Field(max_length=LimitsConstants.NAME_MAX_LENGTH)
    description: str = MenuConstants.DEFAULT_DESCRIPTION
    price: Price = MenuConstants.DEFAULT_PRICE
    category: str = Field(MenuConstants.DEFAULT_CATEGORY, max_length=LimitsConstants.CATEGORY_MAX_LENGTH)

    @field_validator("price")
    @classmethod
    def price_in_cents(cls, value):
        return round_price(value)


class MenuItemCreate(MenuItemFields):
    """Fields needed to insert an item."""
    menu_id: int


class MenuItemUpdate(MenuItemFields):
    """Full replacement of an item's editable fields."""


class MenuItemDraft(CamelModel):
    """An item as edited in the builder; optional fields may be blank."""
    id: Optional[int] = None
    name: Optional[str] = Field(None, max_length=LimitsConstants.NAME_MAX_LENGTH)
    description: Optional[str] = None
    price: Optional[Price] = None
    category: Optional[str] = Field(None, max_length=LimitsConstants.CATEGORY_MAX_LENGTH)

    @field_validator("price", mode="before")
    @classmethod
    def blank_price_is_missing(cls, value):
        # A cleared number input posts ""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("price")
    @classmethod
    def price_in_cents(cls, value):
        return round_price(value)

    def to_fields(self) -> dict:
        """Editable fields with defaults substituted for missing values."""
        return {
            "name": self.name,
            "description": self.description or MenuConstants.DEFAULT_DESCRIPTION,
            "price": self.price or MenuConstants.DEFAULT_PRICE,
            "category": self.category or MenuConstants.DEFAULT_CATEGORY,
        }


class MenuItemUpsertRequest(MenuItemDraft):
    """Body of POST /menuItems."""
    menu_id: Optional[int] = None


class MenuItem(BaseModel):
    """Menu item row."""
    id: int
    menu_id: int
    name: str
    description: str
    price: float
    category: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class MenuSaveRequest(MenuUpsertRequest):
    """Menu plus its full item list, saved in one transaction."""
    items: List[MenuItemDraft] = []


# ---------------------------------------------------------------------------
# AI
# ---------------------------------------------------------------------------

class EnhanceDescriptionRequest(CamelModel):
    """Request schema for the description rewrite endpoint."""
    name: str
    old_description: Optional[str] = ""
    brand_voice: Optional[str] = None


class EnhanceDescriptionResponse(CamelModel):
    """Rewritten description."""
    new_description: str
