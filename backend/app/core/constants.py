"""
Application-wide constants.
Centralizes all hardcoded values to prevent duplication and improve maintainability.
"""
from enum import Enum
from typing import List


class MenuTemplate(str, Enum):
    """Visual layouts a menu can be rendered with."""

    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"


class MenuConstants:
    """Constants related to menus and their line items."""

    TEMPLATES: List[str] = [t.value for t in MenuTemplate]
    DEFAULT_TEMPLATE: str = MenuTemplate.MODERN.value

    # Defaults applied to optional item fields
    DEFAULT_DESCRIPTION: str = ""
    DEFAULT_PRICE: float = 0.0
    DEFAULT_CATEGORY: str = ""

    # Brand voice used when the caller gives none
    DEFAULT_BRAND_VOICE: str = "generic"

    @classmethod
    def is_valid_template(cls, template_id: str) -> bool:
        """Check if template identifier is valid."""
        return template_id in cls.TEMPLATES


class LimitsConstants:
    """Limits and thresholds used throughout the application."""

    # HTTP and network
    LLM_TIMEOUT_SECONDS: float = 120.0

    # Column sizes
    NAME_MAX_LENGTH: int = 255
    CATEGORY_MAX_LENGTH: int = 100
    TEMPLATE_MAX_LENGTH: int = 20

    # Prices are stored as NUMERIC(10, 2)
    PRICE_DECIMAL_PLACES: int = 2
    PRICE_MAX: float = 99999999.99


__all__ = [
    'MenuTemplate',
    'MenuConstants',
    'LimitsConstants'
]
