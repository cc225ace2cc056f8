"""Catalog reference models."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CatalogKind(str, Enum):
    """Selectable catalog families."""

    BEVERAGE = "BEVERAGE"
    ENTREMESES = "ENTREMESES"


class CatalogItem(BaseModel):
    """Item sold by unit quantity."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    display_name: str
    unit_price: Decimal = Field(ge=0)
    is_alcoholic: bool = False


class PerGuestItem(BaseModel):
    """Add-on billed at a fixed rate per guest when flagged."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    display_name: str
    rate: Decimal = Field(ge=0)


class FoodService(BaseModel):
    """Food service option priced per guest."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    display_name: str
    unit_price: Decimal = Field(ge=0)
    serves_food: bool = True

    @property
    def is_buffet(self) -> bool:
        """Check if this service is a buffet variant."""
        return is_buffet(self.id)


class EventRoom(BaseModel):
    """Bookable event space."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    display_name: str
    hourly_rate: Decimal = Field(ge=0)


def is_buffet(food_type: str | None) -> bool:
    """Buffet variants share the ``buffet`` id prefix."""
    return isinstance(food_type, str) and food_type.startswith("buffet")
