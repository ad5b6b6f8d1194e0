"""Menu catalog records and the in-progress item selection."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scanplate.core.constants import MIN_QUANTITY
from scanplate.core.order_math import to_amount, unit_price

logger = logging.getLogger(__name__)


class MenuExtra(BaseModel):
    """Optional paid add-on of a menu item."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Extra name, unique within its item")
    price: Decimal = Field(Decimal("0"), description="Additional price per unit")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> str:
        return str(v or "").strip()

    @field_validator("price", mode="before")
    @classmethod
    def clamp_price(cls, v: Any) -> Decimal:
        return to_amount(v)


class MenuItem(BaseModel):
    """Menu item as published by the restaurant's public menu endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., alias="_id", min_length=1, description="Menu item ID")
    name: str = Field(..., min_length=1, description="Dish name")
    description: str = Field("", description="Dish description")
    price: Decimal = Field(Decimal("0"), description="Base price")
    category: str = Field("", description="Menu category")
    image_url: str | None = Field(None, alias="imageUrl", description="Photo URL")
    components: tuple[str, ...] = Field((), description="Ingredients that can be removed")
    extras: tuple[MenuExtra, ...] = Field((), description="Paid add-ons")
    is_available: bool = Field(True, alias="isAvailable", description="Shown on the menu")

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("price", mode="before")
    @classmethod
    def clamp_price(cls, v: Any) -> Decimal:
        return to_amount(v)

    @field_validator("description", "category", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("components", mode="before")
    @classmethod
    def default_components(cls, v: Any) -> Any:
        return v or ()

    @field_validator("extras", mode="before")
    @classmethod
    def default_extras(cls, v: Any) -> Any:
        return v or ()

    def find_extra(self, name: str) -> MenuExtra | None:
        for extra in self.extras:
            if extra.name == name:
                return extra
        return None


def available_items(records: Iterable[Any]) -> list[MenuItem]:
    """Parse catalog records, dropping invalid and unavailable items."""
    items: list[MenuItem] = []
    for record in records:
        if isinstance(record, MenuItem):
            item = record
        else:
            try:
                item = MenuItem.model_validate(record)
            except ValidationError as exc:
                logger.warning("Skipping invalid menu record: %s", exc.errors()[:1])
                continue
        if item.is_available:
            items.append(item)
    return items


@dataclass
class SelectionState:
    """Choices for one menu item while the customer configures it."""

    menu_item: MenuItem
    selected_components: list[str] | None = None
    selected_extras: list[MenuExtra] = field(default_factory=list)
    quantity: int = MIN_QUANTITY

    def __post_init__(self) -> None:
        if self.selected_components is None:
            self.selected_components = list(self.menu_item.components)

    @classmethod
    def for_item(cls, menu_item: MenuItem) -> SelectionState:
        """All components kept, no extras, one unit."""
        return cls(menu_item=menu_item)

    def toggle_component(self, name: str) -> bool:
        """Flip a component; returns whether it is now selected."""
        if name in self.selected_components:
            self.selected_components.remove(name)
            return False
        if name not in self.menu_item.components:
            return False
        self.selected_components.append(name)
        return True

    def toggle_extra(self, name: str) -> bool:
        """Flip an extra by name; returns whether it is now selected."""
        for idx, extra in enumerate(self.selected_extras):
            if extra.name == name:
                del self.selected_extras[idx]
                return False
        extra = self.menu_item.find_extra(name)
        if extra is None:
            return False
        self.selected_extras.append(extra)
        return True

    def set_quantity(self, quantity: int) -> None:
        self.quantity = max(MIN_QUANTITY, int(quantity))

    def increment(self) -> None:
        self.set_quantity(self.quantity + 1)

    def decrement(self) -> None:
        self.set_quantity(self.quantity - 1)

    @property
    def unit_price(self) -> Decimal:
        return unit_price(self.menu_item.price, self.selected_extras)

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity
