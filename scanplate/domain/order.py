"""Order submission payload and the server's confirmation."""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class OrderType(str, Enum):
    """How the order reaches the customer."""

    DINE_IN = "dine-in"
    PICKUP = "pickup"


class CustomerInfo(BaseModel):
    """Contact details typed in at checkout."""

    name: str = ""
    phone: str = ""
    email: str = ""


class OrderExtra(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal

    @field_serializer("price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class OrderLine(BaseModel):
    """One cart line as sent to the order endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    menu_item_id: str = Field(..., alias="menuItemId")
    name: str
    quantity: int = Field(..., ge=1)
    unit_price: Decimal = Field(..., alias="priceAtOrder")
    selected_components: tuple[str, ...] = Field((), alias="selectedComponents")
    selected_extras: tuple[OrderExtra, ...] = Field((), alias="selectedExtras")

    @field_serializer("unit_price")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)


class OrderPayload(BaseModel):
    """Everything the public order endpoint needs to create an order."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    restaurant_id: str = Field(..., alias="restaurantId", min_length=1)
    items: tuple[OrderLine, ...] = Field(..., min_length=1)
    table_number: int | None = Field(None, alias="tableNumber", ge=0)
    total_amount: Decimal = Field(..., alias="totalAmount")
    customer_name: str | None = Field(None, alias="customerName")
    customer_phone: str | None = Field(None, alias="customerPhone")
    customer_email: str | None = Field(None, alias="customerEmail")
    notes: str | None = None

    @field_serializer("total_amount")
    def serialize_total(self, total: Decimal) -> float:
        return float(total)

    @property
    def order_type(self) -> OrderType:
        return OrderType.PICKUP if self.table_number is None else OrderType.DINE_IN

    def to_wire(self) -> dict[str, Any]:
        """JSON body for POST /orders; unset optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OrderConfirmation(BaseModel):
    """Identifiers returned by the server for an accepted order."""

    order_id: str
    order_number: str

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> OrderConfirmation:
        order_id = data.get("orderId") or data.get("_id") or "N/A"
        order_number = data.get("orderNumber")
        return cls(
            order_id=str(order_id),
            order_number="Unknown" if order_number is None else str(order_number),
        )
