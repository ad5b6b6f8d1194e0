"""Cart line records and their persisted JSON form."""
from __future__ import annotations

import json
import time
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any

from scanplate.core.configuration_key import compute_key
from scanplate.core.exceptions import PersistenceCorrupt
from scanplate.core.order_math import ZERO, cart_item_count, cart_subtotal, line_total, to_amount


def _strict_amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise PersistenceCorrupt(f"{field_name} is not a number: {value!r}") from e
    if not amount.is_finite() or amount < 0:
        raise PersistenceCorrupt(f"{field_name} must be a non-negative number")
    return amount


@dataclass(frozen=True)
class SelectedExtra:
    """Extra chosen for a cart line, with the price it had when added."""

    name: str
    price: Decimal = ZERO

    @classmethod
    def from_any(cls, extra: Any, catalog: Iterable[Any] = ()) -> SelectedExtra:
        """Build from an extra object, a dict or a bare name.

        A bare name takes its price from the matching entry of ``catalog``.
        """
        if isinstance(extra, SelectedExtra):
            return extra
        if isinstance(extra, str):
            for known in catalog:
                if getattr(known, "name", None) == extra:
                    return cls(name=extra, price=to_amount(known.price))
            return cls(name=extra)
        if isinstance(extra, dict):
            return cls(name=str(extra.get("name", "")), price=to_amount(extra.get("price")))
        return cls(name=str(getattr(extra, "name", "")), price=to_amount(getattr(extra, "price", None)))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "price": str(self.price)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SelectedExtra:
        if not isinstance(data, dict) or not data.get("name"):
            raise PersistenceCorrupt("extra without a name")
        return cls(name=str(data["name"]), price=_strict_amount(data.get("price", 0), "extra price"))


@dataclass(frozen=True)
class MenuItemSnapshot:
    """Copy of the base menu item taken when it was added to the cart."""

    item_id: str
    name: str
    base_price: Decimal
    category: str = ""
    image_url: str | None = None
    components: tuple[str, ...] = ()

    @classmethod
    def from_menu_item(cls, item: Any) -> MenuItemSnapshot:
        if isinstance(item, MenuItemSnapshot):
            return item
        return cls(
            item_id=str(item.id),
            name=str(item.name),
            base_price=to_amount(item.price),
            category=str(getattr(item, "category", "") or ""),
            image_url=getattr(item, "image_url", None),
            components=tuple(getattr(item, "components", ()) or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "base_price": str(self.base_price),
            "category": self.category,
            "image_url": self.image_url,
            "components": list(self.components),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MenuItemSnapshot:
        if not isinstance(data, dict) or not data.get("item_id"):
            raise PersistenceCorrupt("menu item snapshot without an id")
        components = data.get("components") or []
        if not isinstance(components, list):
            raise PersistenceCorrupt("menu item components must be a list")
        return cls(
            item_id=str(data["item_id"]),
            name=str(data.get("name", "")),
            base_price=_strict_amount(data.get("base_price", 0), "base price"),
            category=str(data.get("category") or ""),
            image_url=data.get("image_url"),
            components=tuple(str(name) for name in components),
        )


@dataclass(frozen=True)
class CartLine:
    """One configured menu item in the cart.

    Lines are immutable; a quantity change replaces the line, so the price
    fixed at add time cannot drift.
    """

    configuration_key: str
    menu_item: MenuItemSnapshot
    quantity: int
    selected_components: tuple[str, ...]
    selected_extras: tuple[SelectedExtra, ...]
    unit_price: Decimal
    added_at: float = field(default_factory=time.time)

    @property
    def line_total(self) -> Decimal:
        return line_total(self.unit_price, self.quantity)

    def with_quantity(self, quantity: int) -> CartLine:
        return replace(self, quantity=int(quantity))

    def to_dict(self) -> dict[str, Any]:
        return {
            "configuration_key": self.configuration_key,
            "menu_item": self.menu_item.to_dict(),
            "quantity": int(self.quantity),
            "selected_components": list(self.selected_components),
            "selected_extras": [extra.to_dict() for extra in self.selected_extras],
            "unit_price": str(self.unit_price),
            "added_at": float(self.added_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartLine:
        if not isinstance(data, dict):
            raise PersistenceCorrupt("cart line must be an object")
        menu_item = MenuItemSnapshot.from_dict(data.get("menu_item"))

        quantity = data.get("quantity")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise PersistenceCorrupt(f"invalid quantity: {quantity!r}")

        components = data.get("selected_components") or []
        extras = data.get("selected_extras") or []
        if not isinstance(components, list) or not isinstance(extras, list):
            raise PersistenceCorrupt("selections must be lists")
        selected_components = tuple(str(name) for name in components)
        selected_extras = tuple(SelectedExtra.from_dict(raw) for raw in extras)

        key = data.get("configuration_key") or compute_key(
            menu_item.item_id, selected_components, selected_extras
        )
        try:
            added_at = float(data.get("added_at", time.time()))
        except (TypeError, ValueError) as e:
            raise PersistenceCorrupt("added_at is not a timestamp") from e

        return cls(
            configuration_key=str(key),
            menu_item=menu_item,
            quantity=quantity,
            selected_components=selected_components,
            selected_extras=selected_extras,
            unit_price=_strict_amount(data.get("unit_price"), "unit price"),
            added_at=added_at,
        )


@dataclass(frozen=True)
class CartSnapshot:
    """Cart lines plus aggregates computed when the snapshot was taken."""

    lines: tuple[CartLine, ...]
    subtotal: Decimal
    total_item_count: int

    @classmethod
    def of(cls, lines: Iterable[CartLine]) -> CartSnapshot:
        frozen = tuple(lines)
        return cls(lines=frozen, subtotal=cart_subtotal(frozen), total_item_count=cart_item_count(frozen))

    @property
    def is_empty(self) -> bool:
        return not self.lines


def encode_lines(lines: Sequence[CartLine]) -> str:
    payload = {
        "items": [line.to_dict() for line in lines],
        "updated_at": int(time.time()),
    }
    return json.dumps(payload, ensure_ascii=False)


def decode_lines(raw: str | bytes | None) -> list[CartLine]:
    """Parse a stored cart; raise PersistenceCorrupt on anything unexpected.

    Accepts the ``{"items": [...]}`` payload and a bare list of line records.
    """
    if raw is None or raw == "" or raw == b"":
        return []
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise PersistenceCorrupt(f"stored cart is not JSON: {e}") from e

    if isinstance(payload, dict):
        items = payload.get("items", [])
    else:
        items = payload
    if not isinstance(items, list):
        raise PersistenceCorrupt("stored cart items must be a list")

    lines = [CartLine.from_dict(item) for item in items]
    keys = [line.configuration_key for line in lines]
    if len(set(keys)) != len(keys):
        raise PersistenceCorrupt("stored cart has duplicate configuration keys")
    return lines
