"""Cart store: configured lines, merge rules, persistence and change observers."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from scanplate.domain.cart import (
    CartLine,
    CartSnapshot,
    MenuItemSnapshot,
    SelectedExtra,
    decode_lines,
    encode_lines,
)

from .configuration_key import compute_key
from .constants import CART_STORAGE_KEY, MIN_QUANTITY
from .exceptions import PersistenceCorrupt
from .kv_storage import KeyValueStore
from .order_math import unit_price

logger = logging.getLogger(__name__)

CartObserver = Callable[[CartSnapshot], None]


def _unique(names: Iterable[Any] | None) -> tuple[str, ...]:
    return tuple(dict.fromkeys(str(name) for name in names or ()))


def _unique_extras(extras: Iterable[Any] | None, catalog: Iterable[Any] = ()) -> tuple[SelectedExtra, ...]:
    catalog = tuple(catalog or ())
    by_name: dict[str, SelectedExtra] = {}
    for raw in extras or ():
        extra = SelectedExtra.from_any(raw, catalog)
        if not extra.name:
            logger.warning("Ignored extra without a name: %r", raw)
            continue
        by_name.setdefault(extra.name, extra)
    return tuple(by_name.values())


class CartStore:
    """Owns the cart lines of one diner session.

    Every mutation writes the full line list to the storage slot and then
    notifies subscribers with a fresh snapshot. All calls are synchronous and
    expected from a single thread.
    """

    def __init__(self, storage: KeyValueStore, storage_key: str = CART_STORAGE_KEY) -> None:
        self._storage = storage
        self._storage_key = storage_key
        self._observers: list[CartObserver] = []
        self._lines: list[CartLine] = self._load()

    def _load(self) -> list[CartLine]:
        raw = self._storage.get(self._storage_key)
        if raw is None:
            return []
        try:
            return decode_lines(raw)
        except PersistenceCorrupt as exc:
            logger.warning("Discarding stored cart %r: %s", self._storage_key, exc.message)
            return []

    def _commit(self) -> None:
        self._storage.set(self._storage_key, encode_lines(self._lines))
        snapshot = self.snapshot()
        for observer in list(self._observers):
            observer(snapshot)

    def _index_of(self, configuration_key: str) -> int | None:
        for idx, line in enumerate(self._lines):
            if line.configuration_key == configuration_key:
                return idx
        return None

    def subscribe(self, observer: CartObserver) -> Callable[[], None]:
        """Call ``observer`` after every mutation; returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def add_item(
        self,
        menu_item: Any,
        selected_components: Iterable[str] | None = None,
        selected_extras: Iterable[Any] | None = None,
        quantity: int = 1,
    ) -> CartLine | None:
        """Add a configured item, merging into the line with the same key.

        Non-positive quantities are ignored (logged, nothing stored) so a
        line can never hold less than one unit.
        """
        snapshot_item = MenuItemSnapshot.from_menu_item(menu_item)
        if quantity < MIN_QUANTITY:
            logger.warning(
                "Ignored add_item with quantity %s for item %s", quantity, snapshot_item.item_id
            )
            return None

        components = _unique(selected_components)
        extras = _unique_extras(selected_extras, getattr(menu_item, "extras", ()))
        key = compute_key(snapshot_item.item_id, components, extras)

        idx = self._index_of(key)
        if idx is not None:
            line = self._lines[idx].with_quantity(self._lines[idx].quantity + int(quantity))
            self._lines[idx] = line
        else:
            line = CartLine(
                configuration_key=key,
                menu_item=snapshot_item,
                quantity=int(quantity),
                selected_components=components,
                selected_extras=extras,
                unit_price=unit_price(snapshot_item.base_price, extras),
            )
            self._lines.append(line)

        self._commit()
        return line

    def add_selection(self, selection: Any) -> CartLine | None:
        """Add the item configured in a SelectionState."""
        return self.add_item(
            selection.menu_item,
            selection.selected_components,
            selection.selected_extras,
            selection.quantity,
        )

    def change_quantity(self, configuration_key: str, delta: int) -> CartLine | None:
        """Shift a line's quantity; it never drops below one unit.

        Use ``remove_line`` to delete a line. Unknown keys are ignored.
        """
        idx = self._index_of(configuration_key)
        if idx is None:
            return None
        current = self._lines[idx]
        line = current.with_quantity(max(MIN_QUANTITY, current.quantity + int(delta)))
        if line.quantity == current.quantity:
            return current
        self._lines[idx] = line
        self._commit()
        return line

    def remove_line(self, configuration_key: str) -> bool:
        idx = self._index_of(configuration_key)
        if idx is None:
            return False
        del self._lines[idx]
        self._commit()
        return True

    def clear(self) -> None:
        """Empty the cart; call only once the order has been accepted."""
        self._lines = []
        self._commit()

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot.of(self._lines)

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
