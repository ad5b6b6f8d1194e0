"""Shared helpers for unit prices, line totals and cart aggregates."""
from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from .constants import MONEY_PLACES

ZERO = Decimal("0")


def to_amount(value: Any) -> Decimal:
    """Coerce a price to a non-negative Decimal.

    Missing, negative, NaN and unparsable values count as zero so a bad
    catalog record can never poison a total.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not amount.is_finite() or amount < 0:
        return ZERO
    return amount


def _extra_price(extra: Any) -> Any:
    if isinstance(extra, dict):
        return extra.get("price")
    return getattr(extra, "price", None)


def unit_price(base_price: Any, selected_extras: Iterable[Any] | None = None) -> Decimal:
    total = to_amount(base_price)
    for extra in selected_extras or ():
        total += to_amount(_extra_price(extra))
    return total


def line_total(price: Any, quantity: int) -> Decimal:
    return to_amount(price) * int(quantity)


def cart_subtotal(lines: Iterable[Any]) -> Decimal:
    total = ZERO
    for line in lines:
        total += line_total(line.unit_price, line.quantity)
    return total


def cart_item_count(lines: Iterable[Any]) -> int:
    return sum(int(line.quantity) for line in lines)


def round_money(amount: Any) -> Decimal:
    """Round to cents for display; never feed the result back into totals."""
    return to_amount(amount).quantize(Decimal(MONEY_PLACES), rounding=ROUND_HALF_UP)


def format_money(amount: Any) -> str:
    return f"{round_money(amount):.2f}"
