"""Domain package."""

from .cart import CartLine, CartSnapshot, MenuItemSnapshot, SelectedExtra
from .menu import MenuExtra, MenuItem, SelectionState, available_items
from .order import CustomerInfo, OrderConfirmation, OrderLine, OrderPayload, OrderType

__all__ = [
    # Menu
    "MenuItem",
    "MenuExtra",
    "SelectionState",
    "available_items",
    # Cart
    "CartLine",
    "CartSnapshot",
    "MenuItemSnapshot",
    "SelectedExtra",
    # Order
    "CustomerInfo",
    "OrderLine",
    "OrderPayload",
    "OrderConfirmation",
    "OrderType",
]
