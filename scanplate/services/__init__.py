"""Checkout services built on top of the cart store."""

from .contact_book import ContactBook
from .order_service import CheckoutService, OrderAssembler

__all__ = ["CheckoutService", "ContactBook", "OrderAssembler"]
