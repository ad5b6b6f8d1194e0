"""Order assembly from cart lines and the checkout flow around submission."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from scanplate.core.cart_storage import CartStore
from scanplate.core.constants import MAX_NAME_LENGTH
from scanplate.core.exceptions import (
    EmptyCart,
    InvalidEmail,
    InvalidPhone,
    InvalidTableNumber,
    MissingContactInfo,
    MissingRestaurantContext,
)
from scanplate.core.order_math import cart_subtotal
from scanplate.core.sanitize import (
    is_valid_email,
    is_valid_phone,
    parse_table_number,
    sanitize_text_input,
)
from scanplate.domain.cart import CartLine
from scanplate.domain.order import (
    CustomerInfo,
    OrderConfirmation,
    OrderExtra,
    OrderLine,
    OrderPayload,
)

from .contact_book import ContactBook

logger = logging.getLogger(__name__)


class OrderSubmitter(Protocol):
    async def submit_order(self, payload: OrderPayload) -> OrderConfirmation: ...


def _to_order_line(line: CartLine) -> OrderLine:
    return OrderLine(
        menu_item_id=line.menu_item.item_id,
        name=line.menu_item.name,
        quantity=line.quantity,
        unit_price=line.unit_price,
        selected_components=line.selected_components,
        selected_extras=tuple(
            OrderExtra(name=extra.name, price=extra.price) for extra in line.selected_extras
        ),
    )


class OrderAssembler:
    """Turns the cart into an order payload, validating checkout input first.

    Nothing here touches the network or the cart; every check runs before
    the payload exists, so a rejected checkout never sends anything.
    """

    def assemble(
        self,
        lines: Sequence[CartLine],
        restaurant_id: str | None,
        table_number: Any = None,
        customer: CustomerInfo | None = None,
        notes: str | None = None,
    ) -> OrderPayload:
        restaurant = (restaurant_id or "").strip()
        if not restaurant:
            raise MissingRestaurantContext()
        if not lines:
            raise EmptyCart()

        try:
            table = parse_table_number(table_number)
        except ValueError as e:
            raise InvalidTableNumber(table_number) from e

        customer = customer or CustomerInfo()
        name = sanitize_text_input(customer.name, max_length=MAX_NAME_LENGTH)
        phone = (customer.phone or "").strip()
        email = (customer.email or "").strip().lower()

        if table is None:
            if not name:
                raise MissingContactInfo("name")
            if not phone:
                raise MissingContactInfo("phone")
            if not is_valid_phone(phone):
                raise InvalidPhone(phone)

        if email and not is_valid_email(email):
            raise InvalidEmail(email)

        return OrderPayload(
            restaurant_id=restaurant,
            items=tuple(_to_order_line(line) for line in lines),
            table_number=table,
            total_amount=cart_subtotal(lines),
            customer_name=name or None,
            customer_phone=phone or None,
            customer_email=email or None,
            notes=sanitize_text_input(notes) or None,
        )


class CheckoutService:
    """Validates, submits and then clears the cart on success."""

    def __init__(
        self,
        cart: CartStore,
        submitter: OrderSubmitter,
        contacts: ContactBook | None = None,
        assembler: OrderAssembler | None = None,
    ) -> None:
        self._cart = cart
        self._submitter = submitter
        self._contacts = contacts
        self._assembler = assembler or OrderAssembler()

    async def place_order(
        self,
        restaurant_id: str | None,
        table_number: Any = None,
        customer: CustomerInfo | None = None,
        notes: str | None = None,
    ) -> OrderConfirmation:
        """Submit the current cart.

        Raises:
            ValidationException: checkout input rejected, nothing was sent
            SubmissionFailed: the order endpoint failed; the cart is kept
        """
        snapshot = self._cart.snapshot()
        payload = self._assembler.assemble(
            snapshot.lines,
            restaurant_id,
            table_number=table_number,
            customer=customer,
            notes=notes,
        )

        confirmation = await self._submitter.submit_order(payload)
        logger.info(
            "Order %s (#%s) placed for restaurant %s, %s items, total %s",
            confirmation.order_id,
            confirmation.order_number,
            payload.restaurant_id,
            snapshot.total_item_count,
            payload.total_amount,
        )

        self._cart.clear()
        if self._contacts is not None and payload.table_number is None:
            self._contacts.remember(
                CustomerInfo(
                    name=payload.customer_name or "",
                    phone=payload.customer_phone or "",
                    email=payload.customer_email or "",
                )
            )
        return confirmation
