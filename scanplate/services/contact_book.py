"""Contact details remembered between pickup orders."""
from __future__ import annotations

from scanplate.core.constants import CONTACT_EMAIL_KEY, CONTACT_NAME_KEY, CONTACT_PHONE_KEY
from scanplate.core.kv_storage import KeyValueStore
from scanplate.domain.order import CustomerInfo


class ContactBook:
    """Prefill values for the checkout form, kept next to the cart."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage

    def load(self) -> CustomerInfo:
        return CustomerInfo(
            name=self._storage.get(CONTACT_NAME_KEY) or "",
            phone=self._storage.get(CONTACT_PHONE_KEY) or "",
            email=self._storage.get(CONTACT_EMAIL_KEY) or "",
        )

    def remember(self, customer: CustomerInfo) -> None:
        self._storage.set(CONTACT_NAME_KEY, customer.name.strip())
        self._storage.set(CONTACT_PHONE_KEY, customer.phone.strip())
        email = customer.email.strip()
        if email:
            self._storage.set(CONTACT_EMAIL_KEY, email)
        else:
            self._storage.delete(CONTACT_EMAIL_KEY)
