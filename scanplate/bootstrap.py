"""Wiring of storage, cart, contacts and checkout from settings."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from scanplate.core.cart_storage import CartStore
from scanplate.core.config import Settings
from scanplate.core.kv_storage import JsonFileKeyValueStore, KeyValueStore
from scanplate.integrations.public_api import PublicApiClient
from scanplate.integrations.redis_slot import RedisKeyValueStore
from scanplate.services.contact_book import ContactBook
from scanplate.services.order_service import CheckoutService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartRuntime:
    cart: CartStore
    contacts: ContactBook
    api: PublicApiClient
    checkout: CheckoutService


def build_storage(settings: Settings) -> KeyValueStore:
    # Priority 1: Redis, shared between devices of the same session
    if settings.redis_url:
        logger.info("Using Redis for cart storage")
        return RedisKeyValueStore(settings.redis_url)

    # Priority 2: local JSON file
    logger.info("Using file %s for cart storage", settings.cart_file_path)
    return JsonFileKeyValueStore(settings.cart_file_path)


def build_cart_store(settings: Settings, storage: KeyValueStore | None = None) -> CartStore:
    return CartStore(storage or build_storage(settings), storage_key=settings.cart_storage_key)


def build_runtime(settings: Settings) -> CartRuntime:
    """Create the cart and checkout components sharing one storage slot."""
    storage = build_storage(settings)
    cart = build_cart_store(settings, storage)
    contacts = ContactBook(storage)
    api = PublicApiClient(settings.api_base_url, timeout=settings.api_timeout)
    checkout = CheckoutService(cart, api, contacts=contacts)
    return CartRuntime(cart=cart, contacts=contacts, api=api, checkout=checkout)
