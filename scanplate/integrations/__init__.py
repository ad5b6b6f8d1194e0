"""Integrations package - external storage and HTTP services."""

from scanplate.integrations.public_api import PublicApiClient
from scanplate.integrations.redis_slot import RedisKeyValueStore

__all__ = ["PublicApiClient", "RedisKeyValueStore"]
