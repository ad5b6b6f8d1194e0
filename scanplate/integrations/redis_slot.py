"""Redis-backed key-value slot with TTL and in-memory fallback."""
from __future__ import annotations

import logging
import os
from typing import Any

import redis

from scanplate.core.constants import CART_EXPIRY_SECONDS
from scanplate.core.kv_storage import MemoryKeyValueStore

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """Slots persisted in Redis under a namespace, expiring after 24h idle.

    Connection problems never reach the cart: the store logs a warning and
    keeps serving from process memory.
    """

    def __init__(
        self,
        redis_url: str | None = None,
        namespace: str = "scanplate",
        ttl_seconds: int = CART_EXPIRY_SECONDS,
    ):
        self._redis_url = redis_url or os.getenv("REDIS_URL")
        self._namespace = namespace
        self._ttl_seconds = ttl_seconds
        self._memory = MemoryKeyValueStore()
        self._client = self._init_client()

    @property
    def is_fallback(self) -> bool:
        return self._client is None

    def _switch_to_memory_fallback(self, reason: Exception | str) -> None:
        logger.warning("Redis storage fallback to memory mode: %s", reason)
        self._client = None

    def _init_client(self) -> Any:
        if not self._redis_url:
            logger.warning("REDIS_URL is not set; storage uses in-memory fallback")
            return None

        try:
            client = redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            client.ping()
            logger.info("Redis storage enabled")
            return client
        except Exception as exc:
            logger.warning("Redis storage init failed, fallback to in-memory: %s", exc)
            return None

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> str | None:
        if not self._client:
            return self._memory.get(key)
        try:
            raw = self._client.get(self._key(key))
        except Exception as exc:
            self._switch_to_memory_fallback(exc)
            return self._memory.get(key)
        if raw is None:
            return None
        return raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)

    def set(self, key: str, value: str) -> None:
        if self._client:
            try:
                self._client.setex(self._key(key), self._ttl_seconds, value)
                return
            except Exception as exc:
                self._switch_to_memory_fallback(exc)
        self._memory.set(key, value)

    def delete(self, key: str) -> None:
        if self._client:
            try:
                self._client.delete(self._key(key))
            except Exception as exc:
                self._switch_to_memory_fallback(exc)
        self._memory.delete(key)
