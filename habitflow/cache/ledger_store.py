"""
Key-value backends for the reward ledger.

Each user's ledger is one JSON document under one key:

    {"date": "YYYY-MM-DD", "rewards": {habit_id: {"xp": int, "achievements": [ids]}}}

Backends only store and fetch documents; date scoping is the ledger's job.
"""

import copy
import json
import logging
from typing import Any, Dict, Optional, Protocol

import redis.asyncio as redis
from redis.exceptions import RedisError

from habitflow.config import REDIS_URL, LEDGER_TTL_SECONDS
from habitflow.exceptions import StoreConnectionError, wrap_storage_exception

logger = logging.getLogger(__name__)


class LedgerBackend(Protocol):
    async def load(self, key: str) -> Optional[Dict[str, Any]]:
        ...

    async def save(self, key: str, document: Dict[str, Any]) -> None:
        ...


class InMemoryLedgerBackend:
    """Process-local ledger storage"""

    def __init__(self):
        self._documents: Dict[str, Dict[str, Any]] = {}

    async def load(self, key: str) -> Optional[Dict[str, Any]]:
        document = self._documents.get(key)
        return copy.deepcopy(document) if document is not None else None

    async def save(self, key: str, document: Dict[str, Any]) -> None:
        self._documents[key] = copy.deepcopy(document)


class RedisLedgerBackend:
    """
    Redis ledger storage.

    Documents are JSON strings with a TTL, so yesterday's ledgers expire on
    their own. An unreadable document loads as absent.
    """

    def __init__(self, redis_url: str = REDIS_URL, ttl_seconds: int = LEDGER_TTL_SECONDS):
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self._client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Establish Redis connection."""
        try:
            self._client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                max_connections=10,
            )
            await self._client.ping()
            logger.info(f"Redis connected: {self.redis_url}")
        except RedisError as e:
            self._client = None
            raise wrap_storage_exception(e, "redis_connect") from e

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")

    async def load(self, key: str) -> Optional[Dict[str, Any]]:
        client = self._require_client()
        try:
            value = await client.get(key)
        except RedisError as e:
            raise wrap_storage_exception(e, "ledger_load", context={"key": key}) from e

        if value is None:
            return None

        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Discarding unreadable ledger at {key}: {e}")
            return None

    async def save(self, key: str, document: Dict[str, Any]) -> None:
        client = self._require_client()
        try:
            await client.set(key, json.dumps(document), ex=self.ttl_seconds)
        except RedisError as e:
            raise wrap_storage_exception(e, "ledger_save", context={"key": key}) from e

    def _require_client(self) -> redis.Redis:
        if self._client is None:
            raise StoreConnectionError("Redis ledger backend not connected", operation="ledger_client")
        return self._client
