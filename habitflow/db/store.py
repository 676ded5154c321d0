"""
Record store interface and in-memory implementation

The gamification engine treats persistence as an opaque per-user record
store with three operations:

- get(user_id) -> record or None
- upsert(user_id, partial_record): merge the given fields into the row and
  stamp an update time
- subscribe(user_id, callback) -> unsubscribe: callback is awaited with the
  user id whenever that user's record changes, from any writer
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], Awaitable[None]]
Unsubscribe = Callable[[], None]


class RecordStore(Protocol):
    async def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        ...

    async def upsert(self, user_id: str, fields: Dict[str, Any]) -> None:
        ...

    def subscribe(self, user_id: str, callback: ChangeCallback) -> Unsubscribe:
        ...


class InMemoryRecordStore:
    """
    Process-local record store

    Every successful upsert notifies the user's subscribers, including the
    writer's own session. Two engines sharing one store behave like the
    same account open on two devices.
    """

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._subscribers: Dict[str, List[ChangeCallback]] = {}

    async def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        record = self._records.get(user_id)
        return copy.deepcopy(record) if record is not None else None

    async def upsert(self, user_id: str, fields: Dict[str, Any]) -> None:
        record = self._records.setdefault(user_id, {"user_id": user_id})
        record.update(copy.deepcopy(fields))
        record["updated_at"] = datetime.now(timezone.utc).isoformat()
        logger.debug(f"Upserted game state for user {user_id}: {sorted(fields)}")
        await self._notify(user_id)

    def subscribe(self, user_id: str, callback: ChangeCallback) -> Unsubscribe:
        self._subscribers.setdefault(user_id, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(user_id, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def subscriber_count(self, user_id: str) -> int:
        return len(self._subscribers.get(user_id, []))

    async def _notify(self, user_id: str) -> None:
        for callback in list(self._subscribers.get(user_id, [])):
            try:
                await callback(user_id)
            except Exception as e:
                logger.error(f"Change subscriber failed for user {user_id}: {e}", exc_info=True)
