"""
PostgreSQL-backed game state record store

One row per user in `game_state`. Writes are partial-field upserts; the
database stamps `updated_at`. A row-level trigger announces every change on
a NOTIFY channel (payload: user id) so other sessions of the same user can
reload.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb

from habitflow.config import GAME_STATE_CHANNEL
from habitflow.db.connection import Database, db as default_db
from habitflow.db.store import ChangeCallback, Unsubscribe
from habitflow.exceptions import wrap_storage_exception

logger = logging.getLogger(__name__)

GAME_STATE_COLUMNS = (
    "xp",
    "unlocked_achievements",
    "achievement_unlock_times",
    "current_combo",
    "max_combo",
    "last_completion_date",
    "streak_shields",
    "sound_enabled",
)
JSON_COLUMNS = {"unlocked_achievements", "achievement_unlock_times"}

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS game_state (
    user_id TEXT PRIMARY KEY,
    xp INTEGER NOT NULL DEFAULT 0,
    unlocked_achievements JSONB NOT NULL DEFAULT '[]'::jsonb,
    achievement_unlock_times JSONB NOT NULL DEFAULT '{{}}'::jsonb,
    current_combo INTEGER NOT NULL DEFAULT 0,
    max_combo INTEGER NOT NULL DEFAULT 0,
    last_completion_date TEXT,
    streak_shields INTEGER NOT NULL DEFAULT 3,
    sound_enabled BOOLEAN NOT NULL DEFAULT TRUE,
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE OR REPLACE FUNCTION notify_game_state_change() RETURNS trigger AS $$
BEGIN
    PERFORM pg_notify({channel}, NEW.user_id);
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;

DROP TRIGGER IF EXISTS game_state_change ON game_state;
CREATE TRIGGER game_state_change
    AFTER INSERT OR UPDATE ON game_state
    FOR EACH ROW EXECUTE FUNCTION notify_game_state_change();
"""


class PostgresRecordStore:
    """Record store over the `game_state` table"""

    def __init__(self, database: Database = default_db, channel: str = GAME_STATE_CHANNEL):
        self.database = database
        self.change_feed = PostgresChangeFeed(database, channel)
        self.channel = channel

    async def ensure_schema(self) -> None:
        """Create the table and change trigger if missing"""
        statement = sql.SQL(SCHEMA_SQL).format(channel=sql.Literal(self.channel))
        try:
            async with self.database.connection() as conn:
                await conn.execute(statement)
                await conn.commit()
        except psycopg.Error as e:
            raise wrap_storage_exception(e, "ensure_schema") from e
        logger.info("game_state schema ready")

    async def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        query = sql.SQL("SELECT user_id, {cols}, updated_at FROM game_state WHERE user_id = %s").format(
            cols=sql.SQL(", ").join(sql.Identifier(c) for c in GAME_STATE_COLUMNS)
        )
        try:
            async with self.database.connection() as conn:
                async with conn.cursor() as cur:
                    await cur.execute(query, (user_id,))
                    row = await cur.fetchone()
        except psycopg.Error as e:
            raise wrap_storage_exception(e, "get_game_state", user_id) from e

        return dict(row) if row else None

    async def upsert(self, user_id: str, fields: Dict[str, Any]) -> None:
        columns = [c for c in GAME_STATE_COLUMNS if c in fields]
        if not columns:
            return

        values = [Jsonb(fields[c]) if c in JSON_COLUMNS else fields[c] for c in columns]
        query = sql.SQL(
            """
            INSERT INTO game_state (user_id, {cols})
            VALUES (%s, {placeholders})
            ON CONFLICT (user_id) DO UPDATE
            SET {updates}, updated_at = CURRENT_TIMESTAMP
            """
        ).format(
            cols=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            placeholders=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
            updates=sql.SQL(", ").join(
                sql.SQL("{col} = EXCLUDED.{col}").format(col=sql.Identifier(c)) for c in columns
            ),
        )

        try:
            async with self.database.connection() as conn:
                await conn.execute(query, (user_id, *values))
                await conn.commit()
        except psycopg.Error as e:
            raise wrap_storage_exception(e, "upsert_game_state", user_id, {"fields": columns}) from e

        logger.debug(f"Upserted game state for user {user_id}: {columns}")

    def subscribe(self, user_id: str, callback: ChangeCallback) -> Unsubscribe:
        return self.change_feed.subscribe(user_id, callback)

    async def close(self) -> None:
        await self.change_feed.stop()


class PostgresChangeFeed:
    """
    Fans NOTIFY events out to per-user subscribers

    A single listening connection serves every subscriber in the process.
    It is opened on the first subscription and closed when the last one
    unsubscribes.
    """

    def __init__(self, database: Database, channel: str):
        self.database = database
        self.channel = channel
        self._subscribers: Dict[str, List[ChangeCallback]] = {}
        self._task: Optional[asyncio.Task] = None
        self._conn: Optional[psycopg.AsyncConnection] = None

    def subscribe(self, user_id: str, callback: ChangeCallback) -> Unsubscribe:
        self._subscribers.setdefault(user_id, []).append(callback)
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._listen())

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(user_id, [])
            if callback in callbacks:
                callbacks.remove(callback)
            if not callbacks:
                self._subscribers.pop(user_id, None)
            if not self._subscribers and self._task is not None:
                self._task.cancel()

        return unsubscribe

    async def stop(self) -> None:
        self._subscribers.clear()
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def dispatch(self, user_id: str) -> None:
        """Deliver one change event to the user's subscribers"""
        for callback in list(self._subscribers.get(user_id, [])):
            try:
                await callback(user_id)
            except Exception as e:
                logger.error(f"Change subscriber failed for user {user_id}: {e}", exc_info=True)

    async def _listen(self) -> None:
        try:
            self._conn = await self.database.listen_connection()
            await self._conn.execute(sql.SQL("LISTEN {}").format(sql.Identifier(self.channel)))
            logger.info(f"Listening for game state changes on {self.channel}")

            async for notify in self._conn.notifies():
                await self.dispatch(notify.payload)
        except psycopg.Error as e:
            logger.error(f"Game state change feed stopped: {e}", exc_info=True)
        finally:
            if self._conn is not None:
                await self._conn.close()
                self._conn = None
