"""Main entry point for the habitflow game state service"""
import asyncio
import logging

from habitflow.cache.ledger_store import RedisLedgerBackend
from habitflow.config import validate_config
from habitflow.db.connection import db
from habitflow.db.game_state_store import PostgresRecordStore
from habitflow.logging_config import setup_logging
from habitflow.observability.metrics import start_metrics_server
from habitflow.services.container import ServiceContainer

setup_logging()

logger = logging.getLogger(__name__)


async def create_container() -> ServiceContainer:
    """Connect the Postgres record store and the Redis ledger"""
    logger.info("Initializing database connection pool...")
    await db.init_pool()

    record_store = PostgresRecordStore(db)
    await record_store.ensure_schema()

    logger.info("Connecting reward ledger...")
    ledger_backend = RedisLedgerBackend()
    await ledger_backend.connect()

    return ServiceContainer(record_store=record_store, ledger_backend=ledger_backend)


async def main() -> None:
    """Main application entry point"""
    container = None
    try:
        logger.info("Validating configuration...")
        validate_config()

        start_metrics_server()
        container = await create_container()

        logger.info("habitflow is running. Press Ctrl+C to stop.")
        await asyncio.Event().wait()

    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
    finally:
        if container:
            logger.info("Closing user sessions...")
            await container.close()
            await container.record_store.close()
            await container.ledger_backend.close()

        logger.info("Closing database connection...")
        await db.close_pool()

        logger.info("Shutdown complete")


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
