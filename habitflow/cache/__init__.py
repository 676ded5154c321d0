"""Reward ledger storage backends"""
from habitflow.cache.ledger_store import InMemoryLedgerBackend, LedgerBackend, RedisLedgerBackend

__all__ = ["InMemoryLedgerBackend", "LedgerBackend", "RedisLedgerBackend"]
