"""Game state persistence"""
from habitflow.db.store import InMemoryRecordStore, RecordStore

__all__ = ["InMemoryRecordStore", "RecordStore"]
