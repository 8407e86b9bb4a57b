"""Check record persistence."""

from skillcheck.persistence.record_store import InMemoryRecordStore, JsonRecordStore, RecordStore

__all__ = ["InMemoryRecordStore", "JsonRecordStore", "RecordStore"]
