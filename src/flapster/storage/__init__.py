"""Persistent key-value storage for scores."""

from flapster.storage.store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    load_best_score,
    parse_score,
)

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "load_best_score",
    "parse_score",
]
