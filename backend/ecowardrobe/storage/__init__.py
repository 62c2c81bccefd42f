"""Wardrobe state and its persistence adapters."""
from .persistence import KeyValueStore, InMemoryKeyValueStore, SQLKeyValueStore, create_tables
from .wardrobe_store import (
    ITEMS_KEY,
    LOGS_KEY,
    MOODS_KEY,
    StoreSnapshot,
    UnknownItem,
    WardrobeStore,
)

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SQLKeyValueStore",
    "create_tables",
    "ITEMS_KEY",
    "LOGS_KEY",
    "MOODS_KEY",
    "StoreSnapshot",
    "UnknownItem",
    "WardrobeStore",
]
