"""Persistence collaborators."""

from .kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore

__all__ = ["FileKeyValueStore", "KeyValueStore", "MemoryKeyValueStore"]
