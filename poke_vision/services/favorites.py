"""Capped, de-duplicated favorites set persisted after every mutation."""

from __future__ import annotations

import json
from enum import Enum
from typing import Callable, Iterator, List, Optional

from ..models import PokemonDetail
from ..storage import KeyValueStore

FAVORITES_KEY = "pokevision.favorites"
FAVORITES_CAPACITY = 6


class FavoritesFullError(RuntimeError):
    """Raised when adding to a favorites set that is already at capacity."""


class ToggleResult(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    REJECTED_FULL = "rejected_full"
    NOT_SAVED = "not_saved"


class FavoritesStore:
    """Ordered favorites, unique by Pokemon id, capped at six members.

    Every mutation rewrites the whole set to storage and takes effect only
    once the write succeeds, so memory never runs ahead of what the next
    session restores.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        items: Optional[List[PokemonDetail]] = None,
        capacity: int = FAVORITES_CAPACITY,
        key: str = FAVORITES_KEY,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.storage = storage
        self.capacity = capacity
        self.key = key
        self._items: List[PokemonDetail] = list(items or [])
        self._debug_logger = debug_logger
        self._dirty = False

    @classmethod
    def restore(
        cls,
        storage: KeyValueStore,
        *,
        capacity: int = FAVORITES_CAPACITY,
        key: str = FAVORITES_KEY,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> "FavoritesStore":
        """Load the persisted set; corrupt or missing data yields an empty store."""

        store = cls(storage, capacity=capacity, key=key, debug_logger=debug_logger)
        try:
            raw = storage.get(key)
        except (OSError, ValueError) as exc:
            store._debug(f"Favorites storage unreadable: {exc}")
            return store
        if not raw:
            return store
        try:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise TypeError("favorites payload is not a list")
            restored = [PokemonDetail.from_dict(entry) for entry in payload]
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            store._debug(f"Discarding corrupt favorites blob: {exc}")
            return store

        seen = set()
        for pokemon in restored:
            if pokemon.id in seen or len(store._items) >= capacity:
                continue
            seen.add(pokemon.id)
            store._items.append(pokemon)
        store._dirty = len(store._items) != len(restored)
        store._debug(f"Restored {len(store._items)} favorites")
        return store

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PokemonDetail]:
        return iter(list(self._items))

    @property
    def items(self) -> List[PokemonDetail]:
        return list(self._items)

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def contains(self, pokemon_id: int) -> bool:
        return any(p.id == pokemon_id for p in self._items)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def toggle(self, pokemon: PokemonDetail) -> ToggleResult:
        if self.contains(pokemon.id):
            if not self.remove(pokemon.id):
                return ToggleResult.NOT_SAVED
            return ToggleResult.REMOVED
        try:
            if not self.add(pokemon):
                return ToggleResult.NOT_SAVED
        except FavoritesFullError:
            return ToggleResult.REJECTED_FULL
        return ToggleResult.ADDED

    def add(self, pokemon: PokemonDetail) -> bool:
        """Append ``pokemon``; ``False`` when it was already present or could not be saved."""

        if self.contains(pokemon.id):
            return False
        if self.is_full:
            raise FavoritesFullError(f"Favorites already hold {self.capacity} Pokemon")
        return self._persist(self._items + [pokemon])

    def remove(self, pokemon_id: int) -> bool:
        remaining = [p for p in self._items if p.id != pokemon_id]
        if len(remaining) == len(self._items):
            return False
        return self._persist(remaining)

    def close(self) -> None:
        """Write back a restored set that was normalized on load; otherwise a no-op."""

        if self._dirty:
            self._persist(self._items)

    def _persist(self, items: List[PokemonDetail]) -> bool:
        """Write ``items`` and adopt them only once storage accepted the blob."""

        blob = json.dumps([p.to_dict() for p in items])
        try:
            self.storage.set(self.key, blob)
        except OSError as exc:
            self._debug(f"Could not persist favorites, keeping previous set: {exc}")
            return False
        self._items = list(items)
        self._dirty = False
        self._debug(f"Persisted {len(self._items)} favorites")
        return True
