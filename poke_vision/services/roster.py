"""Roster acquisition: paged, by type, or by curated category."""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..clients import PokeAPIClient, PokeAPIPayloadError
from ..data.categories import CategoryCatalog
from ..models import (
    AllPokemon,
    ByCategory,
    ByType,
    Category,
    FilterMode,
    PokemonSummary,
    PokemonType,
)

DEFAULT_PAGE_SIZE = 24


def has_more_pages(page: List[PokemonSummary], limit: int) -> bool:
    """A page shorter than requested (or empty) marks the end of the roster."""

    return bool(page) and len(page) >= limit


def filter_by_search(roster: Iterable[PokemonSummary], text: str) -> List[PokemonSummary]:
    needle = (text or "").strip().lower()
    if not needle:
        return list(roster)
    return [entry for entry in roster if needle in entry.name.lower()]


def parse_filter(type_name: Optional[str] = None, category: Optional[str] = None) -> FilterMode:
    """Map optional type/category arguments to a filter mode; raises ``ValueError``."""

    if type_name and category:
        raise ValueError("Pass either a type or a category, not both")
    if type_name:
        parsed = PokemonType.parse(type_name)
        if parsed is None:
            raise ValueError(f"Unknown type: {type_name}")
        return ByType(parsed)
    if category:
        return ByCategory(Category(category.strip().lower()))
    return AllPokemon()


def _to_summaries(rows: Iterable[Dict[str, str]]) -> List[PokemonSummary]:
    summaries: List[PokemonSummary] = []
    for row in rows:
        try:
            summaries.append(PokemonSummary(name=str(row["name"]), url=str(row.get("url", ""))))
        except (KeyError, TypeError, AttributeError) as exc:
            raise PokeAPIPayloadError(f"Malformed roster row {row!r}") from exc
    return summaries


class RosterLoader:
    """Fetches roster rows; blocking HTTP runs in a worker thread."""

    def __init__(
        self,
        pokeapi_client: Optional[PokeAPIClient] = None,
        category_catalog: Optional[CategoryCatalog] = None,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.pokeapi = pokeapi_client or PokeAPIClient()
        self.categories = category_catalog or CategoryCatalog()
        self.page_size = page_size
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    async def load_page(self, offset: int, limit: Optional[int] = None) -> List[PokemonSummary]:
        limit = limit or self.page_size
        self._debug(f"Loading roster page offset={offset} limit={limit}")
        rows = await asyncio.to_thread(self.pokeapi.list_pokemon, limit, offset)
        return _to_summaries(rows)

    async def load_by_type(self, type_: Union[str, PokemonType]) -> List[PokemonSummary]:
        parsed = PokemonType.parse(type_)
        if parsed is None:
            raise ValueError(f"Unknown type: {type_!r}")
        self._debug(f"Loading roster for type {parsed.value}")
        rows = await asyncio.to_thread(self.pokeapi.get_type_members, parsed.value)
        return _to_summaries(rows)

    async def load_by_category(self, category: Union[str, Category]) -> List[PokemonSummary]:
        self._debug(f"Loading roster for category {category}")
        return await asyncio.to_thread(self.categories.members, category)

    async def load_filtered(self, mode: FilterMode) -> List[PokemonSummary]:
        """Complete result set for a non-paged filter mode."""

        if isinstance(mode, ByType):
            return await self.load_by_type(mode.type)
        if isinstance(mode, ByCategory):
            return await self.load_by_category(mode.category)
        if isinstance(mode, AllPokemon):
            raise ValueError("AllPokemon is loaded page by page")
        raise TypeError(f"Unsupported filter mode: {mode!r}")
