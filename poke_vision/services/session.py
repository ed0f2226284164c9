"""Session controller composing roster, analytics, lineage and favorites."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..analysis import EvolutionChainResolver, project_stats
from ..clients import PokeAPIClient, PokeAPIClientError
from ..data.type_chart import compute_multipliers
from ..models import (
    AllPokemon,
    EvolutionNode,
    FilterMode,
    PokemonDetail,
    PokemonSummary,
    PokemonType,
    RosterState,
    StatProjection,
)
from ..storage import MemoryKeyValueStore
from .favorites import FavoritesStore, ToggleResult
from .roster import RosterLoader, filter_by_search, has_more_pages


class SessionController:
    """Owns the observable state of one browsing session.

    Roster loads carry an epoch and evolution selections carry a token;
    a result whose epoch or token is no longer current is dropped on
    arrival instead of being applied.
    """

    def __init__(
        self,
        *,
        pokeapi_client: Optional[PokeAPIClient] = None,
        roster_loader: Optional[RosterLoader] = None,
        evolution_resolver: Optional[EvolutionChainResolver] = None,
        favorites: Optional[FavoritesStore] = None,
        advisor: Optional[Any] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.pokeapi = pokeapi_client if pokeapi_client is not None else PokeAPIClient()
        self.roster_loader = (
            roster_loader if roster_loader is not None else RosterLoader(self.pokeapi, debug_logger=debug_logger)
        )
        self.evolution = (
            evolution_resolver
            if evolution_resolver is not None
            else EvolutionChainResolver(self.pokeapi, debug_logger=debug_logger)
        )
        # An empty FavoritesStore is falsy, so compare against None.
        self.favorites = (
            favorites if favorites is not None else FavoritesStore(MemoryKeyValueStore(), debug_logger=debug_logger)
        )
        self.advisor = advisor
        self._debug_logger = debug_logger

        self.state = RosterState()
        self.selected: Optional[PokemonDetail] = None
        self.chain: List[EvolutionNode] = []
        self._details: Dict[str, PokemonDetail] = {}
        self._epoch = 0
        self._selection_token = 0
        self._switching = False

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    async def __aenter__(self) -> "SessionController":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------
    @property
    def page_size(self) -> int:
        return self.roster_loader.page_size

    @property
    def visible(self) -> List[PokemonSummary]:
        """Search view, always recomputed from the full loaded roster."""

        return filter_by_search(self.state.roster, self.state.search)

    async def start(self) -> None:
        await self._reload(AllPokemon())

    async def set_filter(self, mode: FilterMode) -> None:
        if mode == self.state.filter_mode and (self.state.roster or self.state.is_loading):
            return
        await self._reload(mode)

    def set_search(self, text: str) -> None:
        self.state.search = text or ""

    async def load_more(self) -> bool:
        """Append the next page; returns ``True`` when a page was applied."""

        state = self.state
        if state.is_loading or not state.is_paged or not state.has_more:
            return False

        epoch = self._epoch
        state.is_loading = True
        try:
            page = await self.roster_loader.load_page(state.offset, self.page_size)
        except PokeAPIClientError as exc:
            if epoch == self._epoch:
                state.is_loading = False
                state.error = str(exc) or "load failed"
            self._debug(f"Page load at offset {state.offset} failed: {exc}")
            return False

        if epoch != self._epoch:
            self._debug(f"Discarding stale page for epoch {epoch}")
            return False
        if page:
            state.roster = state.roster + page
            state.offset += self.page_size
        state.has_more = has_more_pages(page, self.page_size)
        state.is_loading = False
        state.error = None
        return bool(page)

    async def load_pages(self, pages: int) -> int:
        """Page forward until the roster holds ``pages`` pages or runs out.

        Idempotent for repeated calls with the same count; returns the
        number of pages appended by this call.
        """

        target = max(pages, 1) * self.page_size
        appended = 0
        while self.state.is_paged and len(self.state.roster) < target:
            if not await self.load_more():
                break
            appended += 1
        return appended

    async def _reload(self, mode: FilterMode) -> None:
        self._epoch += 1
        epoch = self._epoch
        paged = isinstance(mode, AllPokemon)
        state = RosterState(filter_mode=mode, has_more=paged, is_loading=True)
        self.state = state

        try:
            if paged:
                roster = await self.roster_loader.load_page(0, self.page_size)
            else:
                roster = await self.roster_loader.load_filtered(mode)
        except (PokeAPIClientError, ValueError) as exc:
            if epoch == self._epoch:
                state.is_loading = False
                state.error = str(exc) or "load failed"
            self._debug(f"Roster load for {mode!r} failed: {exc}")
            return

        if epoch != self._epoch:
            self._debug(f"Discarding stale roster for {mode!r}")
            return
        state.roster = list(roster)
        if paged:
            state.offset = self.page_size
            state.has_more = has_more_pages(roster, self.page_size)
        else:
            state.has_more = False
        state.is_loading = False
        self._debug(f"Loaded {len(roster)} entries for {mode!r}")

    # ------------------------------------------------------------------
    # Details and lineage
    # ------------------------------------------------------------------
    async def get_detail(self, name_or_id: Union[str, int]) -> Optional[PokemonDetail]:
        key = str(name_or_id).strip().lower()
        cached = self._details.get(key)
        if cached is not None:
            return cached
        try:
            payload = await asyncio.to_thread(self.pokeapi.get_pokemon, name_or_id)
            detail = PokemonDetail.from_payload(payload)
        except PokeAPIClientError as exc:
            self._debug(f"Detail fetch for {name_or_id} failed: {exc}")
            return None
        self._details[key] = detail
        self._details[detail.name.lower()] = detail
        self._details[str(detail.id)] = detail
        return detail

    async def select(self, name_or_id: Union[str, int]) -> Optional[PokemonDetail]:
        """Fetch a Pokemon and its lineage; dropped while another selection runs."""

        if self._switching:
            self._debug(f"Selection of {name_or_id} dropped; another selection is in flight")
            return None
        self._switching = True
        self._selection_token += 1
        token = self._selection_token
        try:
            detail = await self.get_detail(name_or_id)
            if detail is None:
                return None
            chain = await self.evolution.resolve(detail.id)
        finally:
            self._switching = False

        if token != self._selection_token:
            self._debug(f"Discarding stale selection of {name_or_id}")
            return None
        self.selected = detail
        if chain:
            self.chain = chain
        return detail

    async def select_evolution_node(self, node: EvolutionNode) -> Optional[PokemonDetail]:
        return await self.select(node.species_id)

    def clear_selection(self) -> None:
        self._selection_token += 1
        self.selected = None
        self.chain = []

    # ------------------------------------------------------------------
    # Derived analytics
    # ------------------------------------------------------------------
    def matchups(self, pokemon: PokemonDetail) -> Dict[PokemonType, float]:
        return compute_multipliers(pokemon.type_names)

    def project(
        self,
        pokemon: PokemonDetail,
        level: int = 50,
        evs: Optional[Mapping[str, int]] = None,
        nature: Optional[str] = None,
    ) -> List[StatProjection]:
        return project_stats(pokemon, level=level, evs=evs, nature=nature)

    async def advise(self, pokemon: PokemonDetail) -> Optional[Dict[str, Any]]:
        if self.advisor is None:
            self._debug("Advisory client unavailable; skipping commentary")
            return None
        try:
            return await asyncio.to_thread(self.advisor.analyze_pokemon, pokemon)
        except Exception as exc:
            self._debug(f"Advisory commentary failed: {exc}")
            return None

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------
    def toggle_favorite(self, pokemon: PokemonDetail) -> ToggleResult:
        result = self.favorites.toggle(pokemon)
        self._debug(f"Favorite toggle for {pokemon.name}: {result.value}")
        return result

    def close(self) -> None:
        self.favorites.close()
