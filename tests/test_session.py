"""Tests for the session controller state machine."""

from __future__ import annotations

import asyncio
import threading

from poke_vision.analysis.evolution import EvolutionChainResolver
from poke_vision.clients import PokeAPIClientError, PokemonNotFoundError
from poke_vision.models import AllPokemon, ByCategory, ByType, Category, PokemonType
from poke_vision.services import FavoritesStore, RosterLoader, SessionController, ToggleResult
from poke_vision.storage import FileKeyValueStore, MemoryKeyValueStore

POKEMON_URL = "https://pokeapi.co/api/v2/pokemon/{}/"
SPECIES_URL = "https://pokeapi.co/api/v2/pokemon-species/{}/"
CHAIN_URL = "https://pokeapi.co/api/v2/evolution-chain/{}/"


def pokemon_payload(pokemon_id: int, name: str, *types: str):
    return {
        "id": pokemon_id,
        "name": name,
        "height": 7,
        "weight": 69,
        "types": [{"slot": i + 1, "type": {"name": t}} for i, t in enumerate(types)],
        "stats": [{"base_stat": 45, "effort": 0, "stat": {"name": "hp"}}],
        "sprites": {},
    }


class FakePokeAPI:
    """In-memory PokeAPI with optional gates to hold calls in flight."""

    def __init__(self, total: int = 60) -> None:
        self.names = [f"mon-{i}" for i in range(1, total + 1)]
        self.calls = []
        self.fail_list = False
        self.list_gate = threading.Event()
        self.list_gate.set()
        self.detail_gate = threading.Event()
        self.detail_gate.set()
        self.pokemon = {
            "bulbasaur": pokemon_payload(1, "bulbasaur", "grass", "poison"),
            "ivysaur": pokemon_payload(2, "ivysaur", "grass", "poison"),
            "1": pokemon_payload(1, "bulbasaur", "grass", "poison"),
            "2": pokemon_payload(2, "ivysaur", "grass", "poison"),
            "charmander": pokemon_payload(4, "charmander", "fire"),
            "missingno": pokemon_payload(999, "missingno", "normal"),
        }
        self.species = {1: 1, 2: 1, 4: 2}
        self.chains = {
            CHAIN_URL.format(1): {
                "chain": {
                    "species": {"name": "bulbasaur", "url": SPECIES_URL.format(1)},
                    "evolves_to": [
                        {
                            "species": {"name": "ivysaur", "url": SPECIES_URL.format(2)},
                            "evolves_to": [
                                {"species": {"name": "venusaur", "url": SPECIES_URL.format(3)}, "evolves_to": []}
                            ],
                        }
                    ],
                }
            },
            CHAIN_URL.format(2): {
                "chain": {"species": {"name": "charmander", "url": SPECIES_URL.format(4)}, "evolves_to": []}
            },
        }

    def list_pokemon(self, limit, offset):
        self.calls.append(("list", limit, offset))
        self.list_gate.wait(timeout=5)
        if self.fail_list:
            raise PokeAPIClientError("connection reset")
        return [{"name": n, "url": POKEMON_URL.format(i + 1)} for i, n in enumerate(self.names)][
            offset : offset + limit
        ]

    def get_type_members(self, type_name):
        self.calls.append(("type", type_name))
        return [{"name": "charmander", "url": POKEMON_URL.format(4)}, {"name": "vulpix", "url": POKEMON_URL.format(37)}]

    def get_pokemon(self, name_or_id):
        self.calls.append(("pokemon", name_or_id))
        self.detail_gate.wait(timeout=5)
        try:
            return self.pokemon[str(name_or_id).lower()]
        except KeyError:
            raise PokemonNotFoundError(str(name_or_id))

    def get_species(self, species_id):
        if species_id not in self.species:
            raise PokemonNotFoundError(f"species {species_id}")
        return {"evolution_chain": {"url": CHAIN_URL.format(self.species[species_id])}}

    def get_evolution_chain(self, url):
        return self.chains[url]


def make_session(api: FakePokeAPI, **kwargs) -> SessionController:
    return SessionController(
        pokeapi_client=api,
        roster_loader=RosterLoader(api, page_size=24),
        evolution_resolver=EvolutionChainResolver(api),
        **kwargs,
    )


def test_paging_until_a_short_page_ends_the_roster() -> None:
    api = FakePokeAPI(total=30)
    session = make_session(api)

    async def scenario():
        await session.start()
        assert len(session.state.roster) == 24
        assert session.state.has_more is True
        assert await session.load_more() is True
        assert await session.load_more() is False

    asyncio.run(scenario())

    assert len(session.state.roster) == 30
    assert session.state.has_more is False
    assert [c for c in api.calls if c[0] == "list"] == [("list", 24, 0), ("list", 24, 24)]


def test_empty_page_stops_paging_without_touching_roster() -> None:
    api = FakePokeAPI(total=24)
    session = make_session(api)

    async def scenario():
        await session.start()
        assert session.state.has_more is True
        return await session.load_more()

    assert asyncio.run(scenario()) is False
    assert len(session.state.roster) == 24
    assert session.state.offset == 24
    assert session.state.has_more is False


def test_filter_round_trip_restores_fresh_first_page() -> None:
    api = FakePokeAPI(total=60)
    session = make_session(api)

    async def scenario():
        await session.start()
        await session.load_more()
        assert len(session.state.roster) == 48
        session.set_search("mon-1")

        await session.set_filter(ByType(PokemonType.FIRE))
        assert [p.name for p in session.state.roster] == ["charmander", "vulpix"]
        assert session.state.search == ""
        assert session.state.has_more is False
        assert await session.load_more() is False

        await session.set_filter(AllPokemon())

    asyncio.run(scenario())

    assert [p.name for p in session.state.roster] == [f"mon-{i}" for i in range(1, 25)]
    assert session.state.offset == 24
    assert session.state.has_more is True
    assert api.calls.count(("list", 24, 0)) == 2


def test_category_filter_loads_complete_list_eagerly() -> None:
    session = make_session(FakePokeAPI())

    asyncio.run(session.set_filter(ByCategory(Category.MYTHICAL)))

    assert session.state.roster[0].name == "mew"
    assert session.state.has_more is False
    assert session.state.is_loading is False


def test_search_is_a_view_over_the_loaded_roster() -> None:
    session = make_session(FakePokeAPI(total=30))
    asyncio.run(session.start())

    session.set_search("MON-2")
    assert [p.name for p in session.visible] == ["mon-2", "mon-20", "mon-21", "mon-22", "mon-23", "mon-24"]
    session.set_search("mon-23")
    session.set_search("")
    assert len(session.visible) == 24


def test_failed_page_load_keeps_roster_and_clears_loading() -> None:
    api = FakePokeAPI(total=60)
    session = make_session(api)

    async def scenario():
        await session.start()
        api.fail_list = True
        return await session.load_more()

    assert asyncio.run(scenario()) is False
    assert len(session.state.roster) == 24
    assert session.state.is_loading is False
    assert session.state.error == "connection reset"
    assert session.state.offset == 24


def test_load_more_is_dropped_while_a_load_is_in_flight() -> None:
    api = FakePokeAPI(total=100)
    session = make_session(api)

    async def scenario():
        await session.start()
        api.list_gate.clear()
        first = asyncio.create_task(session.load_more())
        await asyncio.sleep(0)
        assert session.state.is_loading is True
        second = await session.load_more()
        api.list_gate.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert first is True
    assert second is False
    assert [c for c in api.calls if c[0] == "list"] == [("list", 24, 0), ("list", 24, 24)]
    assert len(session.state.roster) == 48


def test_stale_page_is_discarded_after_filter_switch() -> None:
    api = FakePokeAPI(total=100)
    session = make_session(api)

    async def scenario():
        await session.start()
        api.list_gate.clear()
        pending = asyncio.create_task(session.load_more())
        await asyncio.sleep(0)
        await session.set_filter(ByType(PokemonType.FIRE))
        api.list_gate.set()
        return await pending

    assert asyncio.run(scenario()) is False
    assert [p.name for p in session.state.roster] == ["charmander", "vulpix"]
    assert session.state.is_loading is False


def test_select_resolves_detail_and_chain() -> None:
    session = make_session(FakePokeAPI())

    detail = asyncio.run(session.select("Ivysaur"))

    assert detail.name == "ivysaur"
    assert session.selected == detail
    assert [n.name for n in session.chain] == ["bulbasaur", "ivysaur", "venusaur"]


def test_selecting_a_chain_node_reroots_the_selection() -> None:
    session = make_session(FakePokeAPI())

    async def scenario():
        await session.select("ivysaur")
        return await session.select_evolution_node(session.chain[0])

    detail = asyncio.run(scenario())

    assert detail.name == "bulbasaur"
    assert session.chain[0].name == "bulbasaur"


def test_failed_chain_leaves_previous_chain_untouched() -> None:
    session = make_session(FakePokeAPI())

    async def scenario():
        await session.select("bulbasaur")
        return await session.select("missingno")

    detail = asyncio.run(scenario())

    assert detail.name == "missingno"
    assert [n.name for n in session.chain] == ["bulbasaur", "ivysaur", "venusaur"]


def test_unknown_pokemon_selection_changes_nothing() -> None:
    session = make_session(FakePokeAPI())

    async def scenario():
        await session.select("charmander")
        return await session.select("nobody")

    assert asyncio.run(scenario()) is None
    assert session.selected.name == "charmander"
    assert [n.name for n in session.chain] == ["charmander"]


def test_second_selection_is_dropped_while_switching() -> None:
    api = FakePokeAPI()
    session = make_session(api)

    async def scenario():
        api.detail_gate.clear()
        first = asyncio.create_task(session.select("bulbasaur"))
        await asyncio.sleep(0)
        second = await session.select("charmander")
        api.detail_gate.set()
        return await first, second

    first, second = asyncio.run(scenario())

    assert first.name == "bulbasaur"
    assert second is None
    assert [c for c in api.calls if c[0] == "pokemon"] == [("pokemon", "bulbasaur")]


def test_clearing_selection_discards_in_flight_result() -> None:
    api = FakePokeAPI()
    session = make_session(api)

    async def scenario():
        api.detail_gate.clear()
        pending = asyncio.create_task(session.select("bulbasaur"))
        await asyncio.sleep(0)
        session.clear_selection()
        api.detail_gate.set()
        return await pending

    assert asyncio.run(scenario()) is None
    assert session.selected is None
    assert session.chain == []


def test_details_are_cached_per_name() -> None:
    api = FakePokeAPI()
    session = make_session(api)

    async def scenario():
        first = await session.get_detail("bulbasaur")
        second = await session.get_detail("BULBASAUR")
        return first, second

    first, second = asyncio.run(scenario())

    assert first is second
    assert api.calls == [("pokemon", "bulbasaur")]


def test_analytics_and_favorites_through_the_session() -> None:
    storage = MemoryKeyValueStore()
    session = make_session(FakePokeAPI(), favorites=FavoritesStore(storage))
    detail = asyncio.run(session.get_detail("charmander"))

    matchups = session.matchups(detail)
    assert list(matchups)[:3] == [PokemonType.WATER, PokemonType.GROUND, PokemonType.ROCK]
    assert session.project(detail, level=50)[0].value == 120

    assert session.toggle_favorite(detail) is ToggleResult.ADDED
    assert session.favorites.contains(4)
    session.close()
    assert storage.get("pokevision.favorites") is not None


class FailingAdvisor:
    def analyze_pokemon(self, pokemon):
        raise RuntimeError("quota exceeded")


class CannedAdvisor:
    def analyze_pokemon(self, pokemon):
        return {"strategy": f"Lead with {pokemon.name}", "strengths": ["speed"], "funFact": "..."}


def test_advice_is_best_effort() -> None:
    detail_session = make_session(FakePokeAPI())
    detail = asyncio.run(detail_session.get_detail("charmander"))

    assert asyncio.run(detail_session.advise(detail)) is None
    failing = make_session(FakePokeAPI(), advisor=FailingAdvisor())
    assert asyncio.run(failing.advise(detail)) is None
    canned = make_session(FakePokeAPI(), advisor=CannedAdvisor())
    assert asyncio.run(canned.advise(detail))["strategy"] == "Lead with charmander"


def test_restored_empty_favorites_are_kept_and_written(tmp_path) -> None:
    favorites = FavoritesStore.restore(FileKeyValueStore(tmp_path))
    session = make_session(FakePokeAPI(), favorites=favorites)
    assert session.favorites is favorites

    detail = asyncio.run(session.get_detail("charmander"))
    assert session.toggle_favorite(detail) is ToggleResult.ADDED
    session.close()

    restored = FavoritesStore.restore(FileKeyValueStore(tmp_path))
    assert [p.name for p in restored] == ["charmander"]


def test_malformed_detail_payload_leaves_selection_unchanged() -> None:
    api = FakePokeAPI()
    api.pokemon["broken"] = {"id": 7, "name": "broken", "stats": [{"stat": {"name": "hp"}, "base_stat": None}]}
    api.pokemon["odd-types"] = {"id": 8, "name": "odd-types", "types": ["fire"]}
    session = make_session(api)

    async def scenario():
        await session.select("charmander")
        return [await session.select("broken"), await session.select("odd-types")]

    assert asyncio.run(scenario()) == [None, None]
    assert session.selected.name == "charmander"
    assert [n.name for n in session.chain] == ["charmander"]
    assert asyncio.run(session.get_detail("broken")) is None


def test_load_pages_tops_up_to_the_requested_count() -> None:
    api = FakePokeAPI(total=100)
    session = make_session(api)

    async def scenario():
        await session.start()
        await session.load_pages(2)
        await session.load_pages(2)
        first = len(session.state.roster)
        appended = await session.load_pages(3)
        return first, appended

    first, appended = asyncio.run(scenario())
    assert first == 48
    assert appended == 1
    assert len(session.state.roster) == 72
    assert [c for c in api.calls if c[0] == "list"] == [("list", 24, 0), ("list", 24, 24), ("list", 24, 48)]
