"""Tests for evolution chain resolution."""

from __future__ import annotations

import asyncio

from poke_vision.analysis.evolution import EvolutionChainResolver, artwork_url
from poke_vision.clients import PokeAPIClientError, PokemonNotFoundError

SPECIES_URL = "https://pokeapi.co/api/v2/pokemon-species/{}/"


def node(name: str, species_id: int, *children):
    return {
        "species": {"name": name, "url": SPECIES_URL.format(species_id)},
        "evolves_to": list(children),
    }


CHAINS = {
    "https://pokeapi.co/api/v2/evolution-chain/1/": {
        "id": 1,
        "chain": node("bulbasaur", 1, node("ivysaur", 2, node("venusaur", 3))),
    },
    "https://pokeapi.co/api/v2/evolution-chain/67/": {
        "id": 67,
        "chain": node(
            "eevee",
            133,
            node("vaporeon", 134),
            node("jolteon", 135),
            node("flareon", 136),
        ),
    },
    "https://pokeapi.co/api/v2/evolution-chain/99/": {
        "id": 99,
        "chain": node("broken", 500, {"species": {"name": "no-url"}, "evolves_to": []}),
    },
}

SPECIES = {
    1: "https://pokeapi.co/api/v2/evolution-chain/1/",
    2: "https://pokeapi.co/api/v2/evolution-chain/1/",
    133: "https://pokeapi.co/api/v2/evolution-chain/67/",
    500: "https://pokeapi.co/api/v2/evolution-chain/99/",
    501: None,
}


class FakePokeAPI:
    def __init__(self) -> None:
        self.species_calls = []

    def get_species(self, species_id):
        self.species_calls.append(species_id)
        if species_id == 404:
            raise PokemonNotFoundError("no species")
        if species_id == 503:
            raise PokeAPIClientError("service unavailable")
        url = SPECIES[species_id]
        return {"id": species_id, "evolution_chain": {"url": url} if url else None}

    def get_evolution_chain(self, url):
        return CHAINS[url]


def resolve(pokemon_id: int):
    debug = []
    resolver = EvolutionChainResolver(FakePokeAPI(), debug_logger=debug.append)
    return asyncio.run(resolver.resolve(pokemon_id)), debug


def test_linear_chain_is_resolved_from_root_with_artwork() -> None:
    chain, _ = resolve(2)

    assert [n.name for n in chain] == ["bulbasaur", "ivysaur", "venusaur"]
    assert [n.species_id for n in chain] == [1, 2, 3]
    assert chain[2].artwork_url == artwork_url(3)
    assert chain[2].artwork_url.endswith("/official-artwork/3.png")


def test_branching_chain_follows_first_child_only() -> None:
    chain, _ = resolve(133)

    assert [n.name for n in chain] == ["eevee", "vaporeon"]


def test_fetch_failures_yield_empty_chain() -> None:
    for pokemon_id in (404, 503):
        chain, debug = resolve(pokemon_id)
        assert chain == []
        assert any("failed" in line for line in debug)


def test_malformed_graphs_yield_empty_chain() -> None:
    assert resolve(500)[0] == []
    assert resolve(501)[0] == []
