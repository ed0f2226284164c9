"""Evolution lineage resolution on top of PokeAPI species data."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Set

from ..clients.pokeapi import PokeAPIClient, PokeAPIClientError, PokeAPIPayloadError
from ..models import EvolutionNode, parse_ordinal

ARTWORK_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/other/official-artwork/{id}.png"
)


def artwork_url(species_id: int) -> str:
    return ARTWORK_URL_TEMPLATE.format(id=species_id)


def linearize_chain(chain: Dict[str, Any]) -> List[EvolutionNode]:
    """Walk a lineage graph from its root, always following the first child.

    Raises ``PokeAPIPayloadError`` when a node is malformed or the graph
    revisits a species.
    """

    nodes: List[EvolutionNode] = []
    seen: Set[int] = set()
    current: Optional[Dict[str, Any]] = chain
    while current is not None:
        if not isinstance(current, dict):
            raise PokeAPIPayloadError("evolution node is not an object")
        species = current.get("species") or {}
        name = species.get("name")
        species_id = parse_ordinal(species.get("url", ""))
        if not name or species_id is None:
            raise PokeAPIPayloadError(f"evolution node without species name/id: {species!r}")
        if species_id in seen:
            raise PokeAPIPayloadError(f"evolution graph revisits species {species_id}")
        seen.add(species_id)
        nodes.append(EvolutionNode(name=name, species_id=species_id, artwork_url=artwork_url(species_id)))

        children = current.get("evolves_to") or []
        if not isinstance(children, list):
            raise PokeAPIPayloadError("evolves_to is not a list")
        current = children[0] if children else None
    return nodes


class EvolutionChainResolver:
    """Resolves a single linear evolution path for a Pokemon id."""

    def __init__(
        self,
        pokeapi_client: Optional[PokeAPIClient] = None,
        *,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.pokeapi = pokeapi_client or PokeAPIClient()
        self._debug_logger = debug_logger

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    async def resolve(self, pokemon_id: int) -> List[EvolutionNode]:
        """Return the resolved chain, or ``[]`` on any failure."""

        try:
            species = await asyncio.to_thread(self.pokeapi.get_species, pokemon_id)
            chain_url = (species.get("evolution_chain") or {}).get("url")
            if not chain_url:
                raise PokeAPIPayloadError(f"species {pokemon_id} has no evolution_chain url")
            payload = await asyncio.to_thread(self.pokeapi.get_evolution_chain, chain_url)
            if not payload.get("chain"):
                raise PokeAPIPayloadError(f"evolution chain {chain_url} has no root")
            nodes = linearize_chain(payload["chain"])
        except PokeAPIClientError as exc:
            self._debug(f"Evolution chain for {pokemon_id} failed: {exc}")
            return []
        except Exception as exc:  # pragma: no cover - unexpected payload shapes
            self._debug(f"Evolution chain for {pokemon_id} failed unexpectedly: {exc}")
            return []
        self._debug(f"Resolved evolution chain for {pokemon_id}: {[n.name for n in nodes]}")
        return nodes
