"""External data clients used by the catalog engine."""

from .pokeapi import (
    PokeAPIClient,
    PokeAPIClientError,
    PokeAPIPayloadError,
    PokemonNotFoundError,
)

__all__ = [
    "PokeAPIClient",
    "PokeAPIClientError",
    "PokeAPIPayloadError",
    "PokemonNotFoundError",
]
