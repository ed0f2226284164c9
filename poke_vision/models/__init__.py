"""Shared dataclasses for the catalog engine."""

from .pokemon import (
    AllPokemon,
    BaseStat,
    ByCategory,
    ByType,
    Category,
    EvolutionNode,
    FilterMode,
    PokemonDetail,
    PokemonSummary,
    PokemonType,
    RosterState,
    Sprites,
    StatProjection,
    TypeSlot,
    parse_ordinal,
)

__all__ = [
    "AllPokemon",
    "BaseStat",
    "ByCategory",
    "ByType",
    "Category",
    "EvolutionNode",
    "FilterMode",
    "PokemonDetail",
    "PokemonSummary",
    "PokemonType",
    "RosterState",
    "Sprites",
    "StatProjection",
    "TypeSlot",
    "parse_ordinal",
]
