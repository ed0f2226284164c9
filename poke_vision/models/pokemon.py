"""Core dataclasses shared across the catalog engine."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from ..clients.pokeapi import PokeAPIPayloadError

_ORDINAL_RE = re.compile(r"/(\d+)/?$")


class PokemonType(str, Enum):
    """Elemental types, in the order used to break effectiveness ties."""

    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"

    @classmethod
    def parse(cls, value: Union[str, "PokemonType"]) -> Optional["PokemonType"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class Category(str, Enum):
    """Curated roster groups served by the category catalog."""

    LEGENDARY = "legendary"
    MYTHICAL = "mythical"
    BABY = "baby"


def parse_ordinal(url: str) -> Optional[int]:
    """Return the trailing numeric id of a PokeAPI resource url."""

    match = _ORDINAL_RE.search(url or "")
    return int(match.group(1)) if match else None


@dataclass(frozen=True, slots=True)
class PokemonSummary:
    """Roster row as returned by list endpoints."""

    name: str
    url: str

    @property
    def ordinal(self) -> Optional[int]:
        return parse_ordinal(self.url)


@dataclass(frozen=True, slots=True)
class TypeSlot:
    slot: int
    type: str


@dataclass(frozen=True, slots=True)
class BaseStat:
    name: str
    base_stat: int
    effort: int = 0


@dataclass(frozen=True, slots=True)
class Sprites:
    front_default: Optional[str] = None
    front_shiny: Optional[str] = None
    artwork_default: Optional[str] = None
    artwork_shiny: Optional[str] = None


@dataclass(frozen=True, slots=True)
class PokemonDetail:
    """Full entity record, fetched lazily and never mutated."""

    id: int
    name: str
    types: Tuple[TypeSlot, ...] = ()
    stats: Tuple[BaseStat, ...] = ()
    sprites: Sprites = field(default_factory=Sprites)
    height: int = 0
    weight: int = 0

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PokemonDetail":
        """Build a detail record from a raw ``pokemon/{name}`` payload."""

        if not isinstance(payload, dict):
            raise PokeAPIPayloadError("Pokemon payload is not an object")
        try:
            pokemon_id = int(payload["id"])
            name = str(payload["name"])
        except (KeyError, TypeError, ValueError) as exc:
            raise PokeAPIPayloadError(f"Pokemon payload missing id/name: {exc}") from exc

        try:
            types = sorted(
                (
                    TypeSlot(slot=int(entry.get("slot", 0)), type=(entry.get("type") or {}).get("name", ""))
                    for entry in payload.get("types", []) or []
                ),
                key=lambda t: t.slot,
            )
            stats = [
                BaseStat(
                    name=(entry.get("stat") or {}).get("name", ""),
                    base_stat=int(entry.get("base_stat", 0)),
                    effort=int(entry.get("effort", 0)),
                )
                for entry in payload.get("stats", []) or []
            ]
            raw_sprites = payload.get("sprites") or {}
            artwork = ((raw_sprites.get("other") or {}).get("official-artwork")) or {}
            sprites = Sprites(
                front_default=raw_sprites.get("front_default"),
                front_shiny=raw_sprites.get("front_shiny"),
                artwork_default=artwork.get("front_default"),
                artwork_shiny=artwork.get("front_shiny"),
            )
            height = int(payload.get("height") or 0)
            weight = int(payload.get("weight") or 0)
        except (AttributeError, TypeError, ValueError) as exc:
            raise PokeAPIPayloadError(f"Malformed payload for {name}: {exc}") from exc

        return cls(
            id=pokemon_id,
            name=name,
            types=tuple(types),
            stats=tuple(stats),
            sprites=sprites,
            height=height,
            weight=weight,
        )

    @property
    def type_names(self) -> List[str]:
        return [slot.type for slot in self.types]

    @property
    def base_stats(self) -> Dict[str, int]:
        return {stat.name: stat.base_stat for stat in self.stats}

    def artwork(self, *, shiny: bool = False) -> Optional[str]:
        if shiny:
            return self.sprites.artwork_shiny or self.sprites.front_shiny
        return self.sprites.artwork_default or self.sprites.front_default

    def radar_stats(self) -> List[Dict[str, Any]]:
        """Stat labels and values shaped for a radar chart."""

        return [
            {"subject": stat.name.replace("special-", "S.").upper(), "value": stat.base_stat}
            for stat in self.stats
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "types": [{"slot": t.slot, "type": t.type} for t in self.types],
            "stats": [
                {"name": s.name, "base_stat": s.base_stat, "effort": s.effort} for s in self.stats
            ],
            "sprites": {
                "front_default": self.sprites.front_default,
                "front_shiny": self.sprites.front_shiny,
                "artwork_default": self.sprites.artwork_default,
                "artwork_shiny": self.sprites.artwork_shiny,
            },
            "height": self.height,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PokemonDetail":
        """Inverse of :meth:`to_dict`; raises ``KeyError``/``TypeError`` on bad shapes."""

        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            types=tuple(TypeSlot(slot=int(t["slot"]), type=str(t["type"])) for t in data.get("types", [])),
            stats=tuple(
                BaseStat(name=str(s["name"]), base_stat=int(s["base_stat"]), effort=int(s.get("effort", 0)))
                for s in data.get("stats", [])
            ),
            sprites=Sprites(**(data.get("sprites") or {})),
            height=int(data.get("height") or 0),
            weight=int(data.get("weight") or 0),
        )


@dataclass(frozen=True, slots=True)
class StatProjection:
    """Projected value of one stat for the current simulator inputs."""

    stat: str
    base: int
    value: int
    effort: int = 0


@dataclass(frozen=True, slots=True)
class EvolutionNode:
    name: str
    species_id: int
    artwork_url: str


@dataclass(frozen=True, slots=True)
class AllPokemon:
    """Unfiltered, incrementally paged roster."""


@dataclass(frozen=True, slots=True)
class ByType:
    type: PokemonType


@dataclass(frozen=True, slots=True)
class ByCategory:
    category: Category


FilterMode = Union[AllPokemon, ByType, ByCategory]


@dataclass(slots=True)
class RosterState:
    """Observable roster state; replaced wholesale on every filter change."""

    filter_mode: FilterMode = field(default_factory=AllPokemon)
    roster: List[PokemonSummary] = field(default_factory=list)
    search: str = ""
    offset: int = 0
    has_more: bool = True
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def is_paged(self) -> bool:
        return isinstance(self.filter_mode, AllPokemon)
