"""Static type chart utilities for battle effectiveness calculations."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Union

from ..models import PokemonType

TypeLike = Union[str, PokemonType]

# attacker -> defender -> multiplier; absent pairs are neutral (1x).
_RAW_CHART: dict[str, dict[str, float]] = {
    "normal": {"rock": 0.5, "ghost": 0, "steel": 0.5},
    "fire": {
        "fire": 0.5, "water": 0.5, "grass": 2, "ice": 2,
        "bug": 2, "rock": 0.5, "dragon": 0.5, "steel": 2,
    },
    "water": {"fire": 2, "water": 0.5, "grass": 0.5, "ground": 2, "rock": 2, "dragon": 0.5},
    "electric": {"water": 2, "electric": 0.5, "grass": 0.5, "ground": 0, "flying": 2, "dragon": 0.5},
    "grass": {
        "fire": 0.5, "water": 2, "grass": 0.5, "poison": 0.5, "ground": 2,
        "flying": 0.5, "bug": 0.5, "rock": 2, "dragon": 0.5, "steel": 0.5,
    },
    "ice": {
        "fire": 0.5, "water": 0.5, "grass": 2, "ice": 0.5,
        "ground": 2, "flying": 2, "dragon": 2, "steel": 0.5,
    },
    "fighting": {
        "normal": 2, "ice": 2, "poison": 0.5, "flying": 0.5, "psychic": 0.5, "bug": 0.5,
        "rock": 2, "ghost": 0, "dark": 2, "steel": 2, "fairy": 0.5,
    },
    "poison": {"grass": 2, "poison": 0.5, "ground": 0.5, "rock": 0.5, "ghost": 0.5, "steel": 0, "fairy": 2},
    "ground": {
        "fire": 2, "electric": 2, "grass": 0.5, "poison": 2,
        "flying": 0, "bug": 0.5, "rock": 2, "steel": 2,
    },
    "flying": {"electric": 0.5, "grass": 2, "fighting": 2, "bug": 2, "rock": 0.5, "steel": 0.5},
    "psychic": {"fighting": 2, "poison": 2, "psychic": 0.5, "dark": 0, "steel": 0.5},
    "bug": {
        "fire": 0.5, "grass": 2, "fighting": 0.5, "poison": 0.5, "flying": 0.5,
        "psychic": 2, "ghost": 0.5, "dark": 2, "steel": 0.5, "fairy": 0.5,
    },
    "rock": {"fire": 2, "ice": 2, "fighting": 0.5, "ground": 0.5, "flying": 2, "bug": 2, "steel": 0.5},
    "ghost": {"normal": 0, "psychic": 2, "ghost": 2, "dark": 0.5},
    "dragon": {"dragon": 2, "steel": 0.5, "fairy": 0},
    "dark": {"fighting": 0.5, "psychic": 2, "ghost": 2, "dark": 0.5, "fairy": 0.5},
    "steel": {"fire": 0.5, "water": 0.5, "electric": 0.5, "ice": 2, "rock": 2, "steel": 0.5, "fairy": 2},
    "fairy": {"fire": 0.5, "fighting": 2, "poison": 0.5, "dragon": 2, "dark": 2, "steel": 0.5},
}

TYPE_CHART: Mapping[PokemonType, Mapping[PokemonType, float]] = MappingProxyType(
    {
        PokemonType(attacker): MappingProxyType(
            {PokemonType(defender): float(value) for defender, value in row.items()}
        )
        for attacker, row in _RAW_CHART.items()
    }
)


def _parse_types(defending_types: Optional[Iterable[TypeLike]]) -> List[PokemonType]:
    if not defending_types:
        return []
    if isinstance(defending_types, (str, PokemonType)):
        defending_types = [defending_types]
    parsed: List[PokemonType] = []
    for value in defending_types:
        type_ = PokemonType.parse(value)
        if type_ is None:
            return []
        parsed.append(type_)
    return parsed


def damage_multiplier(attack_type: TypeLike, defender_types: Iterable[TypeLike]) -> float:
    """Compute damage multiplier for an attack hitting defender types."""

    attack = PokemonType.parse(attack_type)
    if attack is None:
        return 1.0
    row = TYPE_CHART[attack]
    multiplier = 1.0
    for defender in _parse_types(defender_types):
        multiplier *= row.get(defender, 1.0)
    return multiplier


def compute_multipliers(defending_types: Optional[Iterable[TypeLike]]) -> Dict[PokemonType, float]:
    """Return every non-neutral attacking multiplier against the defender.

    The result is ordered by descending multiplier; ties keep the
    ``PokemonType`` declaration order. Unknown or missing defender types
    produce an empty mapping.
    """

    defenders = _parse_types(defending_types)
    if not defenders:
        return {}

    results: List[tuple[PokemonType, float]] = []
    for attack in PokemonType:
        multiplier = damage_multiplier(attack, defenders)
        if multiplier != 1.0:
            results.append((attack, multiplier))

    # sorted() is stable, so enum order survives among equal multipliers.
    results = sorted(results, key=lambda item: -item[1])
    return dict(results)


def weaknesses(defending_types: Optional[Iterable[TypeLike]]) -> Dict[PokemonType, float]:
    return {t: m for t, m in compute_multipliers(defending_types).items() if m > 1}


def resistances(defending_types: Optional[Iterable[TypeLike]]) -> Dict[PokemonType, float]:
    """Resisted attacking types, immunities (0x) included."""

    return {t: m for t, m in compute_multipliers(defending_types).items() if m < 1}
