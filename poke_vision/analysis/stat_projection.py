"""Level / EV / nature stat projection."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from ..data.natures import BOOST, HINDER, nature_multiplier
from ..models import PokemonDetail, StatProjection

PERFECT_IV = 31
MIN_LEVEL = 1
MAX_LEVEL = 100
MAX_STAT_EV = 252
MAX_TOTAL_EV = 510
HP_STAT = "hp"
_VALID_NATURE_MULTIPLIERS = (HINDER, 1.0, BOOST)


def project_stat(
    base: int,
    iv: int,
    ev: int,
    level: int,
    nature: float = 1.0,
    is_hp: bool = False,
) -> int:
    """Project a single stat using the main-series formula.

    HP ignores nature; a base HP of 1 always projects to 1.
    """

    core = ((2 * base + iv + ev // 4) * level) // 100
    if is_hp:
        if base == 1:
            return 1
        return core + level + 10
    return int((core + 5) * nature)


def validate_inputs(level: int, evs: Mapping[str, int]) -> None:
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ValueError(f"level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {level}")
    for stat, value in evs.items():
        if not 0 <= value <= MAX_STAT_EV:
            raise ValueError(f"EV for {stat} must be between 0 and {MAX_STAT_EV}, got {value}")
    total = sum(evs.values())
    if total > MAX_TOTAL_EV:
        raise ValueError(f"EV total must not exceed {MAX_TOTAL_EV}, got {total}")


def project_stats(
    pokemon: PokemonDetail,
    level: int = 50,
    evs: Optional[Mapping[str, int]] = None,
    nature: Optional[str] = None,
    nature_multipliers: Optional[Mapping[str, float]] = None,
) -> List[StatProjection]:
    """Project every base stat of ``pokemon`` for the given simulator inputs.

    ``nature`` is a nature name looked up in the nature table;
    ``nature_multipliers`` overrides it per stat with raw multipliers.
    Values are recomputed from base stats on every call.
    """

    evs = dict(evs or {})
    validate_inputs(level, evs)
    overrides: Dict[str, float] = dict(nature_multipliers or {})
    for stat, value in overrides.items():
        if value not in _VALID_NATURE_MULTIPLIERS:
            raise ValueError(f"nature multiplier for {stat} must be 0.9, 1.0 or 1.1, got {value}")

    projections: List[StatProjection] = []
    for stat in pokemon.stats:
        effort = evs.get(stat.name, 0)
        multiplier = overrides.get(stat.name, nature_multiplier(nature, stat.name))
        value = project_stat(
            stat.base_stat,
            PERFECT_IV,
            effort,
            level,
            multiplier,
            is_hp=stat.name == HP_STAT,
        )
        projections.append(StatProjection(stat=stat.name, base=stat.base_stat, value=value, effort=effort))
    return projections
