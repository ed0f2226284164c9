"""Nature table: which stat each nature raises and lowers."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

# nature -> (raised stat, lowered stat); neutral natures map to (None, None).
NATURES: Dict[str, Tuple[Optional[str], Optional[str]]] = {
    "hardy": (None, None),
    "lonely": ("attack", "defense"),
    "brave": ("attack", "speed"),
    "adamant": ("attack", "special-attack"),
    "naughty": ("attack", "special-defense"),
    "bold": ("defense", "attack"),
    "docile": (None, None),
    "relaxed": ("defense", "speed"),
    "impish": ("defense", "special-attack"),
    "lax": ("defense", "special-defense"),
    "timid": ("speed", "attack"),
    "hasty": ("speed", "defense"),
    "serious": (None, None),
    "jolly": ("speed", "special-attack"),
    "naive": ("speed", "special-defense"),
    "modest": ("special-attack", "attack"),
    "mild": ("special-attack", "defense"),
    "quiet": ("special-attack", "speed"),
    "bashful": (None, None),
    "rash": ("special-attack", "special-defense"),
    "calm": ("special-defense", "attack"),
    "gentle": ("special-defense", "defense"),
    "sassy": ("special-defense", "speed"),
    "careful": ("special-defense", "special-attack"),
    "quirky": (None, None),
}

BOOST = 1.1
HINDER = 0.9


def nature_multiplier(nature: Optional[str], stat: str) -> float:
    """Multiplier a nature applies to ``stat``; unknown natures are neutral."""

    if not nature:
        return 1.0
    raised, lowered = NATURES.get(nature.strip().lower(), (None, None))
    if stat == raised:
        return BOOST
    if stat == lowered:
        return HINDER
    return 1.0
