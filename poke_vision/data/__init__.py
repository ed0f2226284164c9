"""Static battle data: type chart, natures and curated categories."""

from .categories import CATEGORY_MEMBERS, CategoryCatalog
from .natures import NATURES, nature_multiplier
from .type_chart import TYPE_CHART, compute_multipliers, damage_multiplier, resistances, weaknesses

__all__ = [
    "CATEGORY_MEMBERS",
    "CategoryCatalog",
    "NATURES",
    "TYPE_CHART",
    "compute_multipliers",
    "damage_multiplier",
    "nature_multiplier",
    "resistances",
    "weaknesses",
]
