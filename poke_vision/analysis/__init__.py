"""Battle analytics: stat projection and evolution lineage."""

from .evolution import EvolutionChainResolver, linearize_chain
from .stat_projection import PERFECT_IV, project_stat, project_stats

__all__ = [
    "EvolutionChainResolver",
    "PERFECT_IV",
    "linearize_chain",
    "project_stat",
    "project_stats",
]
