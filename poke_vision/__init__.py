"""Pokemon catalog browsing and battle analytics engine."""

from .analysis import EvolutionChainResolver, project_stat, project_stats
from .data.type_chart import compute_multipliers
from .services import FavoritesStore, RosterLoader, SessionController, ToggleResult

__all__ = [
    "EvolutionChainResolver",
    "FavoritesStore",
    "RosterLoader",
    "SessionController",
    "ToggleResult",
    "compute_multipliers",
    "project_stat",
    "project_stats",
]
