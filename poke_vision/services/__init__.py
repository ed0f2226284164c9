"""Session services: roster loading, favorites and the session controller."""

from .favorites import FAVORITES_CAPACITY, FavoritesFullError, FavoritesStore, ToggleResult
from .roster import DEFAULT_PAGE_SIZE, RosterLoader, filter_by_search, has_more_pages, parse_filter
from .session import SessionController

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FAVORITES_CAPACITY",
    "FavoritesFullError",
    "FavoritesStore",
    "RosterLoader",
    "SessionController",
    "ToggleResult",
    "filter_by_search",
    "has_more_pages",
    "parse_filter",
]
