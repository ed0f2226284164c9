"""FastMCP server exposing catalog browsing and battle analytics tools."""

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated, Any, Dict, List, Optional

from fastmcp import FastMCP

from .clients import PokeAPIClient
from .data import resistances, weaknesses
from .services import FavoritesStore, SessionController, parse_filter
from .storage import FileKeyValueStore

try:
    from .llm import GeminiClient
except Exception:  # pragma: no cover
    GeminiClient = None  # type: ignore


def _maybe_make_gemini_client():
    if GeminiClient is None:
        return None
    try:
        return GeminiClient()
    except Exception:  # pragma: no cover - missing key
        return None


app = FastMCP("poke-vision", version="0.1.0")
_pokeapi = PokeAPIClient()
_session = SessionController(
    pokeapi_client=_pokeapi,
    favorites=FavoritesStore.restore(FileKeyValueStore()),
    advisor=_maybe_make_gemini_client(),
)


@app.tool()
async def list_pokemon(
    type_name: Annotated[Optional[str], "Elemental type filter (e.g., 'fire')"] = None,
    category: Annotated[Optional[str], "Category filter: legendary, mythical or baby"] = None,
    search: Annotated[str, "Case-insensitive name substring"] = "",
    pages: Annotated[int, "Load until the unfiltered roster holds this many 24-entry pages"] = 1,
) -> Dict[str, Any]:
    """List roster entries for the requested filter and search text."""

    mode = parse_filter(type_name, category)
    await _session.set_filter(mode)
    await _session.load_pages(pages)
    _session.set_search(search)
    return {
        "filter": repr(mode),
        "has_more": _session.state.has_more,
        "error": _session.state.error,
        "results": [{"name": p.name, "id": p.ordinal} for p in _session.visible],
    }


@app.tool()
async def get_pokemon_data(
    species: Annotated[str, "Pokemon name or id (e.g., 'pikachu')"],
) -> str:
    """Get basic typing, size and stat info for a Pokémon via PokéAPI."""

    detail = await _session.get_detail(species)
    if detail is None:
        return f"Error fetching {species}"
    return (
        f"Name: {detail.name} (#{detail.id})\n"
        f"Types: {', '.join(detail.type_names) or 'unknown'}\n"
        f"Height: {detail.height / 10:.1f} m, Weight: {detail.weight / 10:.1f} kg\n"
        f"Stats: {detail.base_stats or 'unknown'}\n"
        f"Artwork: {detail.artwork() or 'n/a'}"
    )


@app.tool()
async def type_matchups(
    species: Annotated[str, "Pokemon name or id"],
) -> Dict[str, Dict[str, float]]:
    """Return the attacking types the Pokémon is weak to and those it resists."""

    detail = await _session.get_detail(species)
    if detail is None:
        return {"weaknesses": {}, "resistances": {}}
    return {
        "weaknesses": {t.value: m for t, m in weaknesses(detail.type_names).items()},
        "resistances": {t.value: m for t, m in resistances(detail.type_names).items()},
    }


@app.tool()
async def project_stats(
    species: Annotated[str, "Pokemon name or id"],
    level: Annotated[int, "Level 1-100"] = 50,
    nature: Annotated[Optional[str], "Nature name (e.g., 'adamant')"] = None,
    evs: Annotated[Optional[Dict[str, int]], "EVs keyed by stat name (e.g., {'attack': 252})"] = None,
) -> List[Dict[str, Any]]:
    """Project the Pokémon's stats for the given level, EVs and nature."""

    detail = await _session.get_detail(species)
    if detail is None:
        return []
    return [asdict(p) for p in _session.project(detail, level=level, evs=evs, nature=nature)]


@app.tool()
async def evolution_chain(
    species: Annotated[str, "Pokemon name or id"],
) -> List[Dict[str, Any]]:
    """Resolve the Pokémon's evolution line (first branch at each split)."""

    detail = await _session.select(species)
    if detail is None:
        return []
    return [asdict(node) for node in _session.chain]


@app.tool()
async def toggle_favorite(
    species: Annotated[str, "Pokemon name or id"],
) -> str:
    """Add or remove a Pokémon from the six-slot favorites list."""

    detail = await _session.get_detail(species)
    if detail is None:
        return f"Error fetching {species}"
    return _session.toggle_favorite(detail).value


@app.tool()
def list_favorites() -> List[Dict[str, Any]]:
    """Return the persisted favorites."""

    return [{"id": p.id, "name": p.name, "types": p.type_names} for p in _session.favorites]


def run() -> None:
    """Entry point for `python -m poke_vision.server` or console script."""

    print("[poke-vision] Starting MCP server. Press Ctrl+C to stop.")
    try:
        app.run()
    finally:
        _session.close()


if __name__ == "__main__":
    run()
