"""FastAPI web server exposing the catalog engine via a JSON REST API."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from .clients import PokeAPIClient
from .services import FavoritesStore, SessionController, ToggleResult, parse_filter
from .storage import FileKeyValueStore

try:
    from .llm import GeminiClient
except Exception:  # pragma: no cover
    GeminiClient = None  # type: ignore

app = FastAPI(
    title="Poke-Vision Web API",
    description="REST API for Pokemon catalog browsing and battle analytics",
    version="0.1.0",
)


def _maybe_make_gemini_client():
    if GeminiClient is None:
        return None
    try:
        return GeminiClient()
    except Exception:  # pragma: no cover - missing key
        return None


_session = SessionController(
    pokeapi_client=PokeAPIClient(),
    favorites=FavoritesStore.restore(FileKeyValueStore()),
    advisor=_maybe_make_gemini_client(),
)


class ProjectionRequest(BaseModel):
    """Request model for stat projection."""

    species: str
    level: int = 50
    nature: Optional[str] = None
    evs: Dict[str, int] = {}


class RosterResponse(BaseModel):
    """Response model for roster listings."""

    results: List[Dict[str, Any]]
    has_more: bool
    error: Optional[str] = None


class ToggleResponse(BaseModel):
    result: str
    favorites: List[str]


async def _require_detail(species: str):
    detail = await _session.get_detail(species)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Pokemon not found: {species}")
    return detail


@app.get("/api/roster", response_model=RosterResponse)
async def roster(
    type_name: Optional[str] = Query(None, alias="type", description="Elemental type filter"),
    category: Optional[str] = Query(None, description="legendary, mythical or baby"),
    search: str = Query("", description="Case-insensitive name substring"),
) -> RosterResponse:
    """Switch the roster filter (if changed) and return the visible entries."""
    try:
        mode = parse_filter(type_name, category)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    await _session.set_filter(mode)
    _session.set_search(search)
    return RosterResponse(
        results=[{"name": p.name, "id": p.ordinal} for p in _session.visible],
        has_more=_session.state.has_more,
        error=_session.state.error,
    )


@app.post("/api/roster/more", response_model=RosterResponse)
async def roster_more() -> RosterResponse:
    """Load the next page of the unfiltered roster."""
    await _session.load_more()
    return RosterResponse(
        results=[{"name": p.name, "id": p.ordinal} for p in _session.visible],
        has_more=_session.state.has_more,
        error=_session.state.error,
    )


@app.get("/api/pokemon/{species}")
async def pokemon(species: str, shiny: bool = False) -> Dict[str, Any]:
    """Return detail, matchups and radar data for one Pokémon."""
    detail = await _require_detail(species)
    payload = detail.to_dict()
    payload["artwork"] = detail.artwork(shiny=shiny)
    payload["radar"] = detail.radar_stats()
    payload["matchups"] = {t.value: m for t, m in _session.matchups(detail).items()}
    return payload


@app.post("/api/project")
async def project(request: ProjectionRequest) -> List[Dict[str, Any]]:
    """Project stats for the given simulator inputs."""
    detail = await _require_detail(request.species)
    try:
        projections = _session.project(detail, level=request.level, evs=request.evs, nature=request.nature)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return [asdict(p) for p in projections]


@app.get("/api/evolution/{species}")
async def evolution(species: str) -> List[Dict[str, Any]]:
    """Resolve the evolution line rooted at the selected Pokémon."""
    detail = await _session.select(species)
    if detail is None:
        raise HTTPException(status_code=409, detail="Selection failed or another selection is in progress")
    return [asdict(node) for node in _session.chain]


@app.get("/api/advice/{species}")
async def advice(species: str) -> Dict[str, Any]:
    """Best-effort strategy commentary; ``null`` when unavailable."""
    detail = await _require_detail(species)
    return {"advice": await _session.advise(detail)}


@app.post("/api/favorites/{species}", response_model=ToggleResponse)
async def toggle_favorite(species: str) -> ToggleResponse:
    """Toggle a Pokémon in the favorites list."""
    detail = await _require_detail(species)
    result = _session.toggle_favorite(detail)
    if result is ToggleResult.REJECTED_FULL:
        raise HTTPException(status_code=409, detail="Favorites are full")
    return ToggleResponse(result=result.value, favorites=[p.name for p in _session.favorites])


@app.get("/api/favorites")
async def favorites() -> List[Dict[str, Any]]:
    """Return the persisted favorites."""
    return [p.to_dict() for p in _session.favorites]


@app.on_event("shutdown")
def _close_session() -> None:
    _session.close()


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Entry point for running the web server."""
    import uvicorn

    print(f"[poke-vision-web] Starting web server at http://{host}:{port}")
    print("[poke-vision-web] Press Ctrl+C to stop.")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
