"""Lightweight wrapper around PokeAPI for roster, detail and lineage data."""

from __future__ import annotations

import re
import time
from typing import Any, Dict, List, Optional, Union

import requests


class PokeAPIClientError(RuntimeError):
    """Raised when the PokeAPI request fails."""


class PokemonNotFoundError(PokeAPIClientError):
    """Raised when PokeAPI answers 404 for a valid request."""


class PokeAPIPayloadError(PokeAPIClientError):
    """Raised when PokeAPI returns a body that cannot be interpreted."""


class PokeAPIClient:
    """Small helper client with naive in-memory caching."""

    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        cache_ttl: int = 600,
        timeout: int = 10,
        user_agent: str = "poke-vision/0.1 (+https://github.com/)",
    ) -> None:
        self.session = session or requests.Session()
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.user_agent = user_agent
        self._cache: Dict[str, tuple[float, Any]] = {}

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def list_pokemon(self, limit: int = 24, offset: int = 0) -> List[Dict[str, str]]:
        """Return one page of ``{name, url}`` rows."""

        payload = self._get_json(f"pokemon?limit={int(limit)}&offset={int(offset)}")
        results = payload.get("results")
        if not isinstance(results, list):
            raise PokeAPIPayloadError("pokemon list payload has no results")
        return results

    def get_pokemon(self, name_or_id: Union[str, int]) -> Dict[str, Any]:
        slug = self._slugify_name(str(name_or_id))
        return self._get_json(f"pokemon/{slug}")

    def get_type(self, type_name: str) -> Dict[str, Any]:
        slug = self._slugify_type(type_name)
        return self._get_json(f"type/{slug}")

    def get_type_members(self, type_name: str) -> List[Dict[str, str]]:
        """Return every ``{name, url}`` row carrying the given type."""

        payload = self.get_type(type_name)
        entries = payload.get("pokemon")
        if not isinstance(entries, list):
            raise PokeAPIPayloadError(f"type payload for {type_name!r} has no pokemon list")
        return [entry["pokemon"] for entry in entries if isinstance(entry, dict) and entry.get("pokemon")]

    def get_species(self, species_id: Union[str, int]) -> Dict[str, Any]:
        slug = self._slugify_name(str(species_id))
        return self._get_json(f"pokemon-species/{slug}")

    def get_evolution_chain(self, url_or_id: Union[str, int]) -> Dict[str, Any]:
        """Fetch a lineage graph either by absolute url or by chain id."""

        if isinstance(url_or_id, str) and url_or_id.startswith(("http://", "https://")):
            return self._get_json(url_or_id)
        return self._get_json(f"evolution-chain/{int(url_or_id)}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, endpoint: str) -> Dict[str, Any]:
        url = self._build_url(endpoint)
        now = time.time()
        cached = self._cache.get(url)
        if cached and now - cached[0] < self.cache_ttl:
            return cached[1]

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            if response.status_code == 404:
                raise PokemonNotFoundError(f"Not found: {url}")
            response.raise_for_status()
        except requests.RequestException as exc:  # pragma: no cover - network
            raise PokeAPIClientError(str(exc)) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise PokeAPIPayloadError(f"Invalid JSON from {url}") from exc
        if not isinstance(payload, dict):
            raise PokeAPIPayloadError(f"Unexpected payload type from {url}")
        self._cache[url] = (now, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        endpoint = endpoint.lstrip("/")
        return f"{self.BASE_URL}/{endpoint}"

    @staticmethod
    def _slugify_name(name: str) -> str:
        slug = name.strip().lower()
        slug = re.sub(r"[\s\.]+", "-", slug)
        slug = slug.replace("'", "")
        slug = slug.replace(":", "")
        slug = slug.replace("%", "")
        slug = re.sub(r"[^a-z0-9\-]", "", slug)
        return slug

    @staticmethod
    def _slugify_type(type_name: str) -> str:
        slug = type_name.strip().lower().replace(" ", "-")
        return slug
