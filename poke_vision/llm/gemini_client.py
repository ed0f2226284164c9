"""Thin wrapper around Google's Generative AI Gemini client."""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

import google.generativeai as genai
from dotenv import load_dotenv

from ..models import PokemonDetail

# Load default .env first, then overlay .env.local so user-specific keys win.
load_dotenv()
load_dotenv(".env.local", override=True)


class GeminiClient:
    """Convenience client for per-Pokemon strategy commentary."""

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: str = "gemini-2.5-flash",
    ) -> None:
        api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise RuntimeError("GEMINI_API_KEY is not configured")
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model,
            generation_config={"response_mime_type": "application/json"},
        )

    def analyze_pokemon(self, pokemon: PokemonDetail) -> Optional[Dict[str, Any]]:
        """Return ``{strategy, strengths, funFact}`` commentary, or ``None``."""

        try:
            response = self.model.generate_content(self._build_prompt(pokemon))
            text = response.text.strip() if response and response.text else ""
        except Exception:  # pragma: no cover - remote service
            return None
        return self._parse_response(text)

    @staticmethod
    def _parse_response(text: str) -> Optional[Dict[str, Any]]:
        if not text:
            return None
        try:
            payload = json.loads(text)
        except ValueError:
            return None
        return payload if isinstance(payload, dict) else None

    @staticmethod
    def _build_prompt(pokemon: PokemonDetail) -> str:
        types = "/".join(pokemon.type_names) or "unknown"
        stats = ", ".join(f"{name} {value}" for name, value in pokemon.base_stats.items())
        return (
            "Act as a world-class Pokemon Professor. "
            f"Analyze this Pokemon: {pokemon.name} (types: {types}; base stats: {stats}).\n"
            "Provide a concise strategy for competitive play including its strengths, "
            "potential roles, and one fun fact.\n"
            'Format as JSON: { "strategy": "...", "strengths": ["...", "..."], "funFact": "..." }'
        )
