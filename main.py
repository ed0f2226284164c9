"""Command-line interface for browsing the Pokemon catalog and its analytics."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List

from poke_vision.models import PokemonDetail
from poke_vision.services import FavoritesStore, SessionController, ToggleResult, parse_filter
from poke_vision.storage import FileKeyValueStore

try:  # Optional import for advisory commentary
    from poke_vision.llm import GeminiClient
except Exception:  # pragma: no cover - Gemini optional
    GeminiClient = None  # type: ignore


def _debug_print(enabled: bool, message: str) -> None:
    if enabled:
        sys.stderr.write(f"[debug] {message}\n")


def _parse_evs(pairs: List[str]) -> Dict[str, int]:
    evs: Dict[str, int] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise SystemExit(f"EVs must be given as stat=value, got {pair!r}")
        stat, value = pair.split("=", 1)
        try:
            evs[stat.strip().lower()] = int(value)
        except ValueError:
            raise SystemExit(f"EV value for {stat} is not an integer: {value!r}")
    return evs


def _humanize_detail(session: SessionController, detail: PokemonDetail, projections) -> str:
    lines: List[str] = [
        f"#{detail.id} {detail.name} ({'/'.join(detail.type_names) or 'unknown'})",
        f"Height {detail.height / 10:.1f} m, weight {detail.weight / 10:.1f} kg",
        "",
        "Stats:",
    ]
    for projection in projections:
        lines.append(f"  - {projection.stat}: base {projection.base} -> {projection.value}")

    matchups = session.matchups(detail)
    if matchups:
        lines.append("")
        lines.append("Type matchups:")
        for type_, multiplier in matchups.items():
            lines.append(f"  - {type_.value}: {multiplier:g}x")
    return "\n".join(lines)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Browse the Pokemon catalog and battle analytics")
    parser.add_argument("--json", action="store_true", help="Emit results as JSON")
    parser.add_argument("--debug", action="store_true", help="Print debug progress information to stderr")
    parser.add_argument("--data-dir", help="Directory holding persisted favorites")
    sub = parser.add_subparsers(dest="command", required=True)

    browse = sub.add_parser("browse", help="List roster entries")
    browse.add_argument("--type", dest="type_name", help="Filter by elemental type")
    browse.add_argument("--category", help="Filter by category (legendary, mythical, baby)")
    browse.add_argument("--pages", type=int, default=1, help="Pages to load when unfiltered (default: 1)")
    browse.add_argument("--search", default="", help="Case-insensitive name filter")

    show = sub.add_parser("show", help="Show detail, matchups and projected stats")
    show.add_argument("name")
    show.add_argument("--level", type=int, default=50, help="Level 1-100 (default: 50)")
    show.add_argument("--nature", help="Nature name, e.g. adamant")
    show.add_argument("--ev", action="append", default=[], help="EV as stat=value (repeatable)")
    show.add_argument("--advice", action="store_true", help="Ask Gemini for strategy commentary")

    evolution = sub.add_parser("evolution", help="Show the evolution line")
    evolution.add_argument("name")

    favorite = sub.add_parser("favorite", help="Toggle a Pokemon in favorites")
    favorite.add_argument("name")

    sub.add_parser("favorites", help="List favorites")
    return parser


async def _run(args: argparse.Namespace, session: SessionController) -> int:
    debug = args.debug

    if args.command == "browse":
        try:
            mode = parse_filter(args.type_name, args.category)
        except ValueError as exc:
            raise SystemExit(str(exc))
        await session.set_filter(mode)
        await session.load_pages(args.pages)
        session.set_search(args.search)
        if session.state.error:
            sys.stderr.write(f"Roster load failed: {session.state.error}\n")
            return 1
        rows = [{"name": p.name, "id": p.ordinal} for p in session.visible]
        _debug_print(debug, f"{len(session.state.roster)} loaded, {len(rows)} visible")
        if args.json:
            _emit_json({"results": rows, "has_more": session.state.has_more})
        else:
            for row in rows:
                print(f"#{row['id'] or '?':>4} {row['name']}")
        return 0

    if args.command == "show":
        detail = await session.get_detail(args.name)
        if detail is None:
            sys.stderr.write(f"Pokemon not found: {args.name}\n")
            return 1
        try:
            projections = session.project(detail, level=args.level, evs=_parse_evs(args.ev), nature=args.nature)
        except ValueError as exc:
            raise SystemExit(str(exc))
        advice = await session.advise(detail) if args.advice else None
        if args.json:
            payload: Dict[str, Any] = detail.to_dict()
            payload["projections"] = [asdict(p) for p in projections]
            payload["matchups"] = {t.value: m for t, m in session.matchups(detail).items()}
            payload["advice"] = advice
            _emit_json(payload)
        else:
            print(_humanize_detail(session, detail, projections))
            if advice:
                print("\nGemini Advice:\n" + json.dumps(advice, indent=2))
        return 0

    if args.command == "evolution":
        detail = await session.select(args.name)
        if detail is None:
            sys.stderr.write(f"Pokemon not found: {args.name}\n")
            return 1
        if args.json:
            _emit_json([asdict(node) for node in session.chain])
        else:
            print(" -> ".join(node.name for node in session.chain) or "No evolution data")
        return 0

    if args.command == "favorite":
        detail = await session.get_detail(args.name)
        if detail is None:
            sys.stderr.write(f"Pokemon not found: {args.name}\n")
            return 1
        result = session.toggle_favorite(detail)
        if result is ToggleResult.REJECTED_FULL:
            sys.stderr.write("Favorites are full (6). Remove one first.\n")
            return 1
        if result is ToggleResult.NOT_SAVED:
            sys.stderr.write("Could not save favorites; nothing changed.\n")
            return 1
        print(f"{detail.name}: {result.value}")
        return 0

    if args.command == "favorites":
        rows = [{"id": p.id, "name": p.name, "types": p.type_names} for p in session.favorites]
        if args.json:
            _emit_json(rows)
        else:
            for row in rows:
                print(f"#{row['id']:>4} {row['name']} ({'/'.join(row['types'])})")
        return 0

    raise SystemExit(f"Unknown command: {args.command}")


def _emit_json(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _debug_print(args.debug, f"Arguments parsed: {args}")

    logger = lambda msg: _debug_print(args.debug, msg)  # noqa: E731
    favorites = FavoritesStore.restore(FileKeyValueStore(args.data_dir), debug_logger=logger)
    _debug_print(args.debug, f"Restored {len(favorites)} favorites")
    advisor = _maybe_make_gemini_client(debug=args.debug) if getattr(args, "advice", False) else None
    session = SessionController(favorites=favorites, advisor=advisor, debug_logger=logger)
    try:
        return asyncio.run(_run(args, session))
    finally:
        session.close()


def _maybe_make_gemini_client(*, debug: bool = False):
    if GeminiClient is None:
        _debug_print(debug, "GeminiClient import unavailable; skipping advice")
        return None
    try:
        return GeminiClient()
    except Exception as exc:
        _debug_print(debug, f"Failed to initialize Gemini client: {exc}")
        return None


if __name__ == "__main__":
    raise SystemExit(main())
