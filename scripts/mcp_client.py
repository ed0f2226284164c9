"""Call the poke-vision FastMCP tools over HTTP.

Usage:
    python scripts/mcp_client.py --tool project_stats species=garchomp level=100 evs='{"attack": 252}'
    python scripts/mcp_client.py --list

Values that parse as JSON (numbers, objects, booleans) are sent decoded;
anything else is sent as a plain string.
"""
from __future__ import annotations

import argparse
import asyncio
import json
from typing import Any

from fastmcp import Client


def _parse_param(arg: str) -> tuple[str, Any]:
    if "=" not in arg:
        raise argparse.ArgumentTypeError("Parameters must be in key=value format")
    key, raw = arg.split("=", 1)
    try:
        return key, json.loads(raw)
    except ValueError:
        return key, raw


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", default="http://localhost:3333/mcp", help="MCP endpoint of the server")
    parser.add_argument("--tool", default="list_pokemon", help="Tool name to invoke")
    parser.add_argument("--list", action="store_true", help="List available tools instead of calling one")
    parser.add_argument("params", nargs="*", type=_parse_param, help="Tool parameters as key=value")
    return parser


def _to_jsonable(result: Any) -> Any:
    for attr in ("structured_content", "data"):
        value = getattr(result, attr, None)
        if value is not None:
            return value
    content = getattr(result, "content", None)
    if content:
        return [getattr(item, "text", str(item)) for item in content]
    return str(result)


async def _main_async() -> None:
    args = _build_parser().parse_args()
    async with Client(args.url) as client:
        await client.ping()
        if args.list:
            for tool in await client.list_tools():
                print(f"- {tool.name}: {tool.description}")
            return
        result = await client.call_tool(args.tool, dict(args.params))
        print(json.dumps(_to_jsonable(result), indent=2, default=str))


def main() -> None:
    asyncio.run(_main_async())


if __name__ == "__main__":
    main()
