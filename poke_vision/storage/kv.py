"""Minimal string key-value persistence used by the favorites store."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Optional, Protocol

DEFAULT_DATA_DIR = Path.home() / ".poke_vision"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store, handy for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class FileKeyValueStore:
    """Stores each key as a UTF-8 text file under ``data_dir``."""

    def __init__(self, data_dir: str | Path | None = None) -> None:
        self.data_dir = Path(data_dir or os.getenv("POKE_VISION_DATA_DIR") or DEFAULT_DATA_DIR)

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def _path(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.\-]", "_", key)
        return self.data_dir / f"{safe}.json"
