"""Persistence for the best score."""
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Protocol

HIGHSCORE_KEY = "orb_sim_highscore"


class KeyValueStore(Protocol):
    def get_int(self, key: str) -> int: ...

    def set_int(self, key: str, value: int) -> None: ...


def parse_int(raw: object) -> int:
    """Missing or malformed values read as 0. Decimal text is truncated, so ``"37.5"`` reads as 37."""

    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError:
            pass
        try:
            raw = float(raw)
        except ValueError:
            return 0
    if isinstance(raw, float) and not math.isfinite(raw):
        return 0
    try:
        return int(raw)  # type: ignore[call-overload]
    except (TypeError, ValueError, OverflowError):
        return 0


class MemoryStore:
    def __init__(self, values: dict[str, object] | None = None) -> None:
        self.values: dict[str, object] = dict(values or {})
        self.writes = 0

    def get_int(self, key: str) -> int:
        return parse_int(self.values.get(key))

    def set_int(self, key: str, value: int) -> None:
        self.values[key] = int(value)
        self.writes += 1


class JsonFileStore:
    """Key/value pairs kept in one small JSON document."""

    def __init__(self, path: str | Path = "data/highscore.json") -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, object]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def get_int(self, key: str) -> int:
        return parse_int(self._load().get(key))

    def set_int(self, key: str, value: int) -> None:
        data = self._load()
        data[key] = int(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, sort_keys=True)


__all__ = ["HIGHSCORE_KEY", "JsonFileStore", "KeyValueStore", "MemoryStore", "parse_int"]
