"""Session logging for the orb field: buffered CSV files per session."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

from .model import SimContext

LAST_RUN_MARKER = "last_run.txt"


def format_csv_value(value: object) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, (int, float)):
        return f"{value:.10g}"
    text = str(value)
    if any(ch in text for ch in ',"\n'):
        return '"' + text.replace('"', '""') + '"'
    return text


def allocate_session_dir(root: Path, run_id: Optional[str] = None) -> Path:
    """Create a fresh session directory under ``root``.

    Without ``run_id`` the name is ``<YYYYmmdd_HHMMSS>_session``. Clashes get
    a numeric suffix: ``demo_1`` for explicit ids, ``..._session_01`` otherwise.
    """

    root.mkdir(parents=True, exist_ok=True)
    base = run_id or datetime.now().strftime("%Y%m%d_%H%M%S") + "_session"
    name = base
    n = 0
    while (root / name).exists():
        n += 1
        name = f"{base}_{n}" if run_id else f"{base}_{n:02d}"
    session_dir = root / name
    session_dir.mkdir(parents=True, exist_ok=False)
    return session_dir


class BufferedCsv:
    """One CSV file whose rows are written in batches of ``flush_every``."""

    def __init__(
        self,
        path: Path,
        header: Sequence[str],
        flush_every: int,
        formatter: Callable[[object], str] = format_csv_value,
    ) -> None:
        self.path = path
        self._fh = path.open("w", newline="")
        self._fh.write(",".join(header) + "\n")
        self._rows: list[str] = []
        self._flush_every = max(1, flush_every)
        self._format = formatter

    def append(self, values: Sequence[object]) -> None:
        self._rows.append(",".join(self._format(v) for v in values))
        if len(self._rows) >= self._flush_every:
            self.flush()

    def flush(self) -> None:
        if not self._rows:
            return
        self._fh.write("\n".join(self._rows) + "\n")
        self._fh.flush()
        self._rows.clear()

    def close(self) -> None:
        self.flush()
        self._fh.close()


class SessionLogger:
    """Stores periodic state samples and game events of one play session."""

    TIMESERIES_HEADER = [
        "tick",
        "t",
        "mode",
        "score",
        "best",
        "orbs",
        "particles",
        "spawn_timer",
    ]
    EVENTS_HEADER = ["tick", "t", "type", "score", "x", "y", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        sample_every_ticks: int = 30,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.run_dir = allocate_session_dir(self.root_dir, run_id)
        self.run_id = self.run_dir.name
        self.meta_path = self.run_dir / "meta.json"
        self.sample_every_ticks = max(1, sample_every_ticks)

        self._timeseries = BufferedCsv(
            self.run_dir / "timeseries.csv",
            self.TIMESERIES_HEADER,
            timeseries_flush_threshold,
            self._format_value,
        )
        self._events = BufferedCsv(
            self.run_dir / "events.csv",
            self.EVENTS_HEADER,
            events_flush_threshold,
            self._format_value,
        )
        (self.root_dir / LAST_RUN_MARKER).write_text(self.run_id, encoding="utf-8")

    @property
    def timeseries_path(self) -> Path:
        return self._timeseries.path

    @property
    def events_path(self) -> Path:
        return self._events.path

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def sample(self, ctx: SimContext, t: float) -> bool:
        """Record one timeseries row every ``sample_every_ticks`` ticks."""

        state = ctx.state
        if state.tick % self.sample_every_ticks:
            return False
        self._timeseries.append(
            (
                state.tick,
                t,
                state.mode.value,
                state.score,
                state.best_score,
                len(ctx.orbs),
                len(ctx.particles),
                state.spawn_timer,
            )
        )
        return True

    def record(self, ctx: SimContext, t: float, name: str, details: dict) -> None:
        """Record a game event as emitted by the state machine.

        ``x``/``y`` get their own columns, anything else is stored as JSON.
        """

        extra = {key: value for key, value in details.items() if key not in ("x", "y")}
        self._events.append(
            (
                ctx.state.tick,
                t,
                name,
                ctx.state.score,
                details.get("x", ""),
                details.get("y", ""),
                json.dumps(extra, sort_keys=True) if extra else "",
            )
        )

    def close(self) -> None:
        self._timeseries.close()
        self._events.close()

    _format_value = staticmethod(format_csv_value)

    def __enter__(self) -> "SessionLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["BufferedCsv", "LAST_RUN_MARKER", "SessionLogger", "allocate_session_dir", "format_csv_value"]
