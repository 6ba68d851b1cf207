"""Summarise a recorded orb field session and plot it.

Usage::

    python src/analyze_run.py                 # latest session (data/runs/last_run.txt)
    python src/analyze_run.py 20260110_124236_session
"""
from __future__ import annotations

import argparse
import csv
import json
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
MODE_CODES = {"idle": 0, "playing": 1, "paused": 2, "over": 3}
COUNTED_EVENTS = ("activated", "tap", "collision", "miss", "game_over", "best_score")

GOLD = "#d4af37"
RED = "#ff4444"
PURPLE = "#c8a0ff"
GREEN = "#4caf50"


@dataclass
class Session:
    run_dir: Path
    meta: dict
    timeseries: Dict[str, np.ndarray]
    events: List[dict]


def _mode_code(raw: str) -> float:
    return float(MODE_CODES.get(raw, -1))


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    """Columns of ``timeseries.csv`` as float arrays; ``mode`` is mapped to MODE_CODES."""

    with path.open("r", newline="") as fh:
        rows = list(csv.reader(fh))
    if not rows:
        return {}
    header, body = rows[0], rows[1:]
    table: Dict[str, np.ndarray] = {}
    for index, name in enumerate(header):
        convert = _mode_code if name == "mode" else float
        table[name] = np.array([convert(row[index]) for row in body if row], dtype=float)
    return table


def _optional_float(raw: Optional[str]) -> Optional[float]:
    return float(raw) if raw else None


def _parse_details(raw: Optional[str]) -> dict:
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return {"raw": raw}
    return parsed if isinstance(parsed, dict) else {"value": parsed}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        return [
            {
                "tick": int(float(row["tick"])),
                "t": float(row["t"]),
                "type": row["type"],
                "score": int(float(row["score"])),
                "x": _optional_float(row.get("x")),
                "y": _optional_float(row.get("y")),
                "details": _parse_details(row.get("details")),
            }
            for row in csv.DictReader(fh)
            if row.get("type")
        ]


def resolve_session_dir(run_dir: Optional[str], runs_dir: Path) -> Path:
    """Session named on the command line, or the one in ``last_run.txt``."""

    if run_dir:
        candidate = Path(run_dir)
        return candidate if candidate.is_dir() else runs_dir / run_dir
    marker = runs_dir / "last_run.txt"
    if not marker.exists():
        raise FileNotFoundError(f"no session given and {marker} is missing")
    return runs_dir / marker.read_text(encoding="utf-8").strip()


def load_session(run_dir: Path) -> Session:
    paths = [run_dir / name for name in (META_FILENAME, TIMESERIES_FILENAME, EVENTS_FILENAME)]
    missing = [p.name for p in paths if not p.exists()]
    if missing:
        raise FileNotFoundError(f"{run_dir} is missing {', '.join(missing)}")
    meta_path, ts_path, ev_path = paths
    meta = json.loads(meta_path.read_text(encoding="utf-8"))
    return Session(run_dir, meta, load_timeseries(ts_path), load_events(ev_path))


# ── summaries ────────────────────────────────────────────────────


def summarize_events(events: List[dict]) -> Dict[str, int]:
    counts = Counter(event["type"] for event in events)
    return {name: counts.get(name, 0) for name in COUNTED_EVENTS}


def tap_accuracy(events: List[dict]) -> float | None:
    """Share of taps that popped at least one orb."""

    hits = [int(e["details"].get("hits", 0)) > 0 for e in events if e["type"] == "tap"]
    return sum(hits) / len(hits) if hits else None


def run_scores(events: List[dict]) -> List[int]:
    """Final score of every run that ended in game over."""

    return [event["score"] for event in events if event["type"] == "game_over"]


def game_over_causes(events: List[dict]) -> Dict[str, int]:
    return dict(
        Counter(
            str(event["details"].get("cause", "unknown"))
            for event in events
            if event["type"] == "game_over"
        )
    )


# ── figures ──────────────────────────────────────────────────────


def _save(fig, path: Path) -> None:
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def plot_score(fig_dir: Path, ts: Dict[str, np.ndarray], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["score"], color=GOLD, label="Score")
    ax.plot(ts["t"], ts["best"], color="#adb5bd", linestyle="--", label="Best")
    ends = [event["t"] for event in events if event["type"] == "game_over"]
    for i, t in enumerate(ends):
        ax.axvline(t, color=RED, linestyle=":", alpha=0.6, label="Game over" if i == 0 else None)
    ax.set(xlabel="t [s]", ylabel="Score", title="Score over time")
    ax.grid(True, alpha=0.3)
    ax.legend()
    _save(fig, fig_dir / "score.png")


def plot_entities(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["orbs"], color=GOLD, label="Orbs")
    ax.plot(ts["t"], ts["particles"], color=PURPLE, alpha=0.8, label="Particles")
    ax.set(xlabel="t [s]", ylabel="Live entities", title="Entity counts")
    ax.grid(True, alpha=0.3)
    ax.legend()
    _save(fig, fig_dir / "entities.png")


def plot_mode(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(7, 2.5))
    ax.step(ts["t"], ts["mode"], where="post", color=GREEN)
    ax.set_yticks(list(MODE_CODES.values()), labels=list(MODE_CODES))
    ax.set(xlabel="t [s]", title="Mode")
    ax.grid(True, alpha=0.3)
    _save(fig, fig_dir / "mode.png")


def write_figures(session: Session) -> Path:
    fig_dir = session.run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    plot_score(fig_dir, session.timeseries, session.events)
    plot_entities(fig_dir, session.timeseries)
    plot_mode(fig_dir, session.timeseries)
    return fig_dir


def print_summary(session: Session) -> None:
    events = session.events
    counts = summarize_events(events)
    scores = run_scores(events)
    causes = game_over_causes(events)
    accuracy = tap_accuracy(events)

    print(f"Session: {session.run_dir.name}")
    print(f" Version: {session.meta.get('code_version', 'unknown')}")
    print(f" Runs started: {counts['activated']}, finished: {counts['game_over']}")
    if scores:
        print(f" Run scores: {', '.join(map(str, scores))} (max {max(scores)}, mean {np.mean(scores):.1f})")
    else:
        print(" Run scores: no finished runs")
    if causes:
        print(" Game over causes: " + ", ".join(f"{cause}: {n}" for cause, n in causes.items()))
    if accuracy is not None:
        print(f" Tap accuracy: {accuracy:.0%}")
    print(" Events: " + ", ".join(f"{name}: {n}" for name, n in counts.items()))


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarise a recorded session and write figures.")
    parser.add_argument("run_dir", nargs="?", help="Session directory or its name under --runs-dir")
    parser.add_argument(
        "--runs-dir",
        type=Path,
        default=Path("data") / "runs",
        help="Sessions root (default: data/runs)",
    )
    args = parser.parse_args()

    try:
        session = load_session(resolve_session_dir(args.run_dir, args.runs_dir))
    except FileNotFoundError as exc:
        parser.error(str(exc))
    if session.timeseries.get("tick", np.empty(0)).size == 0:
        parser.error("timeseries.csv has no samples - nothing to plot.")

    fig_dir = write_figures(session)
    print_summary(session)
    print(f" Figures: {fig_dir}")


if __name__ == "__main__":
    main()
