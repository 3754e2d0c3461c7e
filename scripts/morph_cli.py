#!/usr/bin/env python3
"""
Layout morphing CLI

Usage modes:
- Default run: compile a node table, morph through a sequence of layouts on a
  simulated clock, print a per-transition summary or write JSON
- Dry run: compile and print the generated layouts without animating
- Frames: save a matplotlib plot whenever a transition completes
- Utility: list layout modes and bundled tables, show version
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from glob import glob
from pathlib import Path
from typing import Any, Dict, List

from morph_core import AnimationClock, SceneContext, TransitionOrchestrator  # type: ignore
from morph_core.compiler import compile_from_file, default_table  # type: ignore
from morph_core.config import MorphConfig  # type: ignore
from morph_core.easing import EASINGS  # type: ignore
from morph_core.enums import LayoutMode  # type: ignore
from morph_core.errors import MorphError  # type: ignore
from morph_core.metrics import max_orientation_error, max_position_error  # type: ignore

DEFAULT_SEQUENCE = "table,sphere,helix,grid"


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Morph a node table through layouts and dump transition metrics",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Utilities / meta
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")
    p.add_argument("--list-layouts", action="store_true", help="List layout modes and exit")
    p.add_argument("--list-tables", action="store_true", help="List bundled node tables and exit")

    # Primary input
    p.add_argument("table", nargs="?", help="Path to YAML node table (default: bundled demo table)")

    # Execution
    p.add_argument("--sequence", default=DEFAULT_SEQUENCE, help="Comma-separated layout modes to morph through")
    p.add_argument("--duration", type=float, default=None, help="Base transition duration in ms")
    p.add_argument("--fps", type=float, default=60.0, help="Simulated frame rate")
    p.add_argument("--seed", type=int, default=None, help="Seed for scatter and duration jitter")
    p.add_argument("--easing", choices=sorted(EASINGS), default=None, help="Ease-in-out curve")
    p.add_argument("--coalesce-renders", action="store_true", help="Render once per frame instead of once per task update")
    p.add_argument("--dry-run", action="store_true", help="Compile and generate layouts only; do not animate")
    p.add_argument("--out", type=str, default="", help="Optional output JSON file path")
    p.add_argument("--frames-dir", type=str, default="", help="Save a PNG frame at every transition completion")

    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> MorphConfig:
    cfg = MorphConfig()
    if args.duration is not None:
        cfg.base_duration_ms = float(args.duration)
    if args.seed is not None:
        cfg.seed = int(args.seed)
    if args.easing is not None:
        cfg.easing = args.easing
    cfg.render_per_task = not args.coalesce_renders
    return cfg.validate()


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def find_sample_tables() -> List[str]:
    here = Path(__file__).resolve()
    repo_root = here.parent.parent
    candidates = []
    for base in [repo_root, here.parent]:
        candidates.extend(sorted(glob(str(base / "*.yaml"))))
    seen = set()
    result = []
    for c in candidates:
        if c not in seen:
            seen.add(c)
            result.append(c)
    return result


def parse_sequence(text: str) -> List[LayoutMode]:
    return [LayoutMode.parse(name) for name in text.split(",") if name.strip()]


def load_records(path: str | None):
    if path:
        logging.info("Compiling node table from %s", path)
        return compile_from_file(path)
    logging.info("Using bundled demo table")
    return default_table()


def layout_summary(context: SceneContext) -> Dict[str, Any]:
    return {
        "nodes": context.node_count,
        "layouts": {
            mode.name.lower(): [t.as_dict() for t in context.targets(mode)]
            for mode in LayoutMode
        },
    }


def run_sequence(context: SceneContext, sequence: List[LayoutMode], fps: float, frames_dir: str = "") -> Dict[str, Any]:
    """Morph through `sequence` on a simulated clock and collect per-transition results."""
    completions: List[int] = []
    orchestrator = TransitionOrchestrator(context, render=lambda: None, on_complete=completions.append)
    clock = AnimationClock(orchestrator)

    recorder = None
    if frames_dir:
        from viz.plot import FrameRecorder  # lazy: matplotlib only when frames are requested

        recorder = FrameRecorder(context, frames_dir)

    frame_ms = 1000.0 / fps
    cfg = orchestrator.config
    # tasks run up to twice the base duration; the timer runs completion_factor times it
    max_ms = cfg.base_duration_ms * max(cfg.completion_factor, 2.0) + 2 * frame_ms
    transitions = []
    for mode in sequence:
        renders_before = orchestrator.stats["render_calls"]
        generation = orchestrator.begin_layout(mode)
        spent = clock.run_until_idle(frame_ms=frame_ms, max_ms=max_ms)
        targets = context.targets(mode)
        entry: Dict[str, Any] = {
            "mode": mode.name.lower(),
            "generation": generation,
            "completed": generation in completions,
            "elapsed_ms": spent,
            "render_calls": orchestrator.stats["render_calls"] - renders_before,
            "max_position_error": max_position_error(context, targets),
            "max_orientation_error": max_orientation_error(context, targets),
        }
        if recorder is not None:
            entry["frame"] = recorder.save(title=mode.name.lower())
        logging.info("%s done in %.0f ms (%d renders)", entry["mode"], spent, entry["render_calls"])
        transitions.append(entry)

    return {
        "transitions": transitions,
        "frames": clock.frames,
        "stats": dict(orchestrator.stats),
    }


def main(argv: List[str] | None = None) -> int:
    try:
        from morph_core import __version__ as morph_version  # type: ignore
    except ImportError:
        morph_version = "unknown"

    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.version:
        print(morph_version)
        return 0

    if args.list_layouts:
        print(json.dumps([m.name.lower() for m in LayoutMode], indent=2))
        return 0

    if args.list_tables:
        print(json.dumps(find_sample_tables(), indent=2))
        return 0

    if args.fps <= 0:
        print("error: --fps must be positive", file=sys.stderr)
        return 2

    try:
        cfg = build_config(args)
        sequence = parse_sequence(args.sequence)
        records = load_records(args.table)
        context = SceneContext.build(records, cfg)
    except (MorphError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.dry_run:
        result: Dict[str, Any] = layout_summary(context)
    else:
        try:
            result = run_sequence(context, sequence, args.fps, args.frames_dir)
        except RuntimeError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        result["final"] = context.snapshot()

    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2)
    else:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
