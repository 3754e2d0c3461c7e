"""
Metrics utilities for layout transitions.

This module provides:
- Residual error helpers comparing current transforms with layout targets
- Convenience helpers to read counters from the orchestrator

The orchestrator records the following statistics in `orchestrator.stats`:
- transitions_started / transitions_completed: begin and completion counts
- transitions_superseded: transitions discarded by a newer one
- transitions_cancelled: transitions dropped through `cancel`
- render_calls: number of render callback invocations
- task_updates: number of task advances
- last_completion_ms: orchestrator time of the last completion
"""

from __future__ import annotations
from typing import Sequence

import numpy as np

from .context import SceneContext
from .transform import Transform


def _max_error(context: SceneContext, targets: Sequence[Transform], name: str) -> float:
    if len(targets) != context.node_count:
        raise ValueError(f"Expected {context.node_count} targets, got {len(targets)}")
    if not targets:
        return 0.0
    return float(
        max(
            np.max(np.abs(cur.component(name) - tgt.component(name)))
            for cur, tgt in zip(context.current, targets)
        )
    )


def max_position_error(context: SceneContext, targets: Sequence[Transform]) -> float:
    """Largest absolute coordinate difference between current and target positions."""
    return _max_error(context, targets, "position")


def max_orientation_error(context: SceneContext, targets: Sequence[Transform]) -> float:
    """Largest absolute Euler angle difference between current and target orientations."""
    return _max_error(context, targets, "orientation")


def is_at_rest(context: SceneContext, targets: Sequence[Transform], tol: float = 1e-9) -> bool:
    """Return True when every node sits on its target within `tol`."""
    return (
        max_position_error(context, targets) <= tol
        and max_orientation_error(context, targets) <= tol
    )


def render_calls(orchestrator) -> int:
    """Return the number of render callback invocations."""
    return int(orchestrator.stats.get("render_calls", 0))


def transitions_completed(orchestrator) -> int:
    return int(orchestrator.stats.get("transitions_completed", 0))


def transitions_superseded(orchestrator) -> int:
    return int(orchestrator.stats.get("transitions_superseded", 0))
