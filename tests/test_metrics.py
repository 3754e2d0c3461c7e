"""
Unit tests for transition metrics utilities and orchestrator instrumentation.
"""

import random

import pytest

from morph_core.config import MorphConfig
from morph_core.context import SceneContext
from morph_core.enums import LayoutMode
from morph_core.metrics import (
    is_at_rest,
    max_orientation_error,
    max_position_error,
    render_calls,
    transitions_completed,
    transitions_superseded,
)
from morph_core.orchestrator import TransitionOrchestrator


def _scene(n=5):
    records = [{"column": i + 1, "row": 1} for i in range(n)]
    return SceneContext.build(records, MorphConfig(seed=11))


class TestResidualErrors:
    def test_error_before_and_after_transition(self):
        ctx = _scene()
        sphere = ctx.targets(LayoutMode.SPHERE)
        assert max_position_error(ctx, sphere) > 0.0
        assert not is_at_rest(ctx, sphere)

        orch = TransitionOrchestrator(ctx, render=lambda: None, rng=random.Random(1))
        orch.begin_layout(LayoutMode.SPHERE, 200)
        while not orch.is_idle:
            orch.update(20)

        assert max_position_error(ctx, sphere) == 0.0
        assert max_orientation_error(ctx, sphere) == 0.0
        assert is_at_rest(ctx, sphere)

    def test_known_offset(self):
        ctx = _scene(2)
        grid = ctx.targets(LayoutMode.GRID)
        for cur, tgt in zip(ctx.current, grid):
            cur.position[:] = tgt.position
            cur.orientation[:] = tgt.orientation
        ctx.current[1].position[2] += 12.5
        assert max_position_error(ctx, grid) == pytest.approx(12.5)
        assert is_at_rest(ctx, grid, tol=13.0)

    def test_length_mismatch(self):
        ctx = _scene(3)
        with pytest.raises(ValueError):
            max_position_error(ctx, ctx.targets(LayoutMode.GRID)[:1])

    def test_empty_scene(self):
        ctx = SceneContext([], [], {mode: [] for mode in LayoutMode})
        assert max_position_error(ctx, []) == 0.0
        assert is_at_rest(ctx, [])


class TestOrchestratorCounters:
    def test_counters(self):
        ctx = _scene(2)
        orch = TransitionOrchestrator(ctx, render=lambda: None, rng=random.Random(2))
        orch.begin_layout(LayoutMode.HELIX, 100)
        orch.update(10)
        orch.begin_layout(LayoutMode.GRID, 100)
        while not orch.is_idle:
            orch.update(10)

        assert transitions_superseded(orch) == 1
        assert transitions_completed(orch) == 1
        assert render_calls(orch) == orch.stats["render_calls"] > 0
        assert orch.stats["transitions_started"] == 2
