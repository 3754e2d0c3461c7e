"""
Transition orchestration for morphing nodes between layouts.

The orchestrator animates every node's current Transform toward a target
LayoutSet slice. It owns the in-flight animation tasks and advances them
when the frame driver calls `update`:

1. `begin_transition` discards every task of the previous transition, then
   creates one position task and one orientation task per node, each with
   its own duration drawn uniformly from [base, 2 * base).
2. `update(dt)` advances every task, writes the eased value into the node's
   current Transform in place and invokes the render callback.
3. A completion timer armed at `completion_factor * base` (2x by default)
   renders on every update while armed and fires one final render plus the
   completion callback when it expires, even when there are no nodes.

Configuration: durations, easing and render coalescing are set through
`MorphConfig` in `morph_core.config`.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np

from .config import MorphConfig
from .context import SceneContext
from .easing import EasingFn, get_easing
from .enums import LayoutMode, TaskProperty, TransitionState
from .errors import TransitionError
from .transform import Transform

logger = logging.getLogger(__name__)

RenderFn = Callable[[], None]
CompletionFn = Callable[[int], None]


@dataclass
class AnimationTask:
    """
    Interpolation of one transform component of one node.

    Attributes:
        node: Index of the animated node
        prop: Which component is written (position or orientation)
        start: Value at the moment the task was created
        end: Target value
        duration: Length of the animation in milliseconds
        easing: Progress curve
        elapsed: Time advanced so far in milliseconds
    """

    node: int
    prop: TaskProperty
    start: np.ndarray
    end: np.ndarray
    duration: float
    easing: EasingFn
    elapsed: float = 0.0

    @property
    def done(self) -> bool:
        return self.duration <= 0 or self.elapsed >= self.duration

    def advance(self, dt_ms: float, out: np.ndarray) -> bool:
        """
        Advance by `dt_ms` and write the interpolated value into `out`.

        Returns:
            bool: True once the task has reached its end value
        """
        self.elapsed += dt_ms
        if self.done:
            out[:] = self.end
            return True
        k = self.easing(self.elapsed / self.duration)
        out[:] = self.start + (self.end - self.start) * k
        return False


@dataclass
class CompletionTimer:
    """Upper-bound timer of one transition generation."""

    generation: int
    duration: float
    elapsed: float = 0.0


class TransitionOrchestrator:
    """
    Drives every node of a `SceneContext` toward a target layout.

    At most one transition generation is active: starting a new one cancels
    the old one immediately and nodes redirect from wherever they are.

    Attributes:
        context: Scene whose current transforms are animated
        render: Zero-argument callback invoked after updates
        on_complete: Optional callback receiving the finished generation
        generation: Number of transitions started so far
        t: Total time advanced through `update`, in milliseconds
        stats: Counters for diagnostics and metrics
    """

    def __init__(
        self,
        context: SceneContext,
        render: RenderFn,
        config: MorphConfig | None = None,
        rng: Optional[random.Random] = None,
        on_complete: Optional[CompletionFn] = None,
    ):
        self.context = context
        self.render = render
        self.config = config or context.config
        self.rng = rng or random.Random(self.config.seed)
        self.on_complete = on_complete
        self.generation = 0
        self.t = 0.0
        self._tasks: List[AnimationTask] = []
        self._timer: Optional[CompletionTimer] = None
        # bumped by begin_transition, cancel and reset; update stops when it moves
        self._epoch = 0
        self.stats = self._fresh_stats()

    @staticmethod
    def _fresh_stats():
        return {
            "transitions_started": 0,
            "transitions_completed": 0,
            "transitions_superseded": 0,
            "transitions_cancelled": 0,
            "render_calls": 0,
            "task_updates": 0,
            "last_completion_ms": None,  # orchestrator time of the last completion
            "elapsed_ms": 0.0,
        }

    # ----- state -----
    @property
    def state(self) -> TransitionState:
        if self._tasks or self._timer is not None:
            return TransitionState.TRANSITIONING
        return TransitionState.IDLE

    @property
    def is_idle(self) -> bool:
        return self.state == TransitionState.IDLE

    @property
    def pending_tasks(self) -> int:
        """Number of animation tasks still in flight."""
        return len(self._tasks)

    @property
    def completion_pending(self) -> bool:
        return self._timer is not None

    # ----- transitions -----
    def begin_transition(self, targets: Sequence[Transform], base_duration_ms: float | None = None) -> int:
        """
        Start animating every node toward `targets`.

        Any transition still in flight is discarded first; its tasks never
        write again and its completion callback never fires.

        Args:
            targets: One target Transform per node, index-aligned
            base_duration_ms: Nominal duration; defaults to the configured one

        Returns:
            int: Generation number of the new transition

        Raises:
            TransitionError: Target count differs from the node count, or the
                duration is negative or not finite
        """
        base = self.config.base_duration_ms if base_duration_ms is None else float(base_duration_ms)
        n = self.context.node_count
        if len(targets) != n:
            raise TransitionError(f"Transition needs {n} targets, got {len(targets)}")
        if not math.isfinite(base) or base < 0:
            raise TransitionError(f"Base duration must be a non-negative number, got {base_duration_ms!r}")
        easing = get_easing(self.config.easing)

        if not self.is_idle:
            self.stats["transitions_superseded"] += 1
            logger.debug(
                "Superseding generation %d with %d tasks pending", self.generation, len(self._tasks)
            )
        self._tasks = []
        self._timer = None

        tasks: List[AnimationTask] = []
        for i in range(n):
            current = self.context.current[i]
            target = targets[i]
            for prop in TaskProperty:
                name = prop.name.lower()
                tasks.append(
                    AnimationTask(
                        node=i,
                        prop=prop,
                        start=current.component(name).copy(),
                        end=np.array(target.component(name), dtype=float),
                        duration=self.rng.random() * base + base,
                        easing=easing,
                    )
                )

        self._epoch += 1
        self.generation += 1
        self._tasks = tasks
        self._timer = CompletionTimer(self.generation, base * self.config.completion_factor)
        self.stats["transitions_started"] += 1
        logger.debug(
            "Generation %d: %d tasks, base %.1f ms, completion at %.1f ms",
            self.generation,
            len(tasks),
            base,
            self._timer.duration,
        )
        return self.generation

    def begin_layout(self, mode: LayoutMode | str, base_duration_ms: float | None = None) -> int:
        """Start a transition toward the context's targets for `mode`."""
        return self.begin_transition(self.context.targets(mode), base_duration_ms)

    def cancel(self) -> None:
        """Drop every pending task and the completion timer without callbacks."""
        if not self.is_idle:
            self.stats["transitions_cancelled"] += 1
            logger.debug("Cancelled generation %d", self.generation)
        self._tasks = []
        self._timer = None
        self._epoch += 1

    def reset(self) -> None:
        """Cancel any transition and clear time and statistics."""
        self._tasks = []
        self._timer = None
        self._epoch += 1
        self.generation = 0
        self.t = 0.0
        self.stats = self._fresh_stats()

    # ----- per-frame update -----
    def _render(self) -> None:
        self.stats["render_calls"] += 1
        self.render()

    def update(self, dt_ms: float) -> None:
        """
        Advance all in-flight tasks and the completion timer by `dt_ms`.

        Render callbacks run synchronously; if one of them starts a new
        transition or cancels, the remaining tasks of the old one are not
        advanced and are never restored.
        """
        if dt_ms < 0:
            raise ValueError(f"Time delta must be non-negative, got {dt_ms}")
        self.t += dt_ms
        self.stats["elapsed_ms"] = self.t
        if self.is_idle:
            return

        epoch = self._epoch
        per_task = self.config.render_per_task
        remaining: List[AnimationTask] = []
        for task in self._tasks:
            out = self.context.current[task.node].component(task.prop.name.lower())
            if not task.advance(dt_ms, out):
                remaining.append(task)
            self.stats["task_updates"] += 1
            if per_task:
                self._render()
                if self._epoch != epoch:
                    return
        updated = bool(self._tasks)
        self._tasks = remaining
        if updated and not per_task:
            self._render()
            if self._epoch != epoch:
                return

        timer = self._timer
        if timer is None:
            return
        timer.elapsed += dt_ms
        if timer.elapsed < timer.duration:
            self._render()
            return

        self._timer = None
        self.stats["transitions_completed"] += 1
        self.stats["last_completion_ms"] = self.t
        logger.debug("Generation %d complete at %.1f ms", timer.generation, self.t)
        self._render()
        if self.on_complete is not None:
            self.on_complete(timer.generation)
