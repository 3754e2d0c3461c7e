"""
Configuration objects for the morphing engine.

Exposes the geometric constants of every layout mode and the timing policy of
transitions, enabling experiments without editing core logic.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .easing import EASINGS


@dataclass
class MorphConfig:
    """
    Configuration for layout generation and `TransitionOrchestrator` timing.

    Defaults reproduce the reference arrangement of the periodic-table demo.
    """

    # Table (data-driven) layout: x = column * spacing + offset
    table_column_spacing: float = 140.0
    table_x_offset: float = -1330.0
    # y = -row * spacing + offset
    table_row_spacing: float = 180.0
    table_y_offset: float = 990.0

    # Sphere layout
    sphere_radius: float = 800.0

    # Helix layout
    helix_radius: float = 900.0
    helix_angle_step: float = 0.175
    helix_rise: float = 8.0
    helix_y_offset: float = 450.0

    # Grid layout: columns x rows per layer, layers stacked along z
    grid_columns: int = 5
    grid_rows: int = 5
    grid_spacing: float = 400.0
    grid_depth_spacing: float = 1000.0
    grid_x_offset: float = -800.0
    grid_y_offset: float = 800.0
    grid_z_offset: float = -2000.0

    # Initial scatter: each coordinate uniform in [-extent, extent)
    scatter_extent: float = 2000.0

    # Transition timing (milliseconds)
    base_duration_ms: float = 1000.0
    completion_factor: float = 2.0
    easing: str = "quadratic_in_out"

    # Render after every task update; False renders once per tick instead
    render_per_task: bool = True

    # Seed for the scatter and duration jitter RNG (None -> nondeterministic)
    seed: Optional[int] = None

    def validate(self) -> "MorphConfig":
        """Raise ValueError when a field cannot produce a usable layout."""
        positive = {
            "sphere_radius": self.sphere_radius,
            "helix_radius": self.helix_radius,
            "grid_spacing": self.grid_spacing,
            "grid_depth_spacing": self.grid_depth_spacing,
        }
        for name, value in positive.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.grid_columns < 1 or self.grid_rows < 1:
            raise ValueError("grid_columns and grid_rows must be at least 1")
        if self.scatter_extent < 0:
            raise ValueError("scatter_extent must be non-negative")
        if self.base_duration_ms < 0:
            raise ValueError("base_duration_ms must be non-negative")
        if self.completion_factor <= 0:
            raise ValueError("completion_factor must be positive")
        if self.easing not in EASINGS:
            raise ValueError(f"Unknown easing '{self.easing}' (expected one of: {', '.join(sorted(EASINGS))})")
        return self
