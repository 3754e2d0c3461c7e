"""
Layout Morphing Core Package.

This package contains the layout generation and transition engine that
arranges a fixed collection of nodes into one of four spatial layouts and
animates between them, including:

- Core data types (Transform, NodeRecord, SceneContext)
- Pure layout generators (table, sphere, helix, grid)
- Transition orchestration with staggered, eased per-node animation
- A frame-driven clock and transition metrics
"""

__version__ = "0.1.0"

from .enums import LayoutMode, TaskProperty, TransitionState
from .errors import MorphError, LayoutConfigError, TransitionError
from .config import MorphConfig
from .transform import Transform, orientation_facing
from .layouts import (
    LayoutSet,
    table_layout,
    sphere_layout,
    helix_layout,
    grid_layout,
    layout_for,
    generate_layouts,
    scatter_transforms,
)
from .context import SceneContext
from .orchestrator import TransitionOrchestrator
from .clock import AnimationClock
from .compiler import (
    NodeRecord,
    compile_from_dict,
    compile_from_yaml,
    compile_from_file,
    default_table,
)
from .metrics import (
    max_position_error,
    max_orientation_error,
    is_at_rest,
)
