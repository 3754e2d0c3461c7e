"""
Core enumerations for the layout morphing engine.

This module defines the closed set of layout modes, the animated properties of
a node, and the coarse state of a transition.
"""

from enum import Enum, auto


class LayoutMode(Enum):
    """
    Spatial arrangements a node collection can be morphed into.

    The set is closed:
    - TABLE: Data-driven planar arrangement from per-node column/row attributes
    - SPHERE: Quasi-uniform distribution on a sphere, nodes facing outward
    - HELIX: Cylindrical spiral, nodes facing away from the axis
    - GRID: 3D lattice of 5x5 layers
    """

    TABLE = auto()
    """Planar arrangement driven by each node's column and row."""

    SPHERE = auto()
    """Equal-area spiral on a sphere of fixed radius."""

    HELIX = auto()
    """Spiral around the vertical axis at a fixed radius."""

    GRID = auto()
    """Regular lattice with layers stacked along z."""

    @classmethod
    def parse(cls, name: "str | LayoutMode") -> "LayoutMode":
        """Return the mode for a case-insensitive name, or raise ValueError."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().upper()
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(m.name.lower() for m in cls)
            raise ValueError(f"Unknown layout mode '{name}' (expected one of: {valid})") from None


class TaskProperty(Enum):
    """Transform component driven by one animation task."""

    POSITION = auto()
    """Node position (x, y, z)."""

    ORIENTATION = auto()
    """Node orientation as Euler XYZ angles."""


class TransitionState(Enum):
    """
    Coarse state of the transition orchestrator.

    - IDLE: No tasks and no completion timer pending
    - TRANSITIONING: At least one task or the completion timer is in flight
    """

    IDLE = auto()
    TRANSITIONING = auto()
