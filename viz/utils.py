"""
Lightweight visual-element descriptors decoupled from any renderer to enable testing.
"""

from __future__ import annotations

from typing import Any, Dict, List

import numpy as np

from morph_core.compiler import NodeRecord
from morph_core.context import SceneContext
from morph_core.transform import Transform, rotation_matrix

DEFAULT_BACKGROUND = "rgba(50, 50, 255, 0.3)"


def _eps(value: float) -> float:
    return 0.0 if abs(value) < 1e-10 else float(value)


def object_matrix(transform: Transform) -> np.ndarray:
    """Return the 4x4 object-to-world matrix of a transform."""
    m = np.eye(4)
    m[:3, :3] = rotation_matrix(transform.orientation)
    m[:3, 3] = transform.position
    return m


def css_matrix3d(transform: Transform) -> str:
    """Format a transform as a centered CSS `matrix3d` with y pointing down."""
    e = object_matrix(transform).flatten(order="F")
    values = [_eps(v) for v in e]
    # CSS y axis points down: negate the second basis column
    for i in range(4, 8):
        values[i] = _eps(-values[i])
    return "translate(-50%,-50%)matrix3d(" + ",".join(f"{v:g}" for v in values) + ")"


def build_scene_elements(context: SceneContext) -> List[Dict[str, Any]]:
    """Convert a SceneContext into renderer-agnostic element descriptors.

    Record meta overrides supported:
    - color: CSS background color
    - label: replaces the symbol text
    """
    elements: List[Dict[str, Any]] = []
    for index, transform in enumerate(context.current):
        rec = context.record(index)
        if isinstance(rec, NodeRecord):
            meta = rec.meta or {}
            symbol, name, detail = rec.symbol, rec.name, rec.detail
        else:
            meta = {}
            symbol, name, detail = str(index + 1), "", ""
        elements.append({
            "id": index,
            "number": index + 1,
            "symbol": meta.get("label") or symbol,
            "details": [name, detail],
            "background": meta.get("color") or DEFAULT_BACKGROUND,
            "position": [float(v) for v in transform.position],
            "rotation": [float(v) for v in transform.orientation],
            "css": css_matrix3d(transform),
        })
    return elements
