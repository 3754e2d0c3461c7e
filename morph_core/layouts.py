"""
Layout generation for the four arrangement modes.

Every function here is pure and deterministic: given a node count (and, for
the table mode, per-node column/row attributes) it returns one frozen target
`Transform` per node, index-aligned with node identity. Targets depend only
on their inputs, so a LayoutSet is computed once and reused for every
transition into that mode.

Modes:
- TABLE: x = column * 140 - 1330, y = -row * 180 + 990, z = 0, no rotation
- SPHERE: equal-area spiral at radius 800, nodes facing away from the center
- HELIX: theta = i * 0.175 + pi, y = -i * 8 + 450 at radius 900, facing outward
- GRID: 5x5 layers 400 apart in x/y, layers 1000 apart along z, no rotation

The only randomness in this module is `scatter_transforms`, the initial
placement used before the first transition. It is not part of any LayoutSet.
"""

from __future__ import annotations

import math
import numbers
import random
from typing import Any, Dict, List, Mapping, Optional, Sequence

import numpy as np

from .compiler import require_number
from .config import MorphConfig
from .enums import LayoutMode
from .errors import LayoutConfigError
from .transform import (
    Transform,
    cylindrical_to_cartesian,
    orientation_facing,
    spherical_to_cartesian,
)

LayoutSet = Dict[LayoutMode, List[Transform]]

_MISSING = object()


def _check_count(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise LayoutConfigError(f"Node count must be an integer, got {n!r}")
    if n < 0:
        raise LayoutConfigError(f"Node count must be non-negative, got {n}")
    return int(n)


def _attribute(record: Any, key: str, index: int) -> float:
    if isinstance(record, Mapping):
        value = record.get(key, _MISSING)
    else:
        value = getattr(record, key, _MISSING)
    if value is _MISSING or value is None:
        raise LayoutConfigError(f"Node {index}: missing required attribute '{key}'")
    return require_number(value, key, index)


def table_layout(records: Sequence[Any], n: Optional[int] = None, config: Optional[MorphConfig] = None) -> List[Transform]:
    """
    Place nodes on a plane from their `column` and `row` attributes.

    Args:
        records: Per-node attribute records (mappings or objects) exposing
            `column` and `row`
        n: Node count; defaults to len(records)
        config: Layout constants

    Returns:
        List[Transform]: n frozen targets with identity orientation

    Raises:
        LayoutConfigError: Fewer records than nodes, or a record without a
            numeric column/row
    """
    cfg = config or MorphConfig()
    n = len(records) if n is None else _check_count(n)
    if len(records) < n:
        raise LayoutConfigError(f"Table layout needs {n} attribute records, got {len(records)}")

    targets = []
    for i in range(n):
        column = _attribute(records[i], "column", i)
        row = _attribute(records[i], "row", i)
        x = column * cfg.table_column_spacing + cfg.table_x_offset
        y = -row * cfg.table_row_spacing + cfg.table_y_offset
        targets.append(Transform.from_position(x, y, 0.0).frozen())
    return targets


def sphere_layout(n: int, config: Optional[MorphConfig] = None) -> List[Transform]:
    """
    Distribute n nodes quasi-uniformly over a sphere.

    Node i sits at polar angle phi = acos(-1 + 2i/n) and azimuth
    theta = sqrt(n * pi) * phi, and faces the point at twice its position so
    its front points away from the center.
    """
    cfg = config or MorphConfig()
    n = _check_count(n)
    targets = []
    for i in range(n):
        phi = math.acos(-1.0 + (2.0 * i) / n)
        theta = math.sqrt(n * math.pi) * phi
        position = spherical_to_cartesian(cfg.sphere_radius, phi, theta)
        orientation = orientation_facing(position, position * 2.0)
        targets.append(Transform(position, orientation).frozen())
    return targets


def helix_layout(n: int, config: Optional[MorphConfig] = None) -> List[Transform]:
    """
    Wind n nodes down a cylindrical spiral around the y axis.

    Each node faces the point with the same height and twice its horizontal
    offset, so it looks straight away from the axis.
    """
    cfg = config or MorphConfig()
    n = _check_count(n)
    targets = []
    for i in range(n):
        theta = i * cfg.helix_angle_step + math.pi
        y = -(i * cfg.helix_rise) + cfg.helix_y_offset
        position = cylindrical_to_cartesian(cfg.helix_radius, theta, y)
        outward = np.array([position[0] * 2.0, position[1], position[2] * 2.0])
        orientation = orientation_facing(position, outward)
        targets.append(Transform(position, orientation).frozen())
    return targets


def grid_layout(n: int, config: Optional[MorphConfig] = None) -> List[Transform]:
    """Stack n nodes in layers of grid_columns x grid_rows cells."""
    cfg = config or MorphConfig()
    n = _check_count(n)
    per_layer = cfg.grid_columns * cfg.grid_rows
    targets = []
    for i in range(n):
        x = (i % cfg.grid_columns) * cfg.grid_spacing + cfg.grid_x_offset
        y = -((i // cfg.grid_columns) % cfg.grid_rows) * cfg.grid_spacing + cfg.grid_y_offset
        z = (i // per_layer) * cfg.grid_depth_spacing + cfg.grid_z_offset
        targets.append(Transform.from_position(x, y, z).frozen())
    return targets


def layout_for(
    mode: LayoutMode | str,
    records: Optional[Sequence[Any]] = None,
    n: Optional[int] = None,
    config: Optional[MorphConfig] = None,
) -> List[Transform]:
    """
    Dispatch to the generator for `mode`.

    `records` is required for the table mode; for the other modes `n`
    defaults to len(records).
    """
    mode = LayoutMode.parse(mode)
    if mode == LayoutMode.TABLE:
        if records is None:
            raise LayoutConfigError("Table layout requires attribute records")
        return table_layout(records, n, config)
    if n is None:
        if records is None:
            raise LayoutConfigError(f"{mode.name.lower()} layout requires a node count")
        n = len(records)
    if mode == LayoutMode.SPHERE:
        return sphere_layout(n, config)
    if mode == LayoutMode.HELIX:
        return helix_layout(n, config)
    return grid_layout(n, config)


def generate_layouts(records: Sequence[Any], config: Optional[MorphConfig] = None) -> LayoutSet:
    """Compute the targets of every mode for the nodes described by `records`."""
    return {mode: layout_for(mode, records, len(records), config) for mode in LayoutMode}


def scatter_transforms(n: int, rng: Optional[random.Random] = None, config: Optional[MorphConfig] = None) -> List[Transform]:
    """
    Return n writable transforms scattered uniformly in a cube.

    Each coordinate is drawn from [-scatter_extent, scatter_extent); the
    orientation is identity.
    """
    cfg = config or MorphConfig()
    n = _check_count(n)
    rng = rng or random.Random(cfg.seed)
    extent = cfg.scatter_extent
    return [
        Transform.from_position(
            rng.random() * 2 * extent - extent,
            rng.random() * 2 * extent - extent,
            rng.random() * 2 * extent - extent,
        )
        for _ in range(n)
    ]
