"""
Transform data type and coordinate-system helpers.

A Transform is the position and orientation of one node. Orientation is an
Euler angle triple in radians applied in XYZ order, the convention used by
the scene renderer that consumes it. The helpers in this module are pure:
they convert spherical and cylindrical coordinates to Cartesian ones and
compute the orientation that makes a node face a given point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

import numpy as np

Vec3 = Sequence[float]

UP = np.array([0.0, 1.0, 0.0])
"""Default up axis used when building a look-at basis."""

_GIMBAL_LIMIT = 0.9999999


def _vec3(values: Vec3) -> np.ndarray:
    arr = np.array(values, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"Expected 3 components, got {arr.shape[0]}")
    return arr


@dataclass(eq=False)
class Transform:
    """
    Position and orientation of a node.

    Used both as a node's mutable *current* state and as an immutable layout
    *target* (see `frozen`).

    Attributes:
        position: (x, y, z) in scene units
        orientation: Euler XYZ angles in radians
    """

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    """Position (x, y, z) in scene units."""

    orientation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    """Euler angles (x, y, z) in radians, XYZ order."""

    def __post_init__(self):
        self.position = _vec3(self.position)
        self.orientation = _vec3(self.orientation)

    @classmethod
    def identity(cls) -> "Transform":
        return cls()

    @classmethod
    def from_position(cls, x: float, y: float, z: float) -> "Transform":
        return cls(position=(x, y, z))

    def copy(self) -> "Transform":
        """Return a writable deep copy."""
        return Transform(self.position.copy(), self.orientation.copy())

    def frozen(self) -> "Transform":
        """Return a copy whose arrays are read-only."""
        t = self.copy()
        t.position.flags.writeable = False
        t.orientation.flags.writeable = False
        return t

    @property
    def is_frozen(self) -> bool:
        return not (self.position.flags.writeable or self.orientation.flags.writeable)

    def component(self, name: str) -> np.ndarray:
        """Return the array named 'position' or 'orientation'."""
        if name == "position":
            return self.position
        if name == "orientation":
            return self.orientation
        raise KeyError(name)

    def almost_equal(self, other: "Transform", tol: float = 1e-9) -> bool:
        return bool(
            np.allclose(self.position, other.position, rtol=0.0, atol=tol)
            and np.allclose(self.orientation, other.orientation, rtol=0.0, atol=tol)
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "position": [float(v) for v in self.position],
            "orientation": [float(v) for v in self.orientation],
        }

    def __repr__(self) -> str:
        p = ", ".join(f"{v:.3f}" for v in self.position)
        o = ", ".join(f"{v:.4f}" for v in self.orientation)
        return f"Transform(position=({p}), orientation=({o}))"


def spherical_to_cartesian(radius: float, phi: float, theta: float) -> np.ndarray:
    """
    Convert spherical coordinates to Cartesian ones.

    `phi` is the polar angle measured from +y, `theta` the azimuth around y
    measured from +z.
    """
    sin_phi = np.sin(phi)
    return np.array(
        [
            radius * sin_phi * np.sin(theta),
            radius * np.cos(phi),
            radius * sin_phi * np.cos(theta),
        ]
    )


def cylindrical_to_cartesian(radius: float, theta: float, y: float) -> np.ndarray:
    """Convert cylindrical coordinates around the y axis to Cartesian ones."""
    return np.array([radius * np.sin(theta), float(y), radius * np.cos(theta)])


def euler_from_basis(x_axis: np.ndarray, y_axis: np.ndarray, z_axis: np.ndarray) -> np.ndarray:
    """
    Decompose a rotation given by its basis columns into Euler XYZ angles.

    Args:
        x_axis, y_axis, z_axis: Orthonormal columns of the rotation matrix

    Returns:
        np.ndarray: (x, y, z) angles in radians
    """
    m11, m12, m13 = x_axis[0], y_axis[0], z_axis[0]
    m22, m23 = y_axis[1], z_axis[1]
    m32, m33 = y_axis[2], z_axis[2]

    ry = np.arcsin(np.clip(m13, -1.0, 1.0))
    if abs(m13) < _GIMBAL_LIMIT:
        rx = np.arctan2(-m23, m33)
        rz = np.arctan2(-m12, m11)
    else:
        rx = np.arctan2(m32, m22)
        rz = 0.0
    return np.array([rx, ry, rz], dtype=float)


def orientation_facing(from_pos: Vec3, to_pos: Vec3, up: Vec3 = UP) -> np.ndarray:
    """
    Return the Euler XYZ orientation whose local +z axis points at `to_pos`.

    This is the look-at rule for scene objects (not cameras): the node at
    `from_pos` turns its front face toward `to_pos`, keeping `up` as close to
    its local +y as possible.

    Degenerate inputs:
    - Coincident points keep the forward axis at +z.
    - A forward axis parallel to `up` is nudged by 1e-4 before the basis is
      built, so the result stays finite.
    """
    up = _vec3(up)
    forward = _vec3(to_pos) - _vec3(from_pos)
    if not np.any(forward):
        forward = np.array([0.0, 0.0, 1.0])
    forward = forward / np.linalg.norm(forward)

    right = np.cross(up, forward)
    if not np.any(right):
        if abs(up[2]) == 1.0:
            forward[0] += 0.0001
        else:
            forward[2] += 0.0001
        forward = forward / np.linalg.norm(forward)
        right = np.cross(up, forward)

    right = right / np.linalg.norm(right)
    true_up = np.cross(forward, right)
    return euler_from_basis(right, true_up, forward)


def rotation_matrix(orientation: Vec3) -> np.ndarray:
    """Return the 3x3 rotation matrix for Euler XYZ angles."""
    rx, ry, rz = _vec3(orientation)
    a, b = np.cos(rx), np.sin(rx)
    c, d = np.cos(ry), np.sin(ry)
    e, f = np.cos(rz), np.sin(rz)
    ae, af, be, bf = a * e, a * f, b * e, b * f
    return np.array(
        [
            [c * e, -c * f, d],
            [af + be * d, ae - bf * d, -b * c],
            [bf - ae * d, be + af * d, a * c],
        ]
    )
