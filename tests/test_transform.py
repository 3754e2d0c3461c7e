"""
Unit tests for the Transform type and coordinate helpers.

These tests validate spherical/cylindrical conversion, the look-at orientation
rule and its degenerate cases, and the frozen/writable behaviour of
transforms.
"""

import math

import numpy as np
import pytest

from morph_core.transform import (
    Transform,
    cylindrical_to_cartesian,
    orientation_facing,
    rotation_matrix,
    spherical_to_cartesian,
)


def _forward(orientation):
    """Local +z axis of an orientation expressed in world coordinates."""
    return rotation_matrix(orientation)[:, 2]


class TestTransform:
    def test_defaults_are_identity(self):
        t = Transform()
        assert np.array_equal(t.position, np.zeros(3))
        assert np.array_equal(t.orientation, np.zeros(3))

    def test_from_position_and_copy_are_independent(self):
        t = Transform.from_position(1, 2, 3)
        c = t.copy()
        c.position[0] = 99.0
        assert t.position[0] == 1.0
        assert t.almost_equal(Transform.from_position(1, 2, 3))

    def test_frozen_is_read_only(self):
        t = Transform.from_position(1, 2, 3).frozen()
        assert t.is_frozen
        with pytest.raises(ValueError):
            t.position[0] = 5.0
        # copies of frozen transforms are writable again
        c = t.copy()
        c.position[0] = 5.0
        assert not c.is_frozen

    def test_wrong_component_count_rejected(self):
        with pytest.raises(ValueError):
            Transform(position=(1.0, 2.0))

    def test_component_lookup(self):
        t = Transform.from_position(4, 5, 6)
        assert t.component("position") is t.position
        assert t.component("orientation") is t.orientation
        with pytest.raises(KeyError):
            t.component("scale")

    def test_as_dict_is_json_friendly(self):
        d = Transform.from_position(1, 2, 3).as_dict()
        assert d == {"position": [1.0, 2.0, 3.0], "orientation": [0.0, 0.0, 0.0]}
        assert all(type(v) is float for v in d["position"])


class TestCoordinateConversion:
    def test_spherical_equator_on_z(self):
        p = spherical_to_cartesian(800, math.pi / 2, 0.0)
        assert np.allclose(p, [0.0, 0.0, 800.0], atol=1e-9)

    def test_spherical_south_pole(self):
        p = spherical_to_cartesian(800, math.pi, 1.234)
        assert np.allclose(p, [0.0, -800.0, 0.0], atol=1e-9)
        assert np.linalg.norm(p) == pytest.approx(800.0)

    def test_cylindrical(self):
        p = cylindrical_to_cartesian(900, math.pi / 2, 10.0)
        assert np.allclose(p, [900.0, 10.0, 0.0], atol=1e-9)
        p = cylindrical_to_cartesian(900, math.pi, -5.0)
        assert np.allclose(p, [0.0, -5.0, -900.0], atol=1e-9)


class TestOrientationFacing:
    def test_facing_forward_is_identity(self):
        o = orientation_facing((0, 0, 0), (0, 0, 10))
        assert np.allclose(o, [0.0, 0.0, 0.0], atol=1e-12)

    def test_facing_positive_x_turns_about_y(self):
        o = orientation_facing((0, 0, 0), (5, 0, 0))
        assert np.allclose(o, [0.0, math.pi / 2, 0.0], atol=1e-9)

    @pytest.mark.parametrize(
        "src,dst",
        [
            ((0, 0, 0), (1, 2, 3)),
            ((100, -50, 20), (-300, 400, 10)),
            ((1, 1, 1), (1, -4, 7)),
            ((0, 0, 0), (-2, 0.5, -9)),
        ],
    )
    def test_local_z_points_at_target(self, src, dst):
        o = orientation_facing(src, dst)
        direction = np.subtract(dst, src, dtype=float)
        direction /= np.linalg.norm(direction)
        assert np.allclose(_forward(o), direction, atol=1e-9)

    def test_only_direction_matters(self):
        """Any point further along the same ray yields the same orientation."""
        p = np.array([300.0, -200.0, 500.0])
        assert np.allclose(orientation_facing(p, p * 2), orientation_facing(p, p * 7.5), atol=1e-12)

    def test_outward_and_inward_are_opposite(self):
        p = np.array([300.0, -200.0, 500.0])
        outward = _forward(orientation_facing(p, p * 2))
        inward = _forward(orientation_facing(p, np.zeros(3)))
        assert np.allclose(outward, -inward, atol=1e-9)

    def test_coincident_points_keep_forward_axis(self):
        o = orientation_facing((3, 3, 3), (3, 3, 3))
        assert np.allclose(o, [0.0, 0.0, 0.0], atol=1e-12)

    def test_parallel_to_up_stays_finite(self):
        o = orientation_facing((0, 0, 0), (0, 5, 0))
        assert np.all(np.isfinite(o))
        assert np.allclose(_forward(o), [0.0, 1.0, 0.0], atol=1e-3)
