"""
Tests for viz.utils.build_scene_elements and CSS transform formatting.
"""

import numpy as np

from morph_core.compiler import NodeRecord
from morph_core.context import SceneContext
from morph_core.enums import LayoutMode
from morph_core.transform import Transform, orientation_facing
from viz.utils import DEFAULT_BACKGROUND, build_scene_elements, css_matrix3d, object_matrix


def _context(records, current):
    layouts = {mode: [t.frozen() for t in current] for mode in LayoutMode}
    return SceneContext(records, current, layouts)


def test_builder_basic_elements():
    records = [
        NodeRecord("I", "One", "1.00794", 1, 1),
        NodeRecord("II", "Two", "4.002602", 18, 1, meta={"label": "Two!", "color": "#112233"}),
    ]
    ctx = _context(records, [Transform.from_position(1, 2, 3), Transform()])

    els = build_scene_elements(ctx)
    assert [e["number"] for e in els] == [1, 2]

    first = els[0]
    assert first["symbol"] == "I"
    assert first["details"] == ["One", "1.00794"]
    assert first["background"] == DEFAULT_BACKGROUND
    assert first["position"] == [1.0, 2.0, 3.0]
    assert first["rotation"] == [0.0, 0.0, 0.0]

    second = els[1]
    assert second["symbol"] == "Two!"
    assert second["background"] == "#112233"


def test_builder_accepts_plain_records():
    ctx = _context([{"column": 1, "row": 1}], [Transform()])
    (el,) = build_scene_elements(ctx)
    assert el["symbol"] == "1"
    assert el["details"] == ["", ""]


def test_css_matrix_for_translation():
    css = css_matrix3d(Transform.from_position(1, 2, 3))
    assert css == "translate(-50%,-50%)matrix3d(1,0,0,0,0,-1,0,0,0,0,1,0,1,2,3,1)"


def test_object_matrix_rotation_matches_facing():
    t = Transform((10, 20, 30), orientation_facing((10, 20, 30), (20, 20, 30)))
    m = object_matrix(t)
    assert np.allclose(m[:3, 2], [1.0, 0.0, 0.0], atol=1e-9)
    assert np.allclose(m[:3, 3], [10.0, 20.0, 30.0])
    css = css_matrix3d(t)
    assert css.startswith("translate(-50%,-50%)matrix3d(")
    assert css.split("matrix3d(", 1)[1].rstrip(")").count(",") == 15
