"""classify → resolve → build → annotate → fit の一括パイプラインのテスト群。"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from propdraft.core.classifier import TemplateId
from propdraft.core.parameters import BlueprintParameter, SemanticIndex
from propdraft.core.pipeline import build_blueprint, draw_blueprint
from propdraft.core.primitives import Polyline, Rectangle, TextLabel
from propdraft.core.surface import DrawingSurface, PathCall, TextCall
from propdraft.core.template_registry import template_registry
from propdraft.core.templates.box_tray import BoxTrayParams
from propdraft.core.templates.sloped_stand import SlopedStandParams
from propdraft.core.templates.stepped_tiers import SteppedTiersParams

VIEWPORT = (800, 550)


def _p(name: str, value: float, lo: float = 0.0, hi: float = 500.0) -> BlueprintParameter:
    return BlueprintParameter(name=name, value=value, min=lo, max=hi, unit="mm")


def test_scenario_sloped_stand() -> None:
    params = [
        _p("Base Width", 100.0, 50.0, 200.0),
        _p("Total Height", 80.0),
        _p("Slope Angle", 25.0),
    ]
    bp = build_blueprint(params, "a sloped ring stand", VIEWPORT)

    assert bp.template is TemplateId.SLOPED_STAND
    assert bp.params == SlopedStandParams(base=100.0, height=80.0, angle=25.0)
    assert bp.scale == 1.2
    (profile,) = bp.prop.items
    assert isinstance(profile, Polyline)
    assert profile.closed
    # 中心 (400, 275) で作図し、1.2 倍したときの頂点
    np.testing.assert_allclose(
        profile.vertices(),
        [[340.0, 323.0], [460.0, 323.0], [460.0, 257.0], [340.0, 227.0]],
    )


def test_scenario_stepped_tiers_with_defaults() -> None:
    bp = build_blueprint([], "three-tier stepped jewelry tray", VIEWPORT)

    assert bp.template is TemplateId.STEPPED_TIERS
    assert bp.params == SteppedTiersParams(width=150.0, height=40.0, tiers=3)
    assert len(bp.prop) == 3
    assert all(isinstance(r, Rectangle) for r in bp.prop)
    widths = [r.size[0] / bp.scale for r in bp.prop]
    assert widths == pytest.approx([150.0, 120.0, 90.0])


def test_scenario_box_tray_zero_depth() -> None:
    bp = build_blueprint([_p("Depth", 0.0)], "", VIEWPORT)

    assert bp.template is TemplateId.BOX_TRAY
    assert bp.params == BoxTrayParams(width=180.0, height=120.0, depth=20.0)
    outer, inner = bp.prop.items[4], bp.prop.items[5]
    inset_x = (inner.origin[0] - outer.origin[0]) / bp.scale
    inset_y = (inner.origin[1] - outer.origin[1]) / bp.scale
    assert inset_x == pytest.approx(20.0)
    assert inset_y == pytest.approx(20.0)


def test_labels_report_unscaled_millimetres() -> None:
    bp = build_blueprint([], None, VIEWPORT)
    assert bp.annotations.width_label.content == "W: 180.0mm"
    assert bp.annotations.height_label.content == "H: 120.0mm"
    assert bp.prop.bounds.width == pytest.approx(180.0 * 1.2)


def test_prop_is_centered_in_viewport() -> None:
    bp = build_blueprint([], None, (1000, 600))
    assert bp.prop.bounds.center == pytest.approx((500.0, 300.0))


def test_pipeline_is_idempotent() -> None:
    params = [_p("Tier Count", 4.0), _p("Step Height", 30.0), _p("Width", 210.0)]
    a = build_blueprint(params, "tiered riser", VIEWPORT)
    b = build_blueprint(list(params), "tiered riser", VIEWPORT)

    assert a == b
    np.testing.assert_array_equal(a.prop.coords(), b.prop.coords())
    assert [l.content for l in a.annotations.labels()] == [l.content for l in b.annotations.labels()]


def test_semantic_index_gives_same_result_as_direct_scan() -> None:
    params = [_p("Total Height", 90.0), _p("Step Height", 20.0), _p("Tier Count", 2.0)]
    index = SemanticIndex.build(params, template_registry.semantic_keys())
    assert build_blueprint(params, "step", VIEWPORT, index=index) == build_blueprint(
        params, "step", VIEWPORT
    )


def test_box_tray_bounds_grow_with_width() -> None:
    narrow = build_blueprint([_p("Width", 100.0)], "", VIEWPORT, max_scale=1.0)
    wide = build_blueprint([_p("Width", 140.0)], "", VIEWPORT, max_scale=1.0)
    assert wide.prop.bounds.width > narrow.prop.bounds.width


def test_draw_blueprint_clears_then_draws_prop_guides_labels() -> None:
    surface = DrawingSurface(VIEWPORT)
    surface.draw_label(TextLabel(point=(0, 0), content="stale"))

    bp = build_blueprint([], "", VIEWPORT)
    draw_blueprint(bp, surface)
    draw_blueprint(bp, surface)

    calls = surface.calls
    assert len(calls) == 6 + 2 + 2
    assert all(isinstance(c, PathCall) for c in calls[:8])
    assert all(isinstance(c, TextCall) for c in calls[8:])
    assert [c.content for c in calls[8:]] == ["W: 180.0mm", "H: 120.0mm"]
    assert calls[6].stroke.dash == (4.0, 4.0)


def test_negative_tier_count_falls_back_instead_of_raising() -> None:
    bp = build_blueprint([_p("Tier Count", -0.6, -10.0)], "stepped tray", VIEWPORT)
    assert bp.params.tiers == 3
    assert len(bp.prop) == 3


def test_zero_collapse_is_resolved_and_logged_once(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="propdraft.core.parameters.resolver"):
        build_blueprint([_p("Depth", 0.0)], "", VIEWPORT)
    collapsed = [r for r in caplog.records if "値 0" in r.getMessage()]
    assert len(collapsed) == 1


def test_labels_stay_on_canvas_center_when_bounds_are_off_center() -> None:
    params = [_p("Base Width", 100.0), _p("Total Height", 80.0), _p("Slope Angle", 160.0)]
    bp = build_blueprint(params, "sloped stand", VIEWPORT)

    assert bp.prop.bounds.center[1] != pytest.approx(275.0)
    assert bp.annotations.width_label.point[0] == pytest.approx(400.0)
    assert bp.annotations.height_label.point[1] == pytest.approx(275.0)
