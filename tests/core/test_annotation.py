"""寸法注記（annotate）のテスト群。"""

from __future__ import annotations

from propdraft.core.annotation import annotate, format_dimension
from propdraft.core.primitives import GUIDE_STROKE, PrimitiveGroup, Rectangle


def _box() -> PrimitiveGroup:
    return PrimitiveGroup(items=(Rectangle(origin=(-90, -60), size=(180, 120)),))


def test_width_guide_and_label_sit_above_bounds() -> None:
    a = annotate(_box())

    assert a.width_guide.start == (-90.0, -90.0)
    assert a.width_guide.end == (90.0, -90.0)
    assert a.width_label.point == (0.0, -100.0)
    assert a.width_label.content == "W: 180.0mm"
    assert a.width_label.justification == "center"
    assert a.width_label.rotation == 0.0


def test_height_guide_and_label_sit_right_of_bounds() -> None:
    a = annotate(_box())

    assert a.height_guide.start == (120.0, -60.0)
    assert a.height_guide.end == (120.0, 60.0)
    assert a.height_label.point == (130.0, 0.0)
    assert a.height_label.content == "H: 120.0mm"
    assert a.height_label.rotation == 90.0


def test_styles() -> None:
    a = annotate(_box())
    for guide in (a.width_guide, a.height_guide):
        assert guide.stroke == GUIDE_STROKE
        assert guide.stroke.dash == (4.0, 4.0)
        assert guide.stroke.color == "#cbd5e1"
    for label in a.labels():
        assert label.style.color == "#475569"
        assert label.style.font_size == 10.0
        assert label.style.font_family == "monospace"


def test_custom_margin() -> None:
    a = annotate(_box(), margin=5.0)
    assert a.width_guide.start[1] == -65.0
    assert a.height_guide.start[0] == 95.0


def test_annotate_does_not_touch_group() -> None:
    group = _box()
    before = group.bounds
    annotate(group)
    assert group.bounds == before
    assert len(group) == 1


def test_format_dimension_uses_one_decimal() -> None:
    assert format_dimension("W", 150) == "W: 150.0mm"
    assert format_dimension("H", 33.333) == "H: 33.3mm"


def test_labels_align_to_given_center() -> None:
    group = PrimitiveGroup(items=(Rectangle(origin=(0, 0), size=(100, 40)),))
    a = annotate(group, center=(10.0, -5.0))

    assert a.width_label.point == (10.0, -40.0)
    assert a.height_label.point == (140.0, -5.0)
    # ガイド線は外接矩形に従う
    assert a.width_guide.start == (0.0, -30.0)
    assert a.height_guide.start == (130.0, 0.0)
