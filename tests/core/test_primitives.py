"""図面プリミティブと外接矩形のテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from propdraft.core.primitives import (
    Bounds,
    LineSegment,
    Polyline,
    PrimitiveGroup,
    Rectangle,
    TextLabel,
)


def test_rectangle_vertices_are_clockwise_from_top_left() -> None:
    r = Rectangle(origin=(1, 2), size=(10, 5))
    np.testing.assert_allclose(r.vertices(), [[1, 2], [11, 2], [11, 7], [1, 7]])
    assert r.closed is True


def test_group_bounds_cover_all_primitives() -> None:
    group = PrimitiveGroup(
        items=(
            Rectangle(origin=(0, 0), size=(10, 10)),
            LineSegment(start=(-5, 3), end=(2, 30)),
            Polyline(points=((4, -7), (20, 1)), closed=False),
        )
    )
    b = group.bounds
    assert (b.left, b.top, b.right, b.bottom) == (-5.0, -7.0, 20.0, 30.0)
    assert b.width == 25.0
    assert b.height == 37.0
    assert b.center == (7.5, 11.5)


def test_empty_group_has_no_bounds() -> None:
    with pytest.raises(ValueError):
        PrimitiveGroup().bounds


def test_scaled_group_keeps_pivot_fixed() -> None:
    group = PrimitiveGroup(items=(Rectangle(origin=(90, 40), size=(20, 20)),))
    scaled = group.scaled(2.0, (100.0, 50.0))

    (rect,) = scaled.items
    assert rect.origin == (80.0, 30.0)
    assert rect.size == (40.0, 40.0)
    assert scaled.bounds.center == group.bounds.center
    # 元のグループは変わらない
    assert group.items[0].origin == (90.0, 40.0)


def test_scaled_keeps_styles() -> None:
    seg = LineSegment(start=(0, 0), end=(1, 0), fill="#eeeeee")
    out = seg.scaled(3.0, (0.0, 0.0))
    assert out.end == (3.0, 0.0)
    assert out.stroke == seg.stroke
    assert out.fill == "#eeeeee"


def test_polyline_requires_two_points() -> None:
    with pytest.raises(ValueError):
        Polyline(points=((0, 0),))


def test_text_label_validates_justification_and_scales_anchor_only() -> None:
    with pytest.raises(ValueError):
        TextLabel(point=(0, 0), content="x", justification="middle")

    label = TextLabel(point=(10, 0), content="W: 1.0mm", rotation=90.0)
    out = label.scaled(2.0, (0.0, 0.0))
    assert out.point == (20.0, 0.0)
    assert out.style.font_size == label.style.font_size
    assert out.rotation == 90.0


def test_bounds_from_coords() -> None:
    b = Bounds.from_coords(np.array([[3.0, 4.0], [-1.0, 8.0]]))
    assert b == Bounds(left=-1.0, top=4.0, right=3.0, bottom=8.0)
