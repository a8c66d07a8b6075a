import math

import pytest

from src.core.exceptions import DegenerateChartError, ReportConfigError
from src.report.chart import ChartConfig, ChartGeometryBuilder
from src.report.models import CategoryScore


@pytest.fixture
def builder():
    return ChartGeometryBuilder(ChartConfig(radius=100, center_x=200, center_y=150))


def _scores(*values):
    return [CategoryScore(category=f"C{i}", score=v) for i, v in enumerate(values)]


def test_counts_match_categories(builder):
    geometry = builder.build(_scores(5, 6, 7, 8, 9))

    assert len(geometry.polygon) == len(geometry.axis_lines) == len(geometry.label_anchors) == 5
    assert [p.category for p in geometry.points] == ["C0", "C1", "C2", "C3", "C4"]


def test_full_mark_at_top_reaches_outer_ring(builder):
    geometry = builder.build(_scores(10, 5, 0, 5))
    top = geometry.points[0]

    assert top.vertex.x == pytest.approx(200)
    assert top.vertex.y == pytest.approx(150 - 100)


def test_vertices_go_clockwise(builder):
    geometry = builder.build(_scores(10, 5, 0, 10))

    # 90°: справа, половина радиуса
    assert geometry.points[1].vertex.x == pytest.approx(250)
    assert geometry.points[1].vertex.y == pytest.approx(150)
    # нулевой балл в центре
    assert geometry.points[2].vertex.x == pytest.approx(200)
    assert geometry.points[2].vertex.y == pytest.approx(150)
    # 270°: слева
    assert geometry.points[3].vertex.x == pytest.approx(100)


def test_axis_lines_are_full_length(builder):
    geometry = builder.build(_scores(0, 0, 0))

    for start, end in geometry.axis_lines:
        assert (start.x, start.y) == (200, 150)
        assert math.hypot(end.x - 200, end.y - 150) == pytest.approx(100)


def test_label_alignment(builder):
    labels = builder.build(_scores(5, 5, 5, 5)).label_anchors

    assert [label.align for label in labels] == ["center", "left", "center", "right"]
    assert labels[0].valign == "bottom"
    assert labels[2].valign == "top"
    # подпись на радиусе R + offset
    assert labels[0].y == pytest.approx(150 - 115)


def test_scores_above_full_mark_are_clamped():
    builder = ChartGeometryBuilder(
        ChartConfig(radius=100, center_x=0, center_y=0, full_mark=5, tick_values=(0, 5))
    )
    geometry = builder.build(_scores(10, 2.5, 0))

    assert geometry.points[0].vertex.y == pytest.approx(-100)
    assert builder.normalize(2.5) == 0.5


def test_rings_and_ticks(builder):
    geometry = builder.build(_scores(1, 2, 3))

    assert geometry.rings == pytest.approx((33, 66, 100))
    assert [t.x for t in geometry.ticks] == pytest.approx([200, 230, 260, 300])
    assert all(t.y == 160 for t in geometry.ticks)


def test_default_ticks_scale_with_full_mark():
    assert ChartConfig(radius=100, center_x=0, center_y=0).tick_values == (0, 3, 6, 10)
    assert ChartConfig(radius=100, center_x=0, center_y=0, full_mark=20).tick_values == pytest.approx(
        (0, 6, 12, 20)
    )


@pytest.mark.parametrize("count", [0, 1, 2])
def test_fewer_than_three_categories_rejected(builder, count):
    with pytest.raises(DegenerateChartError) as exc_info:
        builder.build(_scores(*[5] * count))

    assert exc_info.value.categories_count == count


def test_bar_fallback(builder):
    scores = [CategoryScore("Strategy", 7.5), CategoryScore("Data", 0, no_data=True)]
    bars = builder.build_bars(scores)

    assert [(b.category, b.fraction, b.no_data) for b in bars] == [
        ("Strategy", 0.75, False),
        ("Data", 0.0, True),
    ]


@pytest.mark.parametrize("kwargs", [
    {"radius": 0},
    {"radius": -10},
    {"full_mark": 0},
    {"label_offset": -1},
    {"center_x": float("nan")},
    {"ring_fractions": (0.5, 1.5)},
    {"tick_values": (0, 12)},
])
def test_invalid_config(kwargs):
    params = {"radius": 100, "center_x": 0, "center_y": 0, **kwargs}
    with pytest.raises(ReportConfigError):
        ChartConfig(**params)
