from __future__ import annotations

import math

import pytest

from veering.errors import InternalInconsistencyError
from veering.models import Direction, PathPoint
from veering.path_trace import build_path_trace, step_offsets


def _coords(points) -> list[tuple[float, float]]:
    return [(p.x, p.y) for p in points]


def test_short_sessions_have_no_trace() -> None:
    assert list(build_path_trace([], [], 0, Direction.STRAIGHT, 100, 200)) == []
    assert list(build_path_trace([15.0], [0], 0, Direction.STRAIGHT, 100, 200)) == []


def test_right_trace_spreads_to_x_scale() -> None:
    points = list(build_path_trace([0.0, 10.0, 20.0], [0, 500, 500], 1000, Direction.RIGHT,
                                   canvas_height=100, canvas_width=200))
    assert _coords(points) == [
        pytest.approx((100.0, 100.0)),
        pytest.approx((112.5, 50.0)),
        pytest.approx((125.0, 0.0)),
    ]


def test_left_trace_is_time_weighted() -> None:
    points = list(build_path_trace([20.0, 10.0, 0.0], [0, 250, 750], 1000, Direction.LEFT,
                                   canvas_height=100, canvas_width=200))
    assert _coords(points) == [
        pytest.approx((100.0, 100.0)),
        pytest.approx((93.75, 75.0)),
        pytest.approx((75.0, 0.0)),
    ]


def test_north_crossing_moves_right() -> None:
    points = list(build_path_trace([358.0, 2.0], [0, 1000], 1000, Direction.RIGHT,
                                   canvas_height=100, canvas_width=200))
    assert points[-1] == PathPoint(pytest.approx(125.0), pytest.approx(0.0))


def test_no_angular_change_gives_vertical_trace() -> None:
    points = list(build_path_trace([10.0, 10.0], [0, 1000], 1000, Direction.LEFT,
                                   canvas_height=100, canvas_width=200))
    assert _coords(points) == [(100.0, 100.0), (100.0, 0.0)]


def test_straight_session_zigzags_back_to_center() -> None:
    points = list(build_path_trace([10.0, 30.0, 10.0], [0, 500, 500], 1000, Direction.STRAIGHT,
                                   canvas_height=100, canvas_width=200))
    assert [p.x for p in points] == pytest.approx([100.0, 112.5, 100.0])
    assert [p.y for p in points] == pytest.approx([100.0, 50.0, 0.0])


def test_y_scale_shrinks_vertical_travel() -> None:
    points = list(build_path_trace([0.0, 10.0], [0, 1000], 1000, Direction.RIGHT,
                                   canvas_height=100, canvas_width=200, y_scale=0.5))
    assert points[-1].y == pytest.approx(50.0)


def test_zero_total_time_fails_before_iteration() -> None:
    with pytest.raises(InternalInconsistencyError):
        build_path_trace([10.0, 20.0], [0, 0], 0, Direction.RIGHT, 100, 200)


def test_mismatched_lengths_fail() -> None:
    with pytest.raises(InternalInconsistencyError):
        build_path_trace([10.0, 20.0, 30.0], [0, 500], 500, Direction.RIGHT, 100, 200)


def test_trace_is_lazy_single_pass_and_repeatable() -> None:
    args = ([0.0, 10.0, 20.0], [0, 500, 500], 1000, Direction.RIGHT, 100, 200)
    trace = build_path_trace(*args)
    first = next(trace)
    assert first == PathPoint(100.0, 100.0)
    rest = list(trace)
    assert len(rest) == 2
    assert list(trace) == []
    assert list(build_path_trace(*args)) == [first] + rest


def test_step_offsets_sign_follows_turn() -> None:
    delta_y, contributions = step_offsets([10.0, 20.0, 15.0], [0, 500, 500], 1000, 100)
    assert delta_y.tolist() == pytest.approx([50.0, 50.0])
    assert contributions[0] == pytest.approx(50.0 * math.tan(math.radians(10.0)))
    assert contributions[1] == pytest.approx(-50.0 * math.tan(math.radians(5.0)))


def test_non_finite_offsets_fail() -> None:
    with pytest.raises(InternalInconsistencyError):
        build_path_trace([10.0, 20.0], [0, 1000], 1000, Direction.RIGHT,
                         canvas_height=float("inf"), canvas_width=200)
    with pytest.raises(InternalInconsistencyError):
        step_offsets([10.0, 20.0], [0, 1000], 1000, 100, y_scale=float("nan"))
