"""core.angle（値 <-> 角度の変換）をテスト。"""

from __future__ import annotations

import math

import pytest

from knobix.core.angle import angle_to_value, pointer_angle, polar_point, value_to_angle
from knobix.core.range_model import KnobRange, iter_range_values

_RANGES = [
    KnobRange(min=0, max=240, step=5),
    KnobRange(min=0, max=360, step=5),
    KnobRange(min=0, max=1, step=0.1),
    KnobRange(min=-1, max=1, step=0.25),
    KnobRange(min=0.05, max=2.0, step=0.15),
    KnobRange(min=-50, max=50, step=3),
]


@pytest.mark.parametrize("r", _RANGES, ids=repr)
def test_lattice_points_roundtrip_exactly(r: KnobRange) -> None:
    for v in iter_range_values(r):
        assert angle_to_value(r, value_to_angle(r, v)) == v


def test_value_to_angle_maps_min_and_max_to_full_turn() -> None:
    r = KnobRange(min=0, max=240, step=5)
    assert value_to_angle(r, 0) == 0.0
    assert value_to_angle(r, 120) == 180.0
    assert value_to_angle(r, 240) == 360.0


def test_angle_to_value_quantizes_to_step() -> None:
    r = KnobRange(min=0, max=240, step=5)
    # 100 度 -> 66.66... -> 65
    assert angle_to_value(r, 100.0) == 65
    # 359 度 -> 239.33... -> 240
    assert angle_to_value(r, 359.0) == 240


def test_angle_to_value_wraps_outside_turn() -> None:
    r = KnobRange(min=0, max=240, step=5)
    assert angle_to_value(r, 360.0) == 240
    assert angle_to_value(r, 720.0) == 0
    assert angle_to_value(r, -90.0) == 180


def test_angle_to_value_rejects_non_finite() -> None:
    r = KnobRange(min=0, max=240, step=5)
    with pytest.raises(ValueError):
        angle_to_value(r, float("nan"))


@pytest.mark.parametrize(
    "dx,dy,expected",
    [
        (0.0, -1.0, 0.0),
        (1.0, 0.0, 90.0),
        (0.0, 1.0, 180.0),
        (-1.0, 0.0, 270.0),
        (1.0, -1.0, 45.0),
    ],
)
def test_pointer_angle_uses_up_as_zero_clockwise(dx: float, dy: float, expected: float) -> None:
    assert pointer_angle(dx, dy) == pytest.approx(expected)


def test_pointer_angle_is_normalized() -> None:
    for i in range(-720, 720, 7):
        rad = math.radians(i)
        deg = pointer_angle(math.cos(rad), math.sin(rad))
        assert 0.0 <= deg < 360.0
    assert 0.0 <= pointer_angle(-1e-300, -1.0) < 360.0


def test_polar_point_is_y_up() -> None:
    x, y = polar_point(10.0, 10.0, 2.0, 0.0)
    assert (x, y) == pytest.approx((10.0, 12.0))
    x, y = polar_point(10.0, 10.0, 2.0, 90.0)
    assert (x, y) == pytest.approx((12.0, 10.0))
