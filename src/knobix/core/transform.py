# どこで: `src/knobix/core/transform.py`。
# 何を: ホスト（外部）から届く型不明の値を、値域内の正しい値へ正規化する境界関数を提供する。
# なぜ: 外部データが domain へ入る経路をここ 1 箇所に限定し、ノブが不正状態にならないことを保証するため。

from __future__ import annotations

import math
from decimal import Decimal
from numbers import Integral, Real
from typing import TYPE_CHECKING, Any

from .range_model import snap_to_nearest

if TYPE_CHECKING:
    from .knob import Knob


def is_numeric_candidate(candidate: Any) -> bool:
    """candidate が「有限の実数」なら True を返す。

    bool は数値として扱わない。numpy のスカラー（np.float64 / np.int64 など）と `Decimal` は実数として扱う。
    整数は float に収まらない大きさでも有限とみなす。
    """

    if isinstance(candidate, bool):
        return False
    if isinstance(candidate, Integral):
        return True
    if isinstance(candidate, Decimal):
        return candidate.is_finite()
    if not isinstance(candidate, Real):
        return False
    try:
        return math.isfinite(float(candidate))
    except (OverflowError, ValueError, TypeError):
        return False


def transform_value(knob: Knob, candidate: Any) -> int | float:
    """外部から渡された candidate をノブの値へ変換して返す。

    - 有限の実数なら最も近い格子点へ寄せる（範囲外は min/max）。
    - それ以外（文字列/None/NaN/±inf/bool など）は `knob.default` を返す。

    例外は送出しない。
    """

    if is_numeric_candidate(candidate):
        return snap_to_nearest(knob.range, candidate)
    return knob.default


def initial_value(knob: Knob) -> int | float:
    """操作前にホストから見える初期値（default）を返す。"""

    return knob.default


__all__ = ["initial_value", "is_numeric_candidate", "transform_value"]
