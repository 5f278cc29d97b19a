# どこで: `src/knobix/core/range_model.py`。
# 何を: ノブの値域（min/max/step/default）の検証と、格子点への丸め（snap）を提供する。
# なぜ: 値域に関する規則を 1 箇所へ閉じ、角度変換・外部入力の正規化から共通に使うため。

from __future__ import annotations

import logging
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Integral, Real
from typing import Any

_logger = logging.getLogger(__name__)

_ALLOWED_RANGE_SPEC_KEYS = {"min", "max", "step", "default"}


class InvalidRangeError(ValueError):
    """値域の不変条件（min < max, step > 0, min <= default <= max）が破れている場合に送出される。"""


def _as_real(value: Any, *, name: str) -> int | float:
    """値域の端点/刻みを int または float に正規化して返す。"""

    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} は実数である必要があります: got={value!r}")
    if isinstance(value, Integral):
        return int(value)
    out = float(value)
    if not math.isfinite(out):
        raise InvalidRangeError(f"{name} は有限値である必要があります: got={value!r}")
    return out


def decimal_places(value: int | float) -> int:
    """数値の 10 進表現における小数桁数を返す（`0.25` -> 2, `5.0` -> 0）。"""

    if isinstance(value, int):
        return 0
    exponent = Decimal(repr(float(value))).normalize().as_tuple().exponent
    if not isinstance(exponent, int):
        return 0
    return max(0, -exponent)


def _count_steps(span: float, step: float) -> int:
    """span を step で割った格子の区間数を返す（浮動小数の端数は許容誤差で吸収する）。"""

    q = span / step
    nearest = round(q)
    if math.isclose(q, nearest, rel_tol=1e-9, abs_tol=1e-9):
        return int(nearest)
    return int(math.floor(q))


@dataclass(frozen=True, slots=True)
class KnobRange:
    """ノブが取り得る値の集合（等間隔の有界格子）。

    - `max` は「最後の格子点」に正規化される（`KnobRange(0, 242, 5).max == 240`）。
    - min/step が共に整数なら格子点は int、それ以外は float になる。
    - default 省略時は min。default が格子点上にない場合は最も近い格子点へ寄せる。

    Raises
    ------
    TypeError
        min/max/step/default が実数でない場合。
    InvalidRangeError
        min >= max, step <= 0, default が [min, max] の外にある場合。
    """

    min: int | float
    max: int | float
    step: int | float = 1
    default: int | float | None = None
    _count: int = field(default=0, init=False, repr=False, compare=False)
    _decimals: int = field(default=0, init=False, repr=False, compare=False)
    _integral: bool = field(default=True, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        r_min = _as_real(self.min, name="min")
        r_max = _as_real(self.max, name="max")
        r_step = _as_real(self.step, name="step")
        if r_step <= 0:
            raise InvalidRangeError(f"step は正の値である必要があります: got={r_step!r}")
        if r_min >= r_max:
            raise InvalidRangeError(
                f"min は max より小さい必要があります: min={r_min!r}, max={r_max!r}"
            )

        integral = isinstance(r_min, int) and isinstance(r_step, int)
        if not integral:
            r_min = float(r_min)
            r_step = float(r_step)

        object.__setattr__(self, "min", r_min)
        object.__setattr__(self, "step", r_step)
        object.__setattr__(self, "_integral", integral)
        object.__setattr__(self, "_decimals", max(decimal_places(r_min), decimal_places(r_step)))
        object.__setattr__(self, "_count", _count_steps(float(r_max) - float(r_min), float(r_step)) + 1)

        last = range_element(self, self._count - 1)
        if last != r_max:
            _logger.debug("max を最後の格子点へ切り詰めます: %r -> %r", r_max, last)
        object.__setattr__(self, "max", last)

        if self.default is None:
            object.__setattr__(self, "default", r_min)
            return
        r_default = _as_real(self.default, name="default")
        if not (r_min <= r_default <= last):
            raise InvalidRangeError(
                f"default は [min, max] の範囲内である必要があります: "
                f"default={r_default!r}, min={r_min!r}, max={last!r}"
            )
        object.__setattr__(self, "default", snap_to_nearest(self, r_default))

    @property
    def is_integral(self) -> bool:
        """格子点が int で表現される場合 True を返す。"""

        return bool(self._integral)


def validate_range(
    min: Any,
    max: Any,
    step: Any = 1,
    default: Any = None,
) -> KnobRange:
    """min/max/step/default を検証し、KnobRange を返す。

    Raises
    ------
    InvalidRangeError
        default が [min, max] の外にある場合など、値域の不変条件が破れている場合。
    """

    return KnobRange(min=min, max=max, step=step, default=default)


def range_from_spec(spec: Any, *, default: Any = None) -> KnobRange:
    """KnobRange / 組み込み range / dict spec から KnobRange を返す。

    Parameters
    ----------
    spec : KnobRange | range | Mapping[str, object]
        - `range(0, 241, 5)` は 0, 5, ..., 240 の格子として扱う。
        - dict spec は `min`/`max`（必須）と `step`/`default`（任意）を受け付ける。
    default : object, optional
        指定時は spec 側の default より優先する。

    Raises
    ------
    TypeError
        spec の型が不正な場合。
    ValueError
        未知キーや必須キー欠落、空の range の場合。
    """

    if isinstance(spec, KnobRange):
        if default is None:
            return spec
        return KnobRange(min=spec.min, max=spec.max, step=spec.step, default=default)

    if isinstance(spec, range):
        if spec.step <= 0 or len(spec) < 2:
            raise ValueError(f"range は増加方向かつ 2 要素以上である必要があります: {spec!r}")
        return KnobRange(min=spec[0], max=spec[-1], step=spec.step, default=default)

    if not isinstance(spec, Mapping):
        raise TypeError("range spec は KnobRange, range, dict のいずれかである必要があります")

    unknown = set(spec.keys()) - _ALLOWED_RANGE_SPEC_KEYS
    if unknown:
        names = ", ".join(sorted(str(k) for k in unknown))
        raise ValueError(f"range spec に未知キーがあります: {names}")
    for required in ("min", "max"):
        if required not in spec:
            raise ValueError(f"range spec には {required!r} が必要です")

    return KnobRange(
        min=spec["min"],
        max=spec["max"],
        step=spec.get("step", 1),
        default=spec.get("default") if default is None else default,
    )


def lattice_size(r: KnobRange) -> int:
    """格子点の個数を返す。"""

    return int(r._count)


def range_element(r: KnobRange, index: int) -> int | float:
    """0 始まり index 番目の格子点 `min + index*step` を返す。

    float の格子点は min/step の小数桁数で丸めるため、`KnobRange(0, 1, 0.1)` の
    3 番目は `0.30000000000000004` ではなく `0.3` になる。
    """

    i = int(index)
    if not 0 <= i < r._count:
        raise IndexError(f"index が範囲外です: index={i}, size={r._count}")
    if r._integral:
        return int(r.min) + i * int(r.step)
    return round(float(r.min) + i * float(r.step), r._decimals)


def iter_range_values(r: KnobRange) -> Iterator[int | float]:
    """格子点を min から順に列挙する。"""

    for i in range(lattice_size(r)):
        yield range_element(r, i)


def nearest_index(r: KnobRange, x: float) -> int:
    """x に最も近い格子点の index を返す（範囲外は端へ寄せる）。

    同距離（ちょうど中点）の場合は偶数 index 側へ丸める（round-half-to-even）。
    """

    k = round((float(x) - float(r.min)) / float(r.step))
    return max(0, min(lattice_size(r) - 1, int(k)))


def snap_to_nearest(r: KnobRange, x: float) -> int | float:
    """x を値域内の最も近い格子点へ寄せて返す。

    x <= min なら min、x >= max なら max を返す。中点の扱いは `nearest_index` に従う。
    """

    if x <= r.min:
        return r.min
    if x >= r.max:
        return r.max
    return range_element(r, nearest_index(r, x))


def step_decimals(r: KnobRange) -> int:
    """step の小数桁数を返す。"""

    return decimal_places(r.step)


__all__ = [
    "InvalidRangeError",
    "KnobRange",
    "decimal_places",
    "iter_range_values",
    "lattice_size",
    "nearest_index",
    "range_element",
    "range_from_spec",
    "snap_to_nearest",
    "step_decimals",
    "validate_range",
]
