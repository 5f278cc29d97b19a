# どこで: `src/knobix/core/angle.py`。
# 何を: 値 <-> 角度（0..360 度）の相互変換と、ポインタ位置からの角度計算を提供する。
# なぜ: 描画やイベント処理から切り離した純粋関数として、往復性を単体テストで保証するため。

from __future__ import annotations

import math

from .range_model import KnobRange, nearest_index, range_element

FULL_TURN_DEG = 360.0


def value_to_angle(r: KnobRange, value: float) -> float:
    """値を角度（度）へ変換して返す。

    min が 0 度、max が 360 度に対応する（0 度と 360 度は同じ向き）。
    """

    span = float(r.max) - float(r.min)
    if span == 0.0:
        return 0.0
    return FULL_TURN_DEG * (float(value) - float(r.min)) / span


def angle_to_value(r: KnobRange, degrees: float) -> int | float:
    """角度（度）を値へ変換し、step の格子点へ量子化して返す。

    Notes
    -----
    - 角度は 1 周に対する割合へ正規化する。[0, 360] の外は周回として折り返すが、
      ちょうど 360 度は 1 周（= max）として扱う。
    - 量子化は `(raw - min) / step` を最も近い整数へ丸める（round-half-to-even）。
    - 結果は [min, max] にクランプされる。

    Raises
    ------
    ValueError
        degrees が有限値でない場合。
    """

    deg = float(degrees)
    if not math.isfinite(deg):
        raise ValueError(f"角度は有限値である必要があります: got={degrees!r}")

    turn = deg / FULL_TURN_DEG
    if not 0.0 <= turn <= 1.0:
        turn = turn % 1.0
    raw = float(r.min) + turn * (float(r.max) - float(r.min))
    return range_element(r, nearest_index(r, raw))


def pointer_angle(dx: float, dy: float) -> float:
    """中心からポインタへのベクトル (dx, dy) の角度を返す。

    座標系は画面座標（y 下向き）。真上を 0 度として時計回りに増え、[0, 360) に正規化する。
    """

    deg = math.degrees(math.atan2(float(dy), float(dx))) + 90.0
    deg %= FULL_TURN_DEG
    # 負の極小値の剰余は 360.0 に丸まることがある
    if deg >= FULL_TURN_DEG:
        deg = 0.0
    return deg


def polar_point(cx: float, cy: float, radius: float, degrees: float) -> tuple[float, float]:
    """真上 0 度・時計回りの角度 degrees にある点を、y 上向き座標で返す。

    y 下向きの座標系では `(x, 2*cy - y)` として使う。
    """

    rad = math.radians(float(degrees))
    return float(cx) + float(radius) * math.sin(rad), float(cy) + float(radius) * math.cos(rad)


__all__ = ["FULL_TURN_DEG", "angle_to_value", "pointer_angle", "polar_point", "value_to_angle"]
