# どこで: `src/knobix/core/render_sync.py`。
# 何を: 現在値を描画面（回転角 + 数値表示）へ反映する薄い射影を提供する。
# なぜ: 描画 backend（SVG / pyglet / imgui）を差し替え可能にし、domain ロジックから描画を切り離すため。

from __future__ import annotations

from typing import Protocol

from .angle import value_to_angle
from .range_model import KnobRange, step_decimals


class RenderSurface(Protocol):
    """ノブの見た目を持つ側のインタフェース。"""

    def set_rotation(self, degrees: float) -> None: ...

    def set_text(self, text: str | None) -> None: ...


def _is_integer_value(value: float) -> bool:
    return float(value).is_integer()


def value_display_decimals(r: KnobRange) -> int:
    """数値表示の小数桁数を返す。

    step と min が共に整数値なら 0、それ以外は step の小数桁数に合わせる。
    """

    if _is_integer_value(r.step) and _is_integer_value(r.min):
        return 0
    return step_decimals(r)


def format_value_text(r: KnobRange, value: float) -> str:
    """値を表示用の文字列へ変換して返す（桁区切りは付けない）。"""

    if _is_integer_value(r.step) and _is_integer_value(r.min):
        return str(int(round(float(value))))
    return f"{float(value):.{value_display_decimals(r)}f}"


class RenderSync:
    """現在値を RenderSurface へ反映する。

    直前に反映した値を覚えておき、同じ値の再反映はスキップする。
    """

    def __init__(self, knob_range: KnobRange, surface: RenderSurface, *, show_value: bool) -> None:
        self._range = knob_range
        self._surface = surface
        self._show_value = bool(show_value)
        self._last: float | None = None

    @property
    def surface(self) -> RenderSurface:
        return self._surface

    def apply(self, value: float) -> bool:
        """value を描画面へ反映し、実際に反映したら True を返す。"""

        if self._last is not None and value == self._last:
            return False
        self._surface.set_rotation(value_to_angle(self._range, value))
        self._surface.set_text(format_value_text(self._range, value) if self._show_value else None)
        self._last = value
        return True

    def invalidate(self) -> None:
        """次回の apply を必ず反映させる。"""

        self._last = None


__all__ = [
    "RenderSurface",
    "RenderSync",
    "format_value_text",
    "value_display_decimals",
]
