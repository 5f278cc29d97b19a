# どこで: `src/knobix/interactive/pyglet_surface.py`。
# 何を: pyglet の shapes/text でノブ（目盛り・指示線・数値表示）を描く RenderSurface を提供する。
# なぜ: RenderSync からの回転角/文字列をそのまま図形へ反映し、描画を domain から分離するため。

from __future__ import annotations

import pyglet
from pyglet import shapes

from knobix.core.angle import polar_point
from knobix.core.pointer import Bounds
from knobix.core.runtime_config import hex_to_rgb255
from knobix.export.svg import tick_angles

# SVG（viewBox 0..100）と同じ寸法を、中心からの半径で表す。
_TICK_RADII = (45.0, 38.0)
_INDICATOR_RADII = (45.0, 32.0)
_TICK_THICKNESS = 0.8
_INDICATOR_THICKNESS = 4.0


class PygletKnobSurface:
    """pyglet の Batch 上にノブを描く描画面。

    Parameters
    ----------
    x, y : float
        ノブ中心（pyglet のウィンドウ座標, y 上向き）。
    size : float
        ノブの一辺（px）。
    batch : pyglet.graphics.Batch
        図形を登録する Batch。
    """

    def __init__(
        self,
        *,
        x: float,
        y: float,
        size: float,
        batch: pyglet.graphics.Batch,
        tick_count: int,
        indicator_color: str,
        tick_color: str,
        text_color: tuple[int, int, int, int] = (51, 51, 51, 255),
    ) -> None:
        self.x = float(x)
        self.y = float(y)
        self.size = float(size)
        self.rotation = 0.0
        scale = self.size / 100.0

        tick_rgba = (*hex_to_rgb255(tick_color), 255)
        self._ticks: list[shapes.Line] = []
        r_out, r_in = _TICK_RADII
        for deg in tick_angles(tick_count):
            x1, y1 = polar_point(self.x, self.y, r_out * scale, float(deg))
            x2, y2 = polar_point(self.x, self.y, r_in * scale, float(deg))
            self._ticks.append(
                shapes.Line(x1, y1, x2, y2, _TICK_THICKNESS * scale, tick_rgba, batch=batch)
            )

        indicator_rgba = (*hex_to_rgb255(indicator_color), 255)
        self._indicator = shapes.Line(
            self.x,
            self.y,
            self.x,
            self.y,
            _INDICATOR_THICKNESS * scale,
            indicator_rgba,
            batch=batch,
        )
        self._label = pyglet.text.Label(
            "",
            x=self.x,
            y=self.y,
            anchor_x="center",
            anchor_y="center",
            font_size=max(8.0, 14.0 * scale),
            color=text_color,
            batch=batch,
        )
        self.set_rotation(0.0)

    def bounds(self, *, window_height: float) -> Bounds:
        """画面座標（y 下向き）での外接矩形を返す。"""

        half = self.size / 2.0
        return Bounds(
            left=self.x - half,
            top=float(window_height) - (self.y + half),
            width=self.size,
            height=self.size,
        )

    def set_rotation(self, degrees: float) -> None:
        self.rotation = float(degrees)
        scale = self.size / 100.0
        r_out, r_in = _INDICATOR_RADII
        x1, y1 = polar_point(self.x, self.y, r_out * scale, self.rotation)
        x2, y2 = polar_point(self.x, self.y, r_in * scale, self.rotation)
        self._indicator.x = x1
        self._indicator.y = y1
        self._indicator.x2 = x2
        self._indicator.y2 = y2

    def set_text(self, text: str | None) -> None:
        self._label.text = "" if text is None else str(text)

    def delete(self) -> None:
        """Batch から図形を外す。"""

        for tick in self._ticks:
            tick.delete()
        self._ticks.clear()
        self._indicator.delete()
        self._label.delete()
