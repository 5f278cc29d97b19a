"""
どこで: `src/knobix/export/svg.py`。
何を: ノブの現在の見た目（目盛り・指示線・数値表示）を SVG マークアップとして生成/保存する。
なぜ: interactive 依存なしでノブを文書へ埋め込めるようにし、描画結果を決定的に検証できるようにするため。
"""

from __future__ import annotations

from html import escape
from pathlib import Path

import numpy as np

from knobix.core.knob import Knob
from knobix.core.render_sync import RenderSync
from knobix.core.runtime_config import runtime_config

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3

# viewBox（0..100）上の寸法。
_CENTER = 50.0
_TICK_Y = (5.0, 12.0)
_INDICATOR_Y = (5.0, 18.0)
_TEXT_Y = 52.0


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def tick_angles(tick_count: int) -> np.ndarray:
    """目盛り線の角度（度, shape (N,)）を返す。"""
    n = int(tick_count)
    if n < 0:
        raise ValueError("tick_count は 0 以上である必要がある")
    return np.arange(n, dtype=np.float64) * (360.0 / float(max(n, 1)))


class SvgKnobSurface:
    """RenderSync から回転角と数値表示を受け取り、SVG を組み立てる描画面。"""

    def __init__(self) -> None:
        self.rotation = 0.0
        self.text: str | None = None

    def set_rotation(self, degrees: float) -> None:
        self.rotation = float(degrees)

    def set_text(self, text: str | None) -> None:
        self.text = text

    def to_svg(
        self,
        *,
        size: int,
        tick_count: int,
        indicator_color: str,
        tick_color: str,
    ) -> str:
        """現在の状態を SVG 文字列へ変換して返す。"""

        lines: list[str] = []
        lines.append(
            (
                f'<svg xmlns="{_SVG_NS}" class="knob-svg" viewBox="0 0 100 100" '
                f'width="{int(size)}" height="{int(size)}">'
            )
        )

        lines.append('  <g class="ticks-group">')
        y1, y2 = _TICK_Y
        for deg in tick_angles(tick_count):
            lines.append(
                (
                    f'    <line x1="{_fmt(_CENTER)}" y1="{_fmt(y1)}" x2="{_fmt(_CENTER)}" y2="{_fmt(y2)}" '
                    f'class="knob-tick" stroke="{tick_color}" stroke-width="0.8" '
                    f'stroke-linecap="round" transform="rotate({_fmt(deg)} 50 50)" />'
                )
            )
        lines.append("  </g>")

        y1, y2 = _INDICATOR_Y
        lines.append(
            f'  <g class="indicator-group" transform="rotate({_fmt(self.rotation)} 50 50)">'
        )
        lines.append(
            (
                f'    <line x1="{_fmt(_CENTER)}" y1="{_fmt(y1)}" x2="{_fmt(_CENTER)}" y2="{_fmt(y2)}" '
                f'class="knob-indicator-line" stroke="{indicator_color}" stroke-width="4" '
                f'stroke-linecap="round" />'
            )
        )
        lines.append("  </g>")

        if self.text is not None:
            lines.append(
                (
                    f'  <text x="{_fmt(_CENTER)}" y="{_fmt(_TEXT_Y)}" class="knob-value-text" '
                    f'text-anchor="middle" dominant-baseline="middle">{escape(self.text)}</text>'
                )
            )

        lines.append("</svg>")
        return "\n".join(lines) + "\n"


def knob_svg(
    knob: Knob,
    *,
    size: int | None = None,
    tick_count: int | None = None,
    indicator_color: str | None = None,
    tick_color: str | None = None,
) -> str:
    """ノブの現在値を反映した SVG 文字列を返す。

    Parameters
    ----------
    knob : Knob
        描画対象。
    size, tick_count, indicator_color, tick_color : optional
        省略時は `runtime_config()` の `knob.*` を使う。
    """

    cfg = runtime_config()
    surface = SvgKnobSurface()
    RenderSync(knob.range, surface, show_value=knob.show_value).apply(knob.value)
    return surface.to_svg(
        size=cfg.knob_size if size is None else int(size),
        tick_count=cfg.tick_count if tick_count is None else int(tick_count),
        indicator_color=cfg.indicator_color if indicator_color is None else str(indicator_color),
        tick_color=cfg.tick_color if tick_color is None else str(tick_color),
    )


def export_knob_svg(knob: Knob, path: str | Path, **kwargs: object) -> Path:
    """ノブを SVG として保存し、保存先パスを返す。

    kwargs は `knob_svg()` へそのまま渡す。
    """
    _path = Path(path)
    text = knob_svg(knob, **kwargs)  # type: ignore[arg-type]
    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        f.write(text)
    return _path


__all__ = ["SvgKnobSurface", "export_knob_svg", "knob_svg", "tick_angles"]
