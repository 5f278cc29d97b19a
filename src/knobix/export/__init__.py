# どこで: `src/knobix/export/__init__.py`。
# 何を: ヘッドレス export（SVG）の公開エイリアスをまとめる。
# なぜ: interactive 依存なしに import できる入口を用意するため。

from .svg import SvgKnobSurface, export_knob_svg, knob_svg

__all__ = ["SvgKnobSurface", "export_knob_svg", "knob_svg"]
