"""
どこで: tests/manual/imgui_knob_demo.py。
何を: pyglet + pyimgui のパネルに `imgui_knob` を 2 つ並べて目視確認する手動スクリプト。
なぜ: ImGui の active item とポインタキャプチャの対応（領域外ドラッグ・リリース）を実機で確かめるため。

実行: `python tests/manual/imgui_knob_demo.py`
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from knobix.core import Knob
from knobix.interactive.imgui_knob import imgui_knob

_logger = logging.getLogger("imgui_knob_demo")


def main() -> None:
    try:
        import imgui
        import pyglet
        from imgui.integrations.pyglet import create_renderer
    except Exception as exc:
        raise SystemExit(f"pyglet または pyimgui を import できない: {exc}")

    try:
        window = pyglet.window.Window(width=360, height=200, caption="imgui_knob demo")
    except Exception as exc:
        raise SystemExit(f"ディスプレイが取得できないため終了: {exc}")

    imgui.create_context()
    imgui.style_colors_dark()
    renderer = create_renderer(window)

    volume = Knob(range(0, 241, 5))
    ratio = Knob({"min": 0, "max": 1, "step": 0.05}, default=0.5)

    def on_draw() -> None:
        window.clear()
        imgui.new_frame()
        imgui.set_next_window_position(10, 10)
        imgui.set_next_window_size(340, 180)
        imgui.begin("knobs")
        for label, knob in (("volume", volume), ("ratio", ratio)):
            changed, value = imgui_knob(f"##{label}", knob, radius=50.0)
            if changed:
                _logger.info("%s: %s", label, value)
            imgui.same_line()
        imgui.new_line()
        imgui.end()
        imgui.render()
        renderer.render(imgui.get_draw_data())

    window.push_handlers(on_draw=on_draw)
    try:
        pyglet.app.run()
    finally:
        volume.close()
        ratio.close()
        renderer.shutdown()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
