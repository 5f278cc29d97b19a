# どこで: `src/knobix/interactive/knob_window.py`。
# 何を: ノブを横一列に並べた pyglet ウィンドウを生成し、マウス入力を PointerEvent として配送する。
# なぜ: interactive 依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import pyglet
from pyglet.gl import Config
from pyglet.window import Window, mouse

from knobix.core.events import INPUT_EVENT, KnobInputEvent
from knobix.core.knob import Knob
from knobix.core.pointer import (
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    PointerEvent,
)
from knobix.core.runtime_config import RuntimeConfig, runtime_config
from knobix.interactive.pointer_router import PointerRouter
from knobix.interactive.pyglet_surface import PygletKnobSurface

_logger = logging.getLogger(__name__)

# マウスは 1 本のポインタとして扱う。
MOUSE_POINTER_ID = 1


def create_knob_window(*, width: int, height: int, caption: str = "knobix") -> Window:
    """ノブ表示用の pyglet ウィンドウを生成する。"""
    # 線描画を滑らかにするために MSAA を有効化
    config = Config(double_buffer=True, sample_buffers=1, samples=4)  # type: ignore[abstract]
    return pyglet.window.Window(  # type: ignore[abstract]
        width=int(width),
        height=int(height),
        resizable=False,
        caption=str(caption),
        config=config,
    )


class KnobWindow:
    """複数のノブを 1 つのウィンドウに表示し、マウス操作を配送する。"""

    def __init__(
        self,
        knobs: Sequence[Knob],
        *,
        caption: str = "knobix",
        config: RuntimeConfig | None = None,
    ) -> None:
        items = list(knobs)
        if not items:
            raise ValueError("knobs は 1 つ以上必要です")

        cfg = config if config is not None else runtime_config()
        width, height = cfg.window_size
        self.window = create_knob_window(width=width, height=height, caption=caption)
        self.window.set_location(*cfg.window_pos)

        self._batch = pyglet.graphics.Batch()
        self.router = PointerRouter()
        self._surfaces: list[PygletKnobSurface] = []
        self._closed = False

        slot_w = float(width) / float(len(items))
        size = float(min(cfg.knob_size, slot_w, height))
        for i, knob in enumerate(items):
            surface = PygletKnobSurface(
                x=slot_w * (i + 0.5),
                y=float(height) / 2.0,
                size=size,
                batch=self._batch,
                tick_count=cfg.tick_count,
                indicator_color=cfg.indicator_color,
                tick_color=cfg.tick_color,
            )
            bounds = surface.bounds(window_height=height)
            capture = self.router.add(knob, bounds)
            knob.mount(surface, capture=capture, bounds=bounds)
            knob.add_event_listener(INPUT_EVENT, self._log_input)
            self._surfaces.append(surface)

        self.window.push_handlers(
            on_draw=self._on_draw,
            on_mouse_press=self._on_mouse_press,
            on_mouse_drag=self._on_mouse_drag,
            on_mouse_motion=self._on_mouse_motion,
            on_mouse_release=self._on_mouse_release,
            on_close=self._on_close,
        )

    def _to_screen_y(self, y: float) -> float:
        # pyglet は y 上向き、PointerEvent は画面座標（y 下向き）
        return float(self.window.height) - float(y)

    def _pointer(self, kind: str, x: float, y: float, buttons: int) -> PointerEvent:
        return PointerEvent(
            type=kind,
            x=float(x),
            y=self._to_screen_y(y),
            pointer_id=MOUSE_POINTER_ID,
            buttons=int(buttons),
        )

    def _on_draw(self) -> None:
        self.window.clear()
        self._batch.draw()

    def _on_mouse_press(self, x: int, y: int, button: int, _modifiers: int) -> None:
        if button != mouse.LEFT:
            return
        self.router.dispatch(self._pointer(POINTER_DOWN, x, y, button))

    def _on_mouse_drag(self, x: int, y: int, _dx: int, _dy: int, buttons: int, _modifiers: int) -> None:
        self.router.dispatch(self._pointer(POINTER_MOVE, x, y, buttons))

    def _on_mouse_motion(self, x: int, y: int, _dx: int, _dy: int) -> None:
        # ボタン無しの move。キャプチャが残っていれば暗黙の release になる。
        self.router.dispatch(self._pointer(POINTER_MOVE, x, y, 0))

    def _on_mouse_release(self, x: int, y: int, button: int, _modifiers: int) -> None:
        if button != mouse.LEFT:
            return
        self.router.dispatch(self._pointer(POINTER_UP, x, y, 0))

    def _on_close(self, *_: Any) -> None:
        self.close()

    def _log_input(self, event: KnobInputEvent) -> None:
        _logger.info("knob value: %s", event.detail)

    def close(self) -> None:
        """キャプチャを解放し、ノブと図形を切り離す。"""

        if self._closed:
            return
        self._closed = True
        self.router.cancel_all()
        for knob in self.router.knobs:
            knob.remove_event_listener(INPUT_EVENT, self._log_input)
            knob.unmount()
        for surface in self._surfaces:
            surface.delete()
        self._surfaces.clear()


def run_knobs(*knobs: Knob, caption: str = "knobix") -> None:
    """ノブをウィンドウに表示し、ウィンドウが閉じられるまでループを実行する。"""

    knob_window = KnobWindow(knobs, caption=caption)
    try:
        pyglet.app.run()
    finally:
        knob_window.close()


__all__ = ["KnobWindow", "create_knob_window", "run_knobs"]
