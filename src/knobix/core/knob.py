# どこで: `src/knobix/core/knob.py`。
# 何を: ノブ 1 個分の状態（値域・現在値・表示設定）と、操作/描画/通知の配線を提供する。
# なぜ: ホストが「値の読み書き」と「input イベントの購読」だけでノブを扱えるようにするため。

from __future__ import annotations

import logging
from typing import Any

from .events import INPUT_EVENT, EventTarget, KnobInputEvent
from .pointer import (
    Bounds,
    InteractionState,
    PointerCaptureTarget,
    PointerEvent,
    PointerInteractionController,
)
from .range_model import KnobRange, range_from_spec
from .render_sync import RenderSurface, RenderSync
from .transform import transform_value

_logger = logging.getLogger(__name__)

_DEFAULT_BOUNDS = Bounds(left=0.0, top=0.0, width=100.0, height=100.0)


class Knob(EventTarget):
    """回転ノブ型の入力コントロール。

    Parameters
    ----------
    knob_range : KnobRange | range | Mapping[str, object]
        値域。`range(0, 241, 5)` や `{"min": 0, "max": 1, "step": 0.1}` を受け付ける。
    default : float | None
        初期値。省略時は min（値域の dict に default があればそれ）。
    show_value : bool
        数値表示を描画するかどうか。

    Raises
    ------
    InvalidRangeError
        default が [min, max] の外にある場合。

    Notes
    -----
    - ドラッグ中は外部からの `value` 代入を無視する（操作中のジェスチャを優先する）。
    - 値の変更通知は pointer 操作で値が変わったときだけ `input` イベントとして配送する。
    """

    def __init__(
        self,
        knob_range: Any,
        *,
        default: Any = None,
        show_value: bool = True,
    ) -> None:
        super().__init__()
        self.range: KnobRange = range_from_spec(knob_range, default=default)
        self.show_value = bool(show_value)
        self._value = self.range.default
        self._render: RenderSync | None = None
        self._capture: PointerCaptureTarget | None = None
        self._bounds = _DEFAULT_BOUNDS
        self._controller = PointerInteractionController(
            self.range,
            get_value=lambda: self._value,
            on_value=self._commit_pointer_value,
            bounds=lambda: self._bounds,
            capture=self,
        )

    def __repr__(self) -> str:
        return f"Knob(range={self.range!r}, value={self._value!r}, show_value={self.show_value})"

    @property
    def default(self) -> int | float:
        return self.range.default  # type: ignore[return-value]

    @property
    def value(self) -> int | float:
        """現在値を返す。"""

        return self._value

    @value.setter
    def value(self, candidate: Any) -> None:
        """外部から値を設定する。`transform_value` で正規化し、ドラッグ中は無視する。"""

        if self._controller.is_dragging:
            _logger.debug("ドラッグ中のため外部からの値設定を無視します: %r", candidate)
            return
        self._value = transform_value(self, candidate)
        self._sync()

    @property
    def interaction_state(self) -> InteractionState:
        return self._controller.state

    @property
    def is_dragging(self) -> bool:
        return self._controller.is_dragging

    @property
    def surface(self) -> RenderSurface | None:
        """mount 中の描画面を返す（未 mount なら None）。"""

        return None if self._render is None else self._render.surface

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    def set_bounds(self, bounds: Bounds) -> None:
        """角度計算に使う外接矩形（画面座標）を更新する。"""

        self._bounds = bounds

    def mount(
        self,
        surface: RenderSurface,
        *,
        capture: PointerCaptureTarget | None = None,
        bounds: Bounds | None = None,
    ) -> None:
        """描画面とキャプチャ先を接続し、現在値を描画する。

        ドラッグ中に呼ばれた場合は、旧キャプチャ先を解放してから差し替える。
        """

        self._controller.cancel()
        self._render = RenderSync(self.range, surface, show_value=self.show_value)
        self._capture = capture
        if bounds is not None:
            self._bounds = bounds
        self._sync()

    def unmount(self) -> None:
        """描画面とキャプチャ先を切り離す（ドラッグ中なら先に cancel する）。"""

        self._controller.cancel()
        self._render = None
        self._capture = None

    def handle_pointer(self, event: PointerEvent) -> bool:
        """ポインタイベントを処理し、値が変わったら True を返す。"""

        return self._controller.handle(event)

    def close(self) -> None:
        """キャプチャ・描画面・リスナーをまとめて解放する。"""

        self.unmount()
        self.clear_event_listeners()
        self.parent = None

    # --- PointerCaptureTarget ---

    def set_pointer_capture(self, pointer_id: int) -> None:
        if self._capture is not None:
            self._capture.set_pointer_capture(pointer_id)

    def release_pointer_capture(self, pointer_id: int) -> None:
        if self._capture is not None:
            self._capture.release_pointer_capture(pointer_id)

    # --- internal ---

    def _sync(self) -> None:
        if self._render is not None:
            self._render.apply(self._value)

    def _commit_pointer_value(self, value: float) -> None:
        self._value = value
        self._sync()
        self.dispatch_event(KnobInputEvent(type=INPUT_EVENT, detail=value))


__all__ = ["Knob"]
