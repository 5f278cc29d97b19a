# どこで: `src/knobix/core/pointer.py`。
# 何を: ポインタイベントを受けてドラッグ中の値更新を駆動する状態機械（Idle/Dragging）を提供する。
# なぜ: busy フラグとキャプチャの暗黙的な組み合わせを明示的な遷移へ置き換え、
#       描画 backend なしで操作列をテストできるようにするため。

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .angle import angle_to_value, pointer_angle
from .range_model import KnobRange

_logger = logging.getLogger(__name__)

POINTER_DOWN = "pointerdown"
POINTER_MOVE = "pointermove"
POINTER_UP = "pointerup"
POINTER_CANCEL = "pointercancel"


class InteractionState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """backend から渡される 1 件のポインタイベント。

    x/y は画面座標（y 下向き）。buttons は押下中ボタンのビットマスクで、0 は「何も押されていない」。
    """

    type: str
    x: float
    y: float
    pointer_id: int = 1
    buttons: int = 1
    pointer_type: str = "mouse"


@dataclass(frozen=True, slots=True)
class Bounds:
    """コントロールの外接矩形（画面座標）。"""

    left: float
    top: float
    width: float
    height: float

    @property
    def center(self) -> tuple[float, float]:
        return (
            float(self.left) + float(self.width) / 2.0,
            float(self.top) + float(self.height) / 2.0,
        )

    def contains(self, x: float, y: float) -> bool:
        return (
            float(self.left) <= float(x) <= float(self.left) + float(self.width)
            and float(self.top) <= float(y) <= float(self.top) + float(self.height)
        )


class PointerCaptureTarget(Protocol):
    """ポインタキャプチャ（排他的なイベント受信権）を提供する側のインタフェース。"""

    def set_pointer_capture(self, pointer_id: int) -> None: ...

    def release_pointer_capture(self, pointer_id: int) -> None: ...


class PointerInteractionController:
    """1 つのノブに属するドラッグ操作の状態機械。

    遷移:
    - Idle --down--> Dragging: キャプチャを取得し、位置から値を更新する。
    - Dragging --move--> Dragging: 量子化後の値が変わったときだけ更新する。
      buttons == 0 の move は暗黙の release とみなす。
    - Dragging --up/cancel--> Idle: キャプチャを解放する（値は変えない）。

    Parameters
    ----------
    knob_range : KnobRange
        角度から値を求めるための値域。
    get_value : Callable[[], float]
        現在値を返す関数。
    on_value : Callable[[float], None]
        値が変わったときに新しい値で呼ばれる。
    bounds : Callable[[], Bounds]
        イベント時点のコントロールの外接矩形を返す関数。
    capture : PointerCaptureTarget | None
        キャプチャの取得/解放先。None ならキャプチャしない。
    """

    def __init__(
        self,
        knob_range: KnobRange,
        *,
        get_value: Callable[[], float],
        on_value: Callable[[float], None],
        bounds: Callable[[], Bounds],
        capture: PointerCaptureTarget | None = None,
    ) -> None:
        self._range = knob_range
        self._get_value = get_value
        self._on_value = on_value
        self._bounds = bounds
        self._capture = capture
        self._state = InteractionState.IDLE
        self._pointer_id: int | None = None

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def is_dragging(self) -> bool:
        return self._state is InteractionState.DRAGGING

    @property
    def pointer_id(self) -> int | None:
        """キャプチャ中のポインタ id（Idle なら None）を返す。"""

        return self._pointer_id

    def handle(self, event: PointerEvent) -> bool:
        """イベントを 1 件処理し、値が変わったら True を返す。未知の type は無視する。"""

        kind = event.type
        if kind == POINTER_DOWN:
            return self._on_down(event)
        if kind == POINTER_MOVE:
            return self._on_move(event)
        if kind in (POINTER_UP, POINTER_CANCEL):
            self._on_release(event)
        return False

    def cancel(self) -> None:
        """ドラッグ中なら強制的に Idle へ戻し、キャプチャを解放する。"""

        if self.is_dragging:
            self._release()

    def _owns(self, event: PointerEvent) -> bool:
        return self.is_dragging and event.pointer_id == self._pointer_id

    def _on_down(self, event: PointerEvent) -> bool:
        if self.is_dragging:
            # 同じポインタの重複 down は move と同じ扱い、別ポインタは無視する
            if self._owns(event):
                return self._apply(event)
            return False

        self._state = InteractionState.DRAGGING
        self._pointer_id = int(event.pointer_id)
        if self._capture is not None:
            self._capture.set_pointer_capture(self._pointer_id)
        _logger.debug("pointer capture acquired: pointer_id=%s", self._pointer_id)
        return self._apply(event)

    def _on_move(self, event: PointerEvent) -> bool:
        if not self._owns(event):
            return False
        if int(event.buttons) == 0:
            self._release()
            return False
        return self._apply(event)

    def _on_release(self, event: PointerEvent) -> None:
        if self._owns(event):
            self._release()

    def _release(self) -> None:
        pointer_id = self._pointer_id
        self._state = InteractionState.IDLE
        self._pointer_id = None
        if self._capture is not None and pointer_id is not None:
            self._capture.release_pointer_capture(pointer_id)
        _logger.debug("pointer capture released: pointer_id=%s", pointer_id)

    def _apply(self, event: PointerEvent) -> bool:
        x = float(event.x)
        y = float(event.y)
        if not (math.isfinite(x) and math.isfinite(y)):
            return False

        cx, cy = self._bounds().center
        candidate = angle_to_value(self._range, pointer_angle(x - cx, y - cy))
        if candidate == self._get_value():
            return False
        self._on_value(candidate)
        return True


__all__ = [
    "POINTER_CANCEL",
    "POINTER_DOWN",
    "POINTER_MOVE",
    "POINTER_UP",
    "Bounds",
    "InteractionState",
    "PointerCaptureTarget",
    "PointerEvent",
    "PointerInteractionController",
]
