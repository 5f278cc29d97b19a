# どこで: `src/knobix/interactive/pointer_router.py`。
# 何を: 1 つのウィンドウ上の複数ノブへ、ヒットテストとポインタキャプチャに従ってイベントを配送する。
# なぜ: ウィンドウ系 backend が持たない「要素単位のキャプチャ」を、pyglet 非依存で再現するため。

from __future__ import annotations

import logging

from knobix.core.knob import Knob
from knobix.core.pointer import POINTER_CANCEL, POINTER_DOWN, Bounds, PointerEvent

_logger = logging.getLogger(__name__)


class _RouterCapture:
    """ノブ 1 個分のキャプチャ先。キャプチャ中のポインタを router が当該ノブへ固定する。"""

    def __init__(self, router: PointerRouter, knob: Knob) -> None:
        self._router = router
        self._knob = knob

    def set_pointer_capture(self, pointer_id: int) -> None:
        self._router._captured[int(pointer_id)] = self._knob

    def release_pointer_capture(self, pointer_id: int) -> None:
        if self._router._captured.get(int(pointer_id)) is self._knob:
            del self._router._captured[int(pointer_id)]


class PointerRouter:
    """PointerEvent を適切なノブへ配送する。

    - キャプチャ中のポインタのイベントは、位置に関係なくキャプチャしたノブへ送る。
    - それ以外は pointerdown だけをヒットテストで選んだノブへ送り、残りは捨てる。
    """

    def __init__(self) -> None:
        self._knobs: list[Knob] = []
        self._captured: dict[int, Knob] = {}

    @property
    def knobs(self) -> tuple[Knob, ...]:
        return tuple(self._knobs)

    def add(self, knob: Knob, bounds: Bounds) -> _RouterCapture:
        """ノブを登録し、`Knob.mount(capture=...)` へ渡すキャプチャ先を返す。"""

        knob.set_bounds(bounds)
        self._knobs.append(knob)
        return _RouterCapture(self, knob)

    def captured_by(self, pointer_id: int) -> Knob | None:
        return self._captured.get(int(pointer_id))

    def hit_test(self, x: float, y: float) -> Knob | None:
        """(x, y) を含むノブを返す（重なりは後から登録したものを優先）。"""

        for knob in reversed(self._knobs):
            if knob.bounds.contains(x, y):
                return knob
        return None

    def dispatch(self, event: PointerEvent) -> bool:
        """イベントを配送し、いずれかのノブの値が変わったら True を返す。"""

        target = self._captured.get(int(event.pointer_id))
        if target is None:
            if event.type != POINTER_DOWN:
                return False
            target = self.hit_test(event.x, event.y)
            if target is None:
                return False
        return target.handle_pointer(event)

    def cancel_all(self) -> None:
        """キャプチャ中の全ポインタへ pointercancel を送る。"""

        for pointer_id, knob in list(self._captured.items()):
            _logger.debug("pointer を cancel します: pointer_id=%s", pointer_id)
            knob.handle_pointer(
                PointerEvent(type=POINTER_CANCEL, x=0.0, y=0.0, pointer_id=pointer_id, buttons=0)
            )
            # cancel で解放されなかった場合も残さない
            self._captured.pop(pointer_id, None)


__all__ = ["PointerRouter"]
