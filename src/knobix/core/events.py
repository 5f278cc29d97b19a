# どこで: `src/knobix/core/events.py`。
# 何を: 値変更通知（input イベント）と、親方向へ伝播（bubbling）するイベントターゲットを提供する。
# なぜ: ノブを包む合成ヘルパやホストが、ノブ個別の配線なしに変更を観測できるようにするため。

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

INPUT_EVENT = "input"

Listener = Callable[["KnobInputEvent"], None]


@dataclass(slots=True)
class KnobInputEvent:
    """値変更の通知イベント。`detail` に新しい値を持つ。"""

    type: str
    detail: Any
    bubbles: bool = True
    target: EventTarget | None = None
    current_target: EventTarget | None = None
    _stopped: bool = field(default=False, repr=False)

    def stop_propagation(self) -> None:
        """以降の親への伝播を止める（同じターゲット上の残りのリスナーは呼ばれる）。"""

        self._stopped = True

    @property
    def propagation_stopped(self) -> bool:
        return bool(self._stopped)


class EventTarget:
    """リスナーを保持し、`parent` 方向へイベントを伝播させる。"""

    def __init__(self) -> None:
        self.parent: EventTarget | None = None
        self._listeners: dict[str, list[Listener]] = {}

    def add_event_listener(self, event_type: str, listener: Listener) -> None:
        """event_type のリスナーを登録する（同一リスナーの二重登録は無視する）。"""

        listeners = self._listeners.setdefault(str(event_type), [])
        if listener not in listeners:
            listeners.append(listener)

    def remove_event_listener(self, event_type: str, listener: Listener) -> None:
        """登録済みリスナーを外す。未登録なら何もしない。"""

        listeners = self._listeners.get(str(event_type))
        if not listeners:
            return
        try:
            listeners.remove(listener)
        except ValueError:
            return

    def clear_event_listeners(self) -> None:
        self._listeners.clear()

    def dispatch_event(self, event: KnobInputEvent) -> None:
        """self から親へ向かってイベントを配送する。

        `bubbles=False` のイベントは self のリスナーにだけ配送する。
        リスナー内の例外は呼び出し元へ伝播する。
        """

        event.target = self
        node: EventTarget | None = self
        while node is not None:
            event.current_target = node
            # 配送中の登録/解除の影響を受けないようにコピーしてから回す
            for listener in list(node._listeners.get(event.type, ())):
                listener(event)
            if not event.bubbles or event.propagation_stopped:
                break
            node = node.parent
        event.current_target = None


__all__ = ["INPUT_EVENT", "EventTarget", "KnobInputEvent", "Listener"]
