# どこで: `src/knobix/core/combine.py`。
# 何を: 複数のノブを 1 つの値（タプル）として束ねる合成コンテナを提供する。
# なぜ: 子ノブの input イベントを bubbling で受け取り、個別配線なしにまとめて観測するため。

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from .events import INPUT_EVENT, EventTarget, KnobInputEvent
from .knob import Knob


class Combined(EventTarget):
    """子ノブの値をタプルとして公開するコンテナ。

    子の input イベントは Combined のリスナーを経て、さらに Combined の親へ伝播する。
    """

    def __init__(self, children: Sequence[Knob]) -> None:
        super().__init__()
        items = list(children)
        if not items:
            raise ValueError("children は 1 つ以上必要です")
        for child in items:
            if child.parent is not None:
                raise ValueError(f"別のコンテナに属しているノブは追加できません: {child!r}")
        for child in items:
            child.parent = self
        self._children: tuple[Knob, ...] = tuple(items)
        self.last_event: KnobInputEvent | None = None
        self.add_event_listener(INPUT_EVENT, self._on_child_input)

    @property
    def children(self) -> tuple[Knob, ...]:
        return self._children

    @property
    def value(self) -> tuple[Any, ...]:
        """子ノブの現在値を並び順のタプルで返す。"""

        return tuple(child.value for child in self._children)

    @value.setter
    def value(self, values: Sequence[Any]) -> None:
        items = list(values)
        if len(items) != len(self._children):
            raise ValueError(
                f"値の個数が子ノブの数と一致しません: got={len(items)}, expected={len(self._children)}"
            )
        for child, v in zip(self._children, items):
            child.value = v

    def close(self) -> None:
        """子ノブを切り離し、リスナーを解放する（子ノブ自体は close しない）。"""

        for child in self._children:
            if child.parent is self:
                child.parent = None
        self.clear_event_listeners()
        self.parent = None

    def _on_child_input(self, event: KnobInputEvent) -> None:
        self.last_event = event


def combine(*children: Knob) -> Combined:
    """子ノブを束ねた Combined を返す。"""

    return Combined(children)


__all__ = ["Combined", "combine"]
