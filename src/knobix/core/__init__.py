# どこで: `src/knobix/core/__init__.py`。
# 何を: ヘッドレスな domain 層（値域・角度変換・境界正規化・操作状態機械・描画同期）の公開エイリアスをまとめる。
# なぜ: API 層や backend から最小インポートで使えるようにするため。

from .angle import angle_to_value, pointer_angle, value_to_angle
from .combine import Combined, combine
from .events import INPUT_EVENT, EventTarget, KnobInputEvent
from .knob import Knob
from .pointer import (
    Bounds,
    InteractionState,
    PointerEvent,
    PointerInteractionController,
)
from .range_model import (
    InvalidRangeError,
    KnobRange,
    iter_range_values,
    range_element,
    range_from_spec,
    snap_to_nearest,
    validate_range,
)
from .render_sync import RenderSurface, RenderSync, format_value_text
from .transform import initial_value, is_numeric_candidate, transform_value

__all__ = [
    "angle_to_value",
    "pointer_angle",
    "value_to_angle",
    "Combined",
    "combine",
    "INPUT_EVENT",
    "EventTarget",
    "KnobInputEvent",
    "Knob",
    "Bounds",
    "InteractionState",
    "PointerEvent",
    "PointerInteractionController",
    "InvalidRangeError",
    "KnobRange",
    "iter_range_values",
    "range_element",
    "range_from_spec",
    "snap_to_nearest",
    "validate_range",
    "RenderSurface",
    "RenderSync",
    "format_value_text",
    "initial_value",
    "is_numeric_candidate",
    "transform_value",
]
