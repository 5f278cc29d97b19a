# どこで: `src/knobix/__init__.py`。
# 何を: ルート `knobix` パッケージを定義する。
# なぜ: import 起点を `knobix` に統一するため。

from __future__ import annotations

from knobix.core import (
    Combined,
    InvalidRangeError,
    Knob,
    KnobRange,
    combine,
    initial_value,
    transform_value,
)
from knobix.export import export_knob_svg, knob_svg

__all__ = [
    "Combined",
    "InvalidRangeError",
    "Knob",
    "KnobRange",
    "combine",
    "export_knob_svg",
    "initial_value",
    "knob_svg",
    "transform_value",
]
