"""core.events / core.combine（bubbling と合成コンテナ）をテスト。"""

from __future__ import annotations

import math

import pytest

from knobix.core.combine import Combined, combine
from knobix.core.events import INPUT_EVENT, EventTarget, KnobInputEvent
from knobix.core.knob import Knob
from knobix.core.pointer import POINTER_DOWN, POINTER_UP, PointerEvent


def _press(knob: Knob, degrees: float) -> None:
    rad = math.radians(degrees)
    x = 50.0 + 40.0 * math.sin(rad)
    y = 50.0 - 40.0 * math.cos(rad)
    knob.handle_pointer(PointerEvent(type=POINTER_DOWN, x=x, y=y))
    knob.handle_pointer(PointerEvent(type=POINTER_UP, x=x, y=y, buttons=0))


def test_combined_value_is_tuple_of_children() -> None:
    k1 = Knob(range(0, 241, 5), default=10)
    k2 = Knob(range(0, 361, 5), default=20)
    group = combine(k1, k2)
    assert group.value == (10, 20)
    assert group.children == (k1, k2)


def test_combined_sees_child_events_and_keeps_bubbling() -> None:
    k1 = Knob(range(0, 241, 5))
    k2 = Knob(range(0, 361, 5))
    group = Combined([k1, k2])
    host = EventTarget()
    group.parent = host
    host_seen: list[object] = []
    host.add_event_listener(INPUT_EVENT, lambda e: host_seen.append(e.target))

    _press(k2, 90.0)

    assert group.last_event is not None
    assert group.last_event.target is k2
    assert group.last_event.detail == 90
    assert host_seen == [k2]
    assert group.value == (0, 90)


def test_stop_propagation_stops_at_current_target() -> None:
    k1 = Knob(range(0, 241, 5))
    group = Combined([k1])
    host = EventTarget()
    group.parent = host
    host_seen: list[KnobInputEvent] = []
    host.add_event_listener(INPUT_EVENT, host_seen.append)
    group.add_event_listener(INPUT_EVENT, lambda e: e.stop_propagation())

    _press(k1, 180.0)
    assert host_seen == []
    assert group.last_event is not None


def test_non_bubbling_event_stays_on_target() -> None:
    parent = EventTarget()
    child = EventTarget()
    child.parent = parent
    seen: list[str] = []
    parent.add_event_listener("input", lambda e: seen.append("parent"))
    child.add_event_listener("input", lambda e: seen.append("child"))

    child.dispatch_event(KnobInputEvent(type="input", detail=1, bubbles=False))
    assert seen == ["child"]


def test_listener_registration_is_deduplicated_and_removable() -> None:
    target = EventTarget()
    seen: list[object] = []
    target.add_event_listener("input", seen.append)
    target.add_event_listener("input", seen.append)
    target.dispatch_event(KnobInputEvent(type="input", detail=1))
    assert len(seen) == 1

    target.remove_event_listener("input", seen.append)
    target.remove_event_listener("input", seen.append)
    target.dispatch_event(KnobInputEvent(type="input", detail=2))
    assert len(seen) == 1


def test_combined_setter_distributes_through_transform() -> None:
    k1 = Knob(range(0, 241, 5))
    k2 = Knob({"min": 0, "max": 1, "step": 0.1}, default=0.5)
    group = Combined([k1, k2])

    group.value = (37.2, "bad")
    assert group.value == (35, 0.5)

    with pytest.raises(ValueError):
        group.value = (1, 2, 3)


def test_combined_rejects_knob_with_parent() -> None:
    k1 = Knob(range(0, 241, 5))
    Combined([k1])
    with pytest.raises(ValueError):
        Combined([k1])
    with pytest.raises(ValueError):
        Combined([])


def test_combined_close_detaches_children() -> None:
    k1 = Knob(range(0, 241, 5))
    group = Combined([k1])
    group.close()
    assert k1.parent is None
    Combined([k1])
