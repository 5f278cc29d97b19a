"""core.knob（ノブの配線: 値・操作・描画・通知）をテスト。"""

from __future__ import annotations

import math

import pytest

from knobix.core.events import INPUT_EVENT, EventTarget, KnobInputEvent
from knobix.core.knob import Knob
from knobix.core.pointer import (
    POINTER_CANCEL,
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    Bounds,
    InteractionState,
    PointerEvent,
)
from knobix.core.range_model import InvalidRangeError


class DummySurface:
    def __init__(self) -> None:
        self.rotation: float | None = None
        self.text: str | None = None
        self.updates = 0

    def set_rotation(self, degrees: float) -> None:
        self.rotation = degrees
        self.updates += 1

    def set_text(self, text: str | None) -> None:
        self.text = text


class DummyCapture:
    def __init__(self) -> None:
        self.captured: set[int] = set()

    def set_pointer_capture(self, pointer_id: int) -> None:
        self.captured.add(pointer_id)

    def release_pointer_capture(self, pointer_id: int) -> None:
        self.captured.discard(pointer_id)


def _at(kind: str, degrees: float, *, buttons: int = 1) -> PointerEvent:
    rad = math.radians(degrees)
    return PointerEvent(
        type=kind,
        x=50.0 + 40.0 * math.sin(rad),
        y=50.0 - 40.0 * math.cos(rad),
        buttons=buttons,
    )


def _mounted(*args, **kwargs) -> tuple[Knob, DummySurface, DummyCapture, list[KnobInputEvent]]:
    knob = Knob(*args, **kwargs)
    surface = DummySurface()
    capture = DummyCapture()
    knob.mount(surface, capture=capture, bounds=Bounds(0.0, 0.0, 100.0, 100.0))
    events: list[KnobInputEvent] = []
    knob.add_event_listener(INPUT_EVENT, events.append)
    return knob, surface, capture, events


def test_construction_fails_fast_for_default_outside_range() -> None:
    with pytest.raises(InvalidRangeError):
        Knob({"min": 0, "max": 10, "step": 1}, default=15)


def test_initial_value_is_default_and_rendered_on_mount() -> None:
    knob, surface, _capture, events = _mounted(range(0, 241, 5), default=60)
    assert knob.value == 60
    assert surface.rotation == 90.0
    assert surface.text == "60"
    assert events == []


def test_show_value_false_hides_text() -> None:
    knob = Knob(range(0, 241, 5), show_value=False)
    surface = DummySurface()
    knob.mount(surface)
    assert surface.text is None
    assert surface.rotation == 0.0


def test_drag_emits_one_event_per_change() -> None:
    knob, surface, capture, events = _mounted(range(0, 241, 5))

    knob.handle_pointer(_at(POINTER_DOWN, 0.0))
    assert capture.captured == {1}
    knob.handle_pointer(_at(POINTER_MOVE, 180.0))
    knob.handle_pointer(_at(POINTER_MOVE, 181.0))
    knob.handle_pointer(_at(POINTER_UP, 181.0))

    assert knob.value == 120
    assert [e.detail for e in events] == [120]
    assert events[0].target is knob
    assert surface.rotation == 180.0
    assert surface.text == "120"
    assert capture.captured == set()


def test_external_assignment_is_snapped_and_silent() -> None:
    knob, surface, _capture, events = _mounted(range(0, 241, 5))

    knob.value = 37.2
    assert knob.value == 35
    assert surface.text == "35"

    knob.value = "garbage"
    assert knob.value == 0
    assert events == []


def test_external_assignment_is_ignored_while_dragging() -> None:
    knob, _surface, _capture, _events = _mounted(range(0, 241, 5))

    knob.handle_pointer(_at(POINTER_DOWN, 90.0))
    assert knob.interaction_state is InteractionState.DRAGGING
    knob.value = 200
    assert knob.value == 60

    knob.handle_pointer(_at(POINTER_UP, 90.0))
    knob.value = 200
    assert knob.value == 200


def test_external_assignment_succeeds_after_cancel() -> None:
    knob, _surface, capture, _events = _mounted(range(0, 241, 5))

    knob.handle_pointer(_at(POINTER_DOWN, 90.0))
    knob.handle_pointer(_at(POINTER_CANCEL, 90.0))
    assert capture.captured == set()
    assert knob.is_dragging is False

    knob.value = 200
    assert knob.value == 200


def test_redundant_values_are_not_rerendered() -> None:
    knob, surface, _capture, _events = _mounted(range(0, 241, 5))
    updates = surface.updates
    knob.value = 0
    knob.value = -100
    assert surface.updates == updates


def test_change_event_bubbles_to_parent() -> None:
    knob, _surface, _capture, _events = _mounted(range(0, 241, 5))
    host = EventTarget()
    knob.parent = host
    seen: list[tuple[object, object]] = []
    host.add_event_listener(INPUT_EVENT, lambda e: seen.append((e.target, e.detail)))

    knob.handle_pointer(_at(POINTER_DOWN, 270.0))
    assert seen == [(knob, 180)]


def test_close_releases_capture_and_listeners() -> None:
    knob, surface, capture, events = _mounted(range(0, 241, 5))
    knob.handle_pointer(_at(POINTER_DOWN, 90.0))
    assert capture.captured == {1}

    knob.close()
    assert capture.captured == set()
    assert knob.is_dragging is False
    assert knob.surface is None

    knob.handle_pointer(_at(POINTER_DOWN, 180.0))
    assert knob.value == 120
    assert len(events) == 1
    assert surface.text == "60"


def test_remount_during_drag_releases_previous_capture() -> None:
    knob, _surface, capture, _events = _mounted(range(0, 241, 5))
    knob.handle_pointer(_at(POINTER_DOWN, 90.0))
    assert capture.captured == {1}

    other = DummyCapture()
    knob.mount(DummySurface(), capture=other)
    assert capture.captured == set()
    assert other.captured == set()
    assert knob.is_dragging is False

    knob.value = 200
    assert knob.value == 200
