import math

import numpy as np
import pytest

from floatspace.input.reference_image import ReferenceImage
from floatspace.input.sampler import (
    FALLBACK_COLOR,
    IDLE,
    EventKind,
    InputSampler,
    Phase,
    PointerEvent,
    PointerState,
    transition,
)

BOUNDS = (200, 100)


def press(x, y):
    return PointerEvent(EventKind.Press, x, y)


def move(x, y):
    return PointerEvent(EventKind.Move, x, y)


RELEASE = PointerEvent(EventKind.Release)


# ---------- pure state machine ----------

def test_press_inside_starts_drag_and_emits_one_point():
    state, out = transition(IDLE, press(10, 20), BOUNDS)
    assert state == PointerState(Phase.Dragging, 10, 20)
    assert out == [(10, 20)]


@pytest.mark.parametrize("x,y", [(-1, 10), (201, 10), (10, -0.5), (10, 101)])
def test_press_outside_is_ignored(x, y):
    state, out = transition(IDLE, press(x, y), BOUNDS)
    assert state is IDLE
    assert out == []


def test_press_on_edge_counts_as_inside():
    state, out = transition(IDLE, press(200, 100), BOUNDS)
    assert state.phase is Phase.Dragging
    assert out == [(200, 100)]


def test_move_while_idle_does_nothing():
    assert transition(IDLE, move(50, 50), BOUNDS) == (IDLE, [])


def test_short_move_keeps_anchor():
    dragging = PointerState(Phase.Dragging, 10, 10)
    state, out = transition(dragging, move(13, 14), BOUNDS, spacing=6)
    assert state == dragging
    assert out == []


def test_move_of_exactly_spacing_emits_nothing():
    dragging = PointerState(Phase.Dragging, 10, 10)
    state, out = transition(dragging, move(16, 10), BOUNDS, spacing=6)
    assert state == dragging
    assert out == []


def test_long_move_is_interpolated_without_gaps():
    dragging = PointerState(Phase.Dragging, 0, 50)
    state, out = transition(dragging, move(20, 50), BOUNDS, spacing=6)
    assert state == PointerState(Phase.Dragging, 20, 50)
    assert len(out) == math.floor(20 / 6)
    xs = [x for x, _ in out]
    assert xs == pytest.approx([20 / 3, 40 / 3, 20])
    assert all(y == 50 for _, y in out)


def test_interpolated_samples_off_canvas_are_skipped():
    dragging = PointerState(Phase.Dragging, 190, 50)
    state, out = transition(dragging, move(230, 50), BOUNDS, spacing=10)
    assert state.last_x == 230
    assert [x for x, _ in out] == [200]


def test_release_returns_to_idle():
    state, out = transition(PointerState(Phase.Dragging, 1, 1), RELEASE, BOUNDS)
    assert state is IDLE
    assert out == []


def test_transition_is_pure():
    start = PointerState(Phase.Dragging, 0, 0)
    a = transition(start, move(30, 40), BOUNDS)
    b = transition(start, move(30, 40), BOUNDS)
    assert a == b
    assert start == PointerState(Phase.Dragging, 0, 0)


# ---------- sampler ----------

def test_sampler_uses_fallback_without_image():
    sampler = InputSampler(BOUNDS)
    seeds = sampler.on_press_start(5, 5)
    assert [s.color for s in seeds] == [FALLBACK_COLOR]


def test_sampler_colors_from_reference_image():
    pixels = np.zeros((10, 20, 3), dtype=np.uint8)
    pixels[:, 10:] = (0, 200, 100)
    sampler = InputSampler(BOUNDS, reference=ReferenceImage(pixels, BOUNDS))
    left = sampler.on_press_start(10, 50)[0]
    sampler.on_release()
    right = sampler.on_press_start(190, 50)[0]
    assert left.color == (0, 0, 0)
    assert right.color == (0, 200, 100)


def test_sampler_appends_and_calls_back_in_order():
    seen = []
    sampler = InputSampler(BOUNDS, on_seed=seen.append)
    sampler.on_press_start(0, 0)
    emitted = sampler.on_drag_move(24, 0)
    assert len(emitted) == 4
    assert sampler.seeds == seen
    assert [s.x for s in sampler.seeds] == [0, 6, 12, 18, 24]


def test_drag_after_release_is_ignored():
    sampler = InputSampler(BOUNDS)
    sampler.on_press_start(0, 0)
    sampler.on_release()
    assert sampler.on_drag_move(50, 0) == []
    assert not sampler.dragging


def test_press_only_mode_ignores_drags():
    sampler = InputSampler(BOUNDS, sample_drag=False)
    sampler.on_press_start(10, 10)
    assert sampler.on_drag_move(80, 10) == []
    assert len(sampler.seeds) == 1


def test_clear_empties_seeds_and_stops_drag():
    sampler = InputSampler(BOUNDS)
    sampler.on_press_start(10, 10)
    sampler.clear()
    sampler.clear()
    assert sampler.seeds == []
    assert sampler.state is IDLE


def test_resize_changes_bounds():
    sampler = InputSampler(BOUNDS)
    assert sampler.on_press_start(300, 50) == []
    sampler.resize((400, 100))
    assert len(sampler.on_press_start(300, 50)) == 1
