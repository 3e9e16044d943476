from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from floatspace.api.frame_data import RGB, SeedPoint

from .reference_image import ReferenceImage

FALLBACK_COLOR: RGB = (255, 0, 0)
SAMPLE_SPACING = 6.0  # px between drag samples


class Phase(Enum):
    Idle = 1
    Dragging = 2


class EventKind(Enum):
    Press = 1
    Move = 2
    Release = 3


@dataclass(frozen=True)
class PointerEvent:
    kind: EventKind
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class PointerState:
    phase: Phase = Phase.Idle
    last_x: float = 0.0
    last_y: float = 0.0


IDLE = PointerState()


def _inside(x: float, y: float, bounds: Tuple[int, int]) -> bool:
    w, h = bounds
    return 0 <= x <= w and 0 <= y <= h


def transition(
    state: PointerState,
    event: PointerEvent,
    bounds: Tuple[int, int],
    spacing: float = SAMPLE_SPACING,
) -> Tuple[PointerState, List[Tuple[float, float]]]:
    """
    Pure pointer state machine: (state, event) -> (new state, sampled positions).
    """
    if event.kind is EventKind.Press:
        if not _inside(event.x, event.y, bounds):
            return state, []
        return PointerState(Phase.Dragging, event.x, event.y), [(event.x, event.y)]

    if event.kind is EventKind.Release:
        return IDLE, []

    # Move
    if state.phase is not Phase.Dragging:
        return state, []
    dx = event.x - state.last_x
    dy = event.y - state.last_y
    dist = math.hypot(dx, dy)
    if dist <= spacing:
        return state, []

    steps = int(math.floor(dist / spacing))
    out: List[Tuple[float, float]] = []
    for i in range(1, steps + 1):
        t = i / steps
        sx = state.last_x + dx * t
        sy = state.last_y + dy * t
        if _inside(sx, sy, bounds):
            out.append((sx, sy))
    return PointerState(Phase.Dragging, event.x, event.y), out


class InputSampler:
    """
    Turns pointer presses and drags into colored seed points.

    Owns the seed list. ``on_seed`` is called for every emitted point, in
    order, after it has been appended.
    """

    def __init__(
        self,
        bounds: Tuple[int, int],
        reference: Optional[ReferenceImage] = None,
        spacing: float = SAMPLE_SPACING,
        fallback_color: RGB = FALLBACK_COLOR,
        on_seed: Optional[Callable[[SeedPoint], None]] = None,
        sample_drag: bool = True,
    ):
        self.bounds = bounds
        self.reference = reference
        self.spacing = spacing
        self.fallback_color = fallback_color
        self.on_seed = on_seed
        # when False only presses seed points; drags are ignored
        self.sample_drag = sample_drag
        self.state: PointerState = IDLE
        self.seeds: List[SeedPoint] = []

    def color_at(self, x: float, y: float) -> RGB:
        if self.reference is not None and self.reference.has_image():
            return self.reference.sample_pixel(x, y)
        return self.fallback_color

    def _dispatch(self, event: PointerEvent) -> List[SeedPoint]:
        self.state, positions = transition(self.state, event, self.bounds, self.spacing)
        emitted = []
        for x, y in positions:
            seed = SeedPoint(x, y, self.color_at(x, y))
            self.seeds.append(seed)
            emitted.append(seed)
            if self.on_seed is not None:
                self.on_seed(seed)
        return emitted

    def on_press_start(self, x: float, y: float) -> List[SeedPoint]:
        return self._dispatch(PointerEvent(EventKind.Press, x, y))

    def on_drag_move(self, x: float, y: float) -> List[SeedPoint]:
        if not self.sample_drag:
            return []
        return self._dispatch(PointerEvent(EventKind.Move, x, y))

    def on_release(self) -> List[SeedPoint]:
        return self._dispatch(PointerEvent(EventKind.Release))

    @property
    def dragging(self) -> bool:
        return self.state.phase is Phase.Dragging

    def resize(self, bounds: Tuple[int, int]) -> None:
        self.bounds = bounds
        if self.reference is not None:
            self.reference.fit(bounds)

    def clear(self) -> None:
        self.seeds = []
        self.state = IDLE
