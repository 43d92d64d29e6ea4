"""Arc geometry for the circular progress indicator.

Two pieces of pure math live here, with no Qt import:

- the drawing rectangle: the largest square that fits the widget box, centered
  and inset by the stroke width so the stroked ring stays inside the bounds;
- the arcs: a full-circle track plus the finished arc, whose (start, sweep)
  pair comes from either the default linear mapping or an injected
  angle provider.

Angles are degrees, 0 = 3 o'clock, positive = clockwise (screen convention).
Hosts with a different convention (Qt paints counter-clockwise) convert at
the adapter, see `cpb.ui.circle_progress_bar.to_qt_angle`.

Notes
- The default mapping *shrinks* the finished arc as progress grows: it starts
  at `start + elapsed` and sweeps the remaining `360 - elapsed` degrees.
- The track ignores the configured start angle (a full circle has no start).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple, Optional, Tuple

from cpb.utils.errors import CpbStateError

if TYPE_CHECKING:  # pragma: no cover
    from cpb.core.angle_mapping import AngleProvider


FULL_CIRCLE = 360.0


@dataclass(frozen=True)
class DrawRect:
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return float(self.right - self.left)

    @property
    def height(self) -> float:
        return float(self.bottom - self.top)

    @property
    def is_degenerate(self) -> bool:
        """True when the stroke eats the whole box (nothing, or a point, to draw)."""
        return self.width <= 0.0 or self.height <= 0.0

    def center(self) -> Tuple[float, float]:
        return ((self.left + self.right) * 0.5, (self.top + self.bottom) * 0.5)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (float(self.left), float(self.top), float(self.right), float(self.bottom))


@dataclass(frozen=True)
class Arc:
    start_angle: float
    sweep_angle: float


class ArcPair(NamedTuple):
    track: Arc
    progress: Arc


TRACK_ARC = Arc(start_angle=0.0, sweep_angle=FULL_CIRCLE)


class ZeroMaxPolicy(str, Enum):
    """What `progress / max` means when max == 0.

    - empty: percent is 0.0 (the finished arc is drawn as a full ring)
    - raise: CpbStateError
    """

    EMPTY = "empty"
    RAISE = "raise"


def compute_draw_rect(box_width: float, box_height: float, stroke_width: float) -> DrawRect:
    """Square drawing rect centered in (box_width, box_height), inset by stroke_width.

    Degenerate results (stroke too wide for the box) are returned untouched;
    callers skip drawing instead of failing.
    """
    w = max(0.0, float(box_width))
    h = max(0.0, float(box_height))
    side = min(w, h)
    # división real: centrado exacto también con diferencias impares
    dx = abs((w - side) / 2.0 + float(stroke_width))
    dy = abs((h - side) / 2.0 + float(stroke_width))
    return DrawRect(dx, dy, w - dx, h - dy)


def progress_percent(
    progress: float,
    max_value: float,
    *,
    policy: ZeroMaxPolicy = ZeroMaxPolicy.EMPTY,
) -> float:
    """progress / max_value. Negative progress passes through unclamped."""
    if max_value == 0:
        if policy == ZeroMaxPolicy.RAISE:
            raise CpbStateError("max == 0: el porcentaje de progreso no está definido")
        return 0.0
    return float(progress) / float(max_value)


def default_progress_arc(percent: float, start_angle: float) -> Arc:
    elapsed = float(percent) * FULL_CIRCLE
    return Arc(start_angle=float(start_angle) + elapsed, sweep_angle=FULL_CIRCLE - elapsed)


def compute_arcs(
    progress: float,
    max_value: float,
    start_angle: float,
    mapping: Optional["AngleProvider"] = None,
    *,
    policy: ZeroMaxPolicy = ZeroMaxPolicy.EMPTY,
) -> ArcPair:
    """Return (track, progress) arcs.

    A custom mapping is fully trusted: whatever angles it returns are handed
    to the backend, whose arc primitive decides how to wrap them.
    """
    percent = progress_percent(progress, max_value, policy=policy)
    if mapping is not None:
        arc = Arc(
            start_angle=float(mapping.start_angle(percent)),
            sweep_angle=float(mapping.progress_angle(percent)),
        )
    else:
        arc = default_progress_arc(percent, start_angle)
    return ArcPair(track=TRACK_ARC, progress=arc)
