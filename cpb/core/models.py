# File: cpb/core/models.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: stable
# Date: 2026-10-19
# Purpose: Estado del widget (progreso + estilo) sin dependencia de Qt.
# Notes: Cada setter devuelve qué invalidación necesita el host (redibujar vs re-layout).
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from cpb.core.angle_mapping import AngleProvider, coerce_mapping
from cpb.core.config import ProgressBarConfig, is_valid_color
from cpb.core.version import (
    DEFAULT_FINISHED_COLOR,
    DEFAULT_MAX,
    DEFAULT_PROGRESS,
    DEFAULT_ROUND_CAP,
    DEFAULT_START_ANGLE,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_UNFINISHED_COLOR,
)
from cpb.geom.arc_geometry import ArcPair, DrawRect, ZeroMaxPolicy, compute_arcs, compute_draw_rect
from cpb.utils.errors import CpbValidationError
from cpb.utils.log import get_logger

log = get_logger(__name__)


@dataclass
class ProgressState:
    progress: int = DEFAULT_PROGRESS
    max: int = DEFAULT_MAX


@dataclass(frozen=True)
class ArcStyle:
    stroke_width: int = DEFAULT_STROKE_WIDTH
    finished_color: str = DEFAULT_FINISHED_COLOR
    unfinished_color: str = DEFAULT_UNFINISHED_COLOR
    round_cap: bool = DEFAULT_ROUND_CAP
    start_angle: float = DEFAULT_START_ANGLE


class Invalidation(str, Enum):
    """Qué tiene que pedirle el widget al host después de una mutación."""

    NONE = "none"
    REDRAW = "redraw"
    RELAYOUT = "relayout"


Listener = Callable[[Invalidation], None]


class CircleProgressModel:
    """Estado mutable de un CircleProgressBar (un modelo por widget).

    Reglas heredadas (no "arreglar" sin avisar):
    - set_max ignora en silencio valores <= 0.
    - set_progress no tiene cota inferior; solo envuelve con módulo si supera max.
    """

    def __init__(
        self,
        style: ArcStyle | None = None,
        state: ProgressState | None = None,
        *,
        zero_max_policy: ZeroMaxPolicy = ZeroMaxPolicy.EMPTY,
    ) -> None:
        self._style = style or ArcStyle()
        _validate_style(self._style)
        self._state = ProgressState()
        self._mapping: Optional[AngleProvider] = None
        self._zero_max_policy = ZeroMaxPolicy(zero_max_policy)
        self._listeners: list[Listener] = []
        self._rect_key: tuple[float, float, int] | None = None
        self._rect: DrawRect | None = None
        if state is not None:
            self.set_max(state.max)
            self.set_progress(state.progress)

    # ----------------------------
    # Lectura
    # ----------------------------
    @property
    def style(self) -> ArcStyle:
        return self._style

    @property
    def progress(self) -> int:
        return self._state.progress

    @property
    def max(self) -> int:
        return self._state.max

    @property
    def custom_mapping(self) -> Optional[AngleProvider]:
        return self._mapping

    @property
    def zero_max_policy(self) -> ZeroMaxPolicy:
        return self._zero_max_policy

    # ----------------------------
    # Notificaciones
    # ----------------------------
    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, kind: Invalidation) -> Invalidation:
        if kind is Invalidation.NONE:
            return kind
        for cb in list(self._listeners):
            cb(kind)
        return kind

    # ----------------------------
    # Progreso
    # ----------------------------
    def set_max(self, value: int) -> Invalidation:
        value = int(value)
        if value <= 0 or value == self._state.max:
            if value <= 0:
                log.debug("set_max(%s) ignorado: max debe ser > 0", value)
            return Invalidation.NONE
        self._state.max = value
        return self._emit(Invalidation.REDRAW)

    def set_progress(self, value: int) -> Invalidation:
        value = int(value)
        mx = self._state.max
        if mx > 0 and value >= mx:
            value %= mx
        self._state.progress = value
        return self._emit(Invalidation.REDRAW)

    # ----------------------------
    # Estilo
    # ----------------------------
    def set_stroke_width(self, value: int) -> Invalidation:
        _validate_stroke_width(value)
        if int(value) == self._style.stroke_width:
            return Invalidation.NONE
        self._style = replace(self._style, stroke_width=int(value))
        self._rect_key = None
        return self._emit(Invalidation.RELAYOUT)

    def set_finished_color(self, value: str) -> Invalidation:
        return self._set_color("finished_color", value)

    def set_unfinished_color(self, value: str) -> Invalidation:
        return self._set_color("unfinished_color", value)

    def _set_color(self, field: str, value: str) -> Invalidation:
        if not is_valid_color(value):
            raise CpbValidationError(f"{field} inválido: {value!r}")
        value = value.strip()
        if getattr(self._style, field) == value:
            return Invalidation.NONE
        self._style = replace(self._style, **{field: value})
        return self._emit(Invalidation.REDRAW)

    def set_round_cap(self, value: bool) -> Invalidation:
        if bool(value) == self._style.round_cap:
            return Invalidation.NONE
        self._style = replace(self._style, round_cap=bool(value))
        return self._emit(Invalidation.REDRAW)

    def set_start_angle(self, value: float) -> Invalidation:
        if float(value) == self._style.start_angle:
            return Invalidation.NONE
        self._style = replace(self._style, start_angle=float(value))
        return self._emit(Invalidation.REDRAW)

    def set_custom_mapping(self, mapping: Optional[AngleProvider]) -> Invalidation:
        mapping = coerce_mapping(mapping)
        if mapping is self._mapping:
            return Invalidation.NONE
        self._mapping = mapping
        return self._emit(Invalidation.REDRAW)

    # ----------------------------
    # Geometría
    # ----------------------------
    def draw_rect(self, box_width: float, box_height: float) -> DrawRect:
        key = (float(box_width), float(box_height), self._style.stroke_width)
        if self._rect is None or self._rect_key != key:
            self._rect = compute_draw_rect(key[0], key[1], key[2])
            self._rect_key = key
        return self._rect

    def arcs(self) -> ArcPair:
        return compute_arcs(
            self._state.progress,
            self._state.max,
            self._style.start_angle,
            self._mapping,
            policy=self._zero_max_policy,
        )

    # ----------------------------
    # Save / restore
    # ----------------------------
    def snapshot(self, base_view_state_b64: str = "") -> ProgressBarConfig:
        s = self._style
        return ProgressBarConfig(
            stroke_width=s.stroke_width,
            start_angle=s.start_angle,
            finished_color=s.finished_color,
            unfinished_color=s.unfinished_color,
            max=self._state.max,
            progress=self._state.progress,
            round_cap=s.round_cap,
            base_view_state_b64=base_view_state_b64,
        )

    def restore(self, config: ProgressBarConfig) -> Invalidation:
        """Aplica un snapshot: estilo directo, luego set_max y set_progress (en ese orden)."""
        style = ArcStyle(
            stroke_width=int(config.stroke_width),
            finished_color=str(config.finished_color).strip(),
            unfinished_color=str(config.unfinished_color).strip(),
            round_cap=bool(config.round_cap),
            start_angle=float(config.start_angle),
        )
        _validate_style(style)
        relayout = style.stroke_width != self._style.stroke_width
        self._style = style
        self._rect_key = None

        # Sin emitir por cada campo: una sola notificación al final.
        listeners, self._listeners = self._listeners, []
        try:
            self.set_max(config.max)
            self.set_progress(config.progress)
        finally:
            self._listeners = listeners
        return self._emit(Invalidation.RELAYOUT if relayout else Invalidation.REDRAW)


def _validate_stroke_width(value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise CpbValidationError(f"stroke_width inválido (int > 0): {value!r}")


def _validate_style(style: ArcStyle) -> None:
    _validate_stroke_width(style.stroke_width)
    for field in ("finished_color", "unfinished_color"):
        value = getattr(style, field)
        if not is_valid_color(value):
            raise CpbValidationError(f"{field} inválido: {value!r}")
