# File: cpb/ui/circle_progress_bar.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: stable
# Date: 2026-10-19
# Purpose: Widget Qt (PySide6): dibuja pista + arco de progreso a partir de CircleProgressModel.
# Notes: Toda la matemática vive en cpb.geom; acá solo se traduce a QPainter.
from __future__ import annotations

import base64
import binascii
import math

from PySide6.QtCore import QByteArray, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QColor, QPainter, QPaintEvent, QPen, QResizeEvent
from PySide6.QtWidgets import QSizePolicy, QWidget

from cpb.core.angle_mapping import AngleProvider
from cpb.core.config import ProgressBarConfig
from cpb.core.models import ArcStyle, CircleProgressModel, Invalidation, ProgressState
from cpb.geom.arc_geometry import FULL_CIRCLE, Arc, DrawRect, ZeroMaxPolicy
from cpb.utils.log import get_logger

log = get_logger(__name__)

# Qt: ángulos en 1/16 de grado, positivos en sentido antihorario.
QT_ANGLE_UNITS = 16


def to_qt_angle(deg: float) -> int:
    """Grados horarios (convención del modelo) -> unidades de QPainter.drawArc."""
    return -int(round(float(deg) * QT_ANGLE_UNITS))


def to_qt_arc(arc: Arc) -> tuple[int, int] | None:
    """(start, span) acotados para drawArc (ints de 32 bits), o None si no es dibujable.

    - start se reduce módulo 360 (mismo ángulo en pantalla).
    - sweep se limita a [-360, 360]: 360 o más = óvalo completo.
    - NaN/inf -> None (no se dibuja ese arco).
    """
    start = float(arc.start_angle)
    sweep = float(arc.sweep_angle)
    if not (math.isfinite(start) and math.isfinite(sweep)):
        return None
    start = math.fmod(start, FULL_CIRCLE)
    sweep = max(-FULL_CIRCLE, min(FULL_CIRCLE, sweep))
    return to_qt_angle(start), to_qt_angle(sweep)


class CircleProgressBar(QWidget):
    """Indicador circular: pista completa (color unfinished) + arco finished encima."""

    progress_changed = Signal(int)
    max_changed = Signal(int)

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        style: ArcStyle | None = None,
        state: ProgressState | None = None,
        zero_max_policy: ZeroMaxPolicy = ZeroMaxPolicy.EMPTY,
    ) -> None:
        super().__init__(parent)
        self._model = CircleProgressModel(style, state, zero_max_policy=zero_max_policy)
        self._model.subscribe(self._on_invalidated)
        self._pen = QPen()
        self._init_pen()
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    # ----------------------------
    # API pública
    # ----------------------------
    @property
    def model(self) -> CircleProgressModel:
        return self._model

    def set_max(self, value: int) -> None:
        if self._model.set_max(value) is not Invalidation.NONE:
            self.max_changed.emit(self._model.max)

    def maximum(self) -> int:
        return self._model.max

    def set_progress(self, value: int) -> None:
        self._model.set_progress(value)
        self.progress_changed.emit(self._model.progress)

    def progress(self) -> int:
        return self._model.progress

    def set_stroke_width(self, value: int) -> None:
        self._model.set_stroke_width(value)

    def set_round_cap(self, value: bool) -> None:
        self._model.set_round_cap(value)

    def set_finished_color(self, value: str) -> None:
        self._model.set_finished_color(value)

    def set_unfinished_color(self, value: str) -> None:
        self._model.set_unfinished_color(value)

    def set_start_angle(self, value: float) -> None:
        self._model.set_start_angle(value)

    def set_custom_draw(self, mapping: AngleProvider | None) -> None:
        """Registra (o quita con None) un mapeo de ángulos custom."""
        self._model.set_custom_mapping(mapping)

    # ----------------------------
    # Invalidación
    # ----------------------------
    def _on_invalidated(self, kind: Invalidation) -> None:
        self._init_pen()
        if kind is Invalidation.RELAYOUT:
            self.updateGeometry()
        self.update()

    def _init_pen(self) -> None:
        s = self._model.style
        self._pen.setWidth(int(s.stroke_width))
        self._pen.setCapStyle(Qt.RoundCap if s.round_cap else Qt.FlatCap)
        self._pen.setStyle(Qt.SolidLine)

    # ----------------------------
    # Layout
    # ----------------------------
    def measure(self, width: float | None = None, height: float | None = None) -> DrawRect:
        """Rect de dibujo para (width, height); por defecto el tamaño actual del widget."""
        w = float(self.width() if width is None else width)
        h = float(self.height() if height is None else height)
        return self._model.draw_rect(w, h)

    def sizeHint(self) -> QSize:
        side = max(64, self._model.style.stroke_width * 8)
        return QSize(side, side)

    def minimumSizeHint(self) -> QSize:
        side = self._model.style.stroke_width * 2 + 2
        return QSize(side, side)

    def resizeEvent(self, event: QResizeEvent) -> None:
        self.measure(event.size().width(), event.size().height())
        super().resizeEvent(event)

    # ----------------------------
    # Paint
    # ----------------------------
    def paintEvent(self, event: QPaintEvent) -> None:
        rect = self.measure()
        if rect.is_degenerate:
            return
        arcs = self._model.arcs()
        qrect = QRectF(rect.left, rect.top, rect.width, rect.height)

        p = QPainter(self)
        try:
            p.setRenderHint(QPainter.Antialiasing, True)
            p.setBrush(Qt.NoBrush)
            self._draw_arc(p, qrect, arcs.track, self._model.style.unfinished_color)
            self._draw_arc(p, qrect, arcs.progress, self._model.style.finished_color)
        finally:
            p.end()

    def _draw_arc(self, p: QPainter, rect: QRectF, arc: Arc, color: str) -> None:
        qt_arc = to_qt_arc(arc)
        if qt_arc is None:
            log.debug("Arco no finito %s; no se dibuja", arc)
            return
        self._pen.setColor(QColor(color))
        p.setPen(self._pen)
        p.drawArc(rect, qt_arc[0], qt_arc[1])

    # ----------------------------
    # Save / restore
    # ----------------------------
    def save_state(self) -> ProgressBarConfig:
        """Snapshot de la config + geometry del widget (base64)."""
        geometry_b64 = base64.b64encode(bytes(self.saveGeometry())).decode("ascii")
        return self._model.snapshot(geometry_b64)

    def restore_state(self, config: ProgressBarConfig) -> None:
        self._model.restore(config)
        if config.base_view_state_b64:
            try:
                raw = base64.b64decode(config.base_view_state_b64.encode("ascii"), validate=True)
            except (binascii.Error, ValueError):
                log.warning("base_view_state_b64 inválido; se ignora la geometry guardada")
            else:
                self.restoreGeometry(QByteArray(raw))
        self.max_changed.emit(self._model.max)
        self.progress_changed.emit(self._model.progress)
