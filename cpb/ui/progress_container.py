# File: cpb/ui/progress_container.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: wip
# Date: 2026-10-19
# Purpose: Contenedor demo: CircleProgressBar + barra inferior (slider de progreso).
# Notes: El slider y el widget se sincronizan en ambos sentidos sin bucles de señales.

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QSlider, QVBoxLayout, QWidget

from cpb.ui.circle_progress_bar import CircleProgressBar


class ProgressContainer(QWidget):
    """Widget central: indicador circular + slider de progreso inferior."""

    def __init__(self, bar: CircleProgressBar, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.bar = bar

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(2)
        root.addWidget(self.bar, 1)

        row = QWidget(self)
        bl = QHBoxLayout(row)
        bl.setContentsMargins(6, 0, 6, 0)
        bl.setSpacing(8)

        self._lbl = QLabel("Progreso", row)
        self._lbl.setAlignment(Qt.AlignVCenter | Qt.AlignLeft)
        bl.addWidget(self._lbl, 0)

        self._slider = QSlider(Qt.Horizontal, row)
        self._slider.setRange(0, max(0, self.bar.maximum() - 1))
        self._slider.setSingleStep(1)
        self._slider.setValue(max(0, self.bar.progress()))
        self._slider.valueChanged.connect(self._on_slider)
        bl.addWidget(self._slider, 1)

        self._pct = QLabel("0%", row)
        self._pct.setAlignment(Qt.AlignVCenter | Qt.AlignRight)
        self._pct.setMinimumWidth(60)
        bl.addWidget(self._pct, 0)

        root.addWidget(row, 0)

        # Sync desde el widget (setters programáticos / restore)
        self.bar.progress_changed.connect(self._on_bar_progress)
        self.bar.max_changed.connect(self._on_bar_max)
        self._on_bar_progress(self.bar.progress())

    def slider(self) -> QSlider:
        return self._slider

    def percent_text(self) -> str:
        return self._pct.text()

    def _on_bar_max(self, mx: int) -> None:
        # progress siempre queda en [0, max) tras el wrap.
        self._slider.blockSignals(True)
        self._slider.setRange(0, max(0, int(mx) - 1))
        self._slider.blockSignals(False)
        self._on_bar_progress(self.bar.progress())

    def _on_slider(self, v: int) -> None:
        self.bar.set_progress(int(v))

    def _on_bar_progress(self, v: int) -> None:
        v = int(v)
        clamped = max(int(self._slider.minimum()), min(int(self._slider.maximum()), v))
        if self._slider.value() != clamped:
            self._slider.blockSignals(True)
            self._slider.setValue(clamped)
            self._slider.blockSignals(False)
        mx = self.bar.maximum()
        pct = int(round(100.0 * v / mx)) if mx > 0 else 0
        self._pct.setText(f"{pct}%")
