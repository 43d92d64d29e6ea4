# File: cpb/core/config.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: stable
# Date: 2026-10-19
# Purpose: Snapshot serializable de la configuración del widget (save/restore de ciclo de vida).
# Notes: Campos con nombre explícito; el estado base del host viaja como base64 opaco.
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from cpb.core.version import (
    DEFAULT_FINISHED_COLOR,
    DEFAULT_MAX,
    DEFAULT_PROGRESS,
    DEFAULT_ROUND_CAP,
    DEFAULT_START_ANGLE,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_UNFINISHED_COLOR,
    STATE_SCHEMA_VERSION,
)
from cpb.utils.errors import CpbSchemaError

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def is_valid_color(value: Any) -> bool:
    """#RGB, #RRGGBB o #AARRGGBB (mismo formato que acepta QColor)."""
    return isinstance(value, str) and bool(_COLOR_RE.match(value.strip()))


@dataclass
class ProgressBarConfig:
    stroke_width: int = DEFAULT_STROKE_WIDTH
    start_angle: float = DEFAULT_START_ANGLE
    finished_color: str = DEFAULT_FINISHED_COLOR
    unfinished_color: str = DEFAULT_UNFINISHED_COLOR
    max: int = DEFAULT_MAX
    progress: int = DEFAULT_PROGRESS
    round_cap: bool = DEFAULT_ROUND_CAP

    # Estado propio del host (p.ej. QWidget.saveGeometry()), en base64 para no atar el core a Qt.
    base_view_state_b64: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": STATE_SCHEMA_VERSION,
            "stroke_width": int(self.stroke_width),
            "start_angle": float(self.start_angle),
            "finished_color": str(self.finished_color),
            "unfinished_color": str(self.unfinished_color),
            "max": int(self.max),
            "progress": int(self.progress),
            "round_cap": bool(self.round_cap),
            "base_view_state_b64": str(self.base_view_state_b64 or ""),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ProgressBarConfig":
        """Claves faltantes toman el default; tipos inválidos -> CpbSchemaError."""
        if not isinstance(d, dict):
            raise CpbSchemaError("Estado inválido: se esperaba objeto JSON")

        schema_version = _as_int(d.get("schema_version", STATE_SCHEMA_VERSION), "schema_version")
        if schema_version != STATE_SCHEMA_VERSION:
            raise CpbSchemaError(
                f"Estado incompatible: schema_version={schema_version} (se espera {STATE_SCHEMA_VERSION})"
            )

        finished = d.get("finished_color", DEFAULT_FINISHED_COLOR)
        unfinished = d.get("unfinished_color", DEFAULT_UNFINISHED_COLOR)
        for name, value in (("finished_color", finished), ("unfinished_color", unfinished)):
            if not is_valid_color(value):
                raise CpbSchemaError(f"Campo {name} inválido (color): {value!r}")

        round_cap = d.get("round_cap", DEFAULT_ROUND_CAP)
        if not isinstance(round_cap, bool):
            raise CpbSchemaError(f"Campo round_cap inválido (bool): {round_cap!r}")

        return ProgressBarConfig(
            stroke_width=_as_int(d.get("stroke_width", DEFAULT_STROKE_WIDTH), "stroke_width"),
            start_angle=_as_float(d.get("start_angle", DEFAULT_START_ANGLE), "start_angle"),
            finished_color=str(finished).strip(),
            unfinished_color=str(unfinished).strip(),
            max=_as_int(d.get("max", DEFAULT_MAX), "max"),
            progress=_as_int(d.get("progress", DEFAULT_PROGRESS), "progress"),
            round_cap=round_cap,
            base_view_state_b64=str(d.get("base_view_state_b64") or ""),
        )


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise CpbSchemaError(f"Campo {field} inválido (float): {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise CpbSchemaError(f"Campo {field} inválido (float): {value!r}") from e


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
        raise CpbSchemaError(f"Campo {field} inválido (int): {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise CpbSchemaError(f"Campo {field} inválido (int): {value!r}") from e
