# File: cpb/core/settings.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: wip
# Date: 2026-10-19
# Purpose: Atributos del widget (cpb_*) desde cpb_settings.json y variables de entorno.
# Notes: No depende de Qt. Valores inválidos caen al default con warning (nunca rompe el arranque).
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from cpb.core.config import is_valid_color
from cpb.core.models import ArcStyle, ProgressState
from cpb.core.version import (
    DEFAULT_FINISHED_COLOR,
    DEFAULT_MAX,
    DEFAULT_PROGRESS,
    DEFAULT_ROUND_CAP,
    DEFAULT_START_ANGLE,
    DEFAULT_STROKE_WIDTH,
    DEFAULT_UNFINISHED_COLOR,
)

log = logging.getLogger(__name__)

# ------------------------------
# Project settings (repo-local)
# ------------------------------
# Archivo esperado: cpb_settings.json en la raíz del proyecto (o en un padre del CWD).
PROJECT_SETTINGS_FILENAME = "cpb_settings.json"

# Atributos soportados (mismo set que el styleable del widget).
ATTR_STROKE_WIDTH = "cpb_stroke_width"
ATTR_START_ANGLE = "cpb_start_angle"
ATTR_FINISHED_COLOR = "cpb_finished_color"
ATTR_UNFINISHED_COLOR = "cpb_unfinished_color"
ATTR_MAX = "cpb_max"
ATTR_PROGRESS = "cpb_progress"
ATTR_ROUND_CAP = "cpb_round_cap"

# attr -> env var (solo estilo; max/progress son estado, no preferencia)
ENV_OVERRIDES = {
    ATTR_STROKE_WIDTH: "CPB_STROKE_WIDTH",
    ATTR_START_ANGLE: "CPB_START_ANGLE",
    ATTR_FINISHED_COLOR: "CPB_FINISHED_COLOR",
    ATTR_UNFINISHED_COLOR: "CPB_UNFINISHED_COLOR",
    ATTR_ROUND_CAP: "CPB_ROUND_CAP",
}


def find_project_settings_path(start: Path | None = None) -> Path | None:
    """Busca cpb_settings.json subiendo desde start (o CWD)."""
    start = (start or Path.cwd()).resolve()
    for p in (start, *start.parents):
        candidate = p / PROJECT_SETTINGS_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_project_settings(start: Path | None = None, *, logger: logging.Logger | None = None) -> Dict[str, Any]:
    """Carga el JSON de project settings. Devuelve {} si no existe o es inválido."""
    _log = logger or log
    p = find_project_settings_path(start)
    if not p:
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    except (OSError, ValueError) as e:
        _log.warning("No se pudo leer %s: %s", p, e)
        return {}


def save_project_settings(data: Dict[str, Any], start: Path | None = None, *, logger: logging.Logger | None = None) -> Path | None:
    """Guarda project settings en cpb_settings.json.

    - Si se encuentra un archivo existente, lo pisa.
    - Si no existe, lo crea en start (o CWD).

    Devuelve el Path guardado o None si falla.
    """
    _log = logger or log
    p = find_project_settings_path(start)
    if not p:
        p = (start or Path.cwd()).resolve() / PROJECT_SETTINGS_FILENAME
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        return p
    except OSError as e:
        _log.warning("No se pudo guardar %s: %s", p, e)
        return None


def apply_project_settings(
    start: Path | None = None,
    *,
    logger: logging.Logger | None = None,
    prefer_env: bool = True,
) -> Dict[str, Any]:
    """Carga la sección "widget" de cpb_settings.json y la exporta como CPB_* env vars.

    - Si `prefer_env=True`, una env var ya seteada NO se pisa.
    - Si `prefer_env=False`, el JSON pisa la env var.

    Devuelve un dict con los valores aplicados desde JSON.
    """
    _log = logger or log
    widget = load_project_settings(start, logger=_log).get("widget")
    if not isinstance(widget, dict):
        return {}

    applied: Dict[str, Any] = {}
    for attr, env in ENV_OVERRIDES.items():
        if attr not in widget:
            continue
        if prefer_env and os.environ.get(env):
            continue
        value = widget[attr]
        os.environ[env] = str(value).lower() if isinstance(value, bool) else str(value)
        applied[attr] = value

    if applied:
        _log.info("Project settings aplicados: %s", applied)
    return applied


def load_widget_attrs(start: Path | None = None, *, logger: logging.Logger | None = None) -> Dict[str, Any]:
    """Atributos efectivos: sección "widget" del JSON + overrides CPB_* (gana env)."""
    widget = load_project_settings(start, logger=logger).get("widget")
    attrs: Dict[str, Any] = dict(widget) if isinstance(widget, dict) else {}
    for attr, env in ENV_OVERRIDES.items():
        raw = os.environ.get(env)
        if raw is not None and str(raw).strip() != "":
            attrs[attr] = raw.strip()
    return attrs


def style_from_attrs(attrs: Mapping[str, Any], *, logger: logging.Logger | None = None) -> Tuple[ArcStyle, ProgressState]:
    """Convierte un set de atributos cpb_* en (ArcStyle, ProgressState)."""
    _log = logger or log
    style = ArcStyle(
        stroke_width=_coerce_int(attrs.get(ATTR_STROKE_WIDTH), DEFAULT_STROKE_WIDTH, ATTR_STROKE_WIDTH, _log, min_v=1),
        finished_color=_coerce_color(attrs.get(ATTR_FINISHED_COLOR), DEFAULT_FINISHED_COLOR, ATTR_FINISHED_COLOR, _log),
        unfinished_color=_coerce_color(attrs.get(ATTR_UNFINISHED_COLOR), DEFAULT_UNFINISHED_COLOR, ATTR_UNFINISHED_COLOR, _log),
        round_cap=_coerce_bool(attrs.get(ATTR_ROUND_CAP), DEFAULT_ROUND_CAP, ATTR_ROUND_CAP, _log),
        start_angle=float(_coerce_int(attrs.get(ATTR_START_ANGLE), int(DEFAULT_START_ANGLE), ATTR_START_ANGLE, _log)),
    )
    state = ProgressState(
        progress=_coerce_int(attrs.get(ATTR_PROGRESS), DEFAULT_PROGRESS, ATTR_PROGRESS, _log),
        max=_coerce_int(attrs.get(ATTR_MAX), DEFAULT_MAX, ATTR_MAX, _log),
    )
    return style, state


def _coerce_int(v: Any, default: int, name: str, _log: logging.Logger, *, min_v: int | None = None) -> int:
    if v is None:
        return default
    try:
        if isinstance(v, bool):
            raise ValueError("bool")
        # "12.0" / 12.7 -> 12 (dimensión truncada, como un cast a int)
        n = v if isinstance(v, int) else int(float(v))
    except (TypeError, ValueError, OverflowError):
        _log.warning("%s inválido (%r); uso default %s", name, v, default)
        return default
    if min_v is not None and n < min_v:
        _log.warning("%s fuera de rango (%r); uso default %s", name, v, default)
        return default
    return n


def _coerce_color(v: Any, default: str, name: str, _log: logging.Logger) -> str:
    if v is None:
        return default
    if is_valid_color(v):
        return str(v).strip()
    _log.warning("%s inválido (%r); uso default %s", name, v, default)
    return default


def _coerce_bool(v: Any, default: bool, name: str, _log: logging.Logger) -> bool:
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    _log.warning("%s inválido (%r); uso default %s", name, v, default)
    return default
