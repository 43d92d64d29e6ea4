# File: cpb/core/serialization.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: stable
# Date: 2026-10-19
# Purpose: Carga/guardado del estado del widget (.cpb.json, JSON legible).
from __future__ import annotations

import json
from pathlib import Path

from cpb.core.config import ProgressBarConfig
from cpb.utils.errors import CpbIOError, CpbValidationError

STATE_SUFFIX = ".cpb.json"


def state_path_for(path: str | Path) -> Path:
    """Fuerza la extensión .cpb.json (widget.json -> widget.cpb.json)."""
    p = Path(path)
    if p.name.lower().endswith(STATE_SUFFIX):
        return p
    return p.with_name(p.stem + STATE_SUFFIX) if p.suffix.lower() == ".json" else p.with_name(p.name + STATE_SUFFIX)


def save_state(config: ProgressBarConfig, path: str | Path) -> Path:
    """Guarda el snapshot en JSON.

    - Escribe de forma atómica (tmp + replace) para evitar archivos corruptos.
    """
    p = state_path_for(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        txt = json.dumps(config.to_dict(), ensure_ascii=False, indent=2)
        tmp = p.with_name(p.name + ".tmp")
        tmp.write_text(txt, encoding="utf-8")
        tmp.replace(p)
        return p
    except OSError as e:
        raise CpbIOError("No se pudo guardar el estado: {}".format(p)) from e


def load_state(path: str | Path) -> ProgressBarConfig:
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as e:
        raise CpbIOError("No se pudo leer el estado: {}".format(p)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CpbValidationError(
            "Estado inválido (JSON malformado): {} (línea {}, columna {})".format(p, e.lineno, e.colno)
        ) from e

    if not isinstance(data, dict):
        raise CpbValidationError("Estructura inválida: raíz no es objeto JSON")

    return ProgressBarConfig.from_dict(data)
