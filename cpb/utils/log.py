# File: cpb/utils/log.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.1
# Status: stable
# Date: 2026-10-19
# Purpose: Logging centralizado (consola + archivo) y helpers.
# Notes: Nivel configurable con CPB_LOG_LEVEL (mismo patrón que los overrides CPB_* de settings).
from __future__ import annotations

import logging
import os
from pathlib import Path

_LOGGER_CONFIGURED = False

LOG_LEVEL_ENV = "CPB_LOG_LEVEL"
LOG_FILENAME = "cpb.log"
# Logger raíz del paquete: todos los get_logger("cpb.*") cuelgan de acá.
PACKAGE_LOGGER = "cpb"


def level_from_env(default: int = logging.INFO) -> int:
    """CPB_LOG_LEVEL=debug|info|warning|error|critical (o número). Inválido -> default."""
    raw = str(os.environ.get(LOG_LEVEL_ENV, "") or "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


def setup_logging(log_dir: str | os.PathLike = "logs", level: int | None = None) -> None:
    """Configura logging en consola + archivo.

    Nota:
        - `level=None` toma CPB_LOG_LEVEL (default INFO).
        - El nivel se aplica al logger "cpb"; los handlers van en el root para
          capturar también warnings de otras libs.
        - No lanza excepción si no puede escribir el archivo; cae a consola.
    """
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    lvl = level_from_env() if level is None else level

    root = logging.getLogger()
    if root.level == logging.NOTSET or root.level > lvl:
        root.setLevel(lvl)
    logging.getLogger(PACKAGE_LOGGER).setLevel(lvl)

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Consola
    ch = logging.StreamHandler()
    ch.setLevel(lvl)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    # Archivo
    try:
        d = Path(log_dir)
        d.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(d / LOG_FILENAME, encoding="utf-8")
        fh.setLevel(lvl)
        fh.setFormatter(fmt)
        root.addHandler(fh)
    except OSError as e:
        logging.getLogger(__name__).warning("No se pudo inicializar FileHandler: %s", e)

    _LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
