# File: cpb/app.py
# Project: CircleProgressBar (CPB)
# Version: 1.0.0
# Status: stable
# Date: 2026-10-19
# Purpose: Entry-point demo: ventana con el indicador + slider, estado persistible.
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMainWindow

from cpb.core.serialization import load_state, save_state, state_path_for
from cpb.core.settings import apply_project_settings, load_widget_attrs, style_from_attrs
from cpb.core.version import APP_NAME, APP_VERSION
from cpb.ui.circle_progress_bar import CircleProgressBar
from cpb.ui.progress_container import ProgressContainer
from cpb.utils.errors import CpbError
from cpb.utils.log import get_logger, setup_logging

log = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="cpb-demo", description="{} v{}".format(APP_NAME, APP_VERSION))
    ap.add_argument("--max", type=int, default=None, help="Valor máximo (> 0)")
    ap.add_argument("--progress", type=int, default=None, help="Progreso inicial")
    ap.add_argument("--state", type=Path, default=None, help="Archivo .cpb.json a restaurar/guardar")
    return ap


def build_window(args: argparse.Namespace) -> QMainWindow:
    style, state = style_from_attrs(load_widget_attrs(), logger=log)
    if args.max is not None:
        state.max = args.max
    if args.progress is not None:
        state.progress = args.progress
    if state.max <= 0:
        # Sin max el indicador no tiene escala; 100 para la demo.
        state.max = 100

    bar = CircleProgressBar(style=style, state=state)
    if args.state is not None and state_path_for(args.state).exists():
        src = state_path_for(args.state)
        try:
            bar.restore_state(load_state(src))
            log.info("Estado restaurado desde %s", src)
        except CpbError as e:
            log.warning("No se pudo restaurar %s: %s", src, e)

    w = QMainWindow()
    w.setWindowTitle("{} v{}".format(APP_NAME, APP_VERSION))
    w.setCentralWidget(ProgressContainer(bar, w))
    w.resize(320, 360)
    return w


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    apply_project_settings(logger=log, prefer_env=True)
    app = QApplication.instance() or QApplication(sys.argv[:1])
    w = build_window(args)
    w.show()
    log.info("CPB iniciado (v%s)", APP_VERSION)
    rc = app.exec()

    if args.state is not None:
        bar = w.centralWidget().bar
        try:
            p = save_state(bar.save_state(), args.state)
            log.info("Estado guardado en %s", p)
        except CpbError as e:
            log.warning("No se pudo guardar el estado: %s", e)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
