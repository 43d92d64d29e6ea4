import json

import pytest

pytest.importorskip("PySide6")

from cpb.app import build_parser, build_window  # noqa: E402
from cpb.core.config import ProgressBarConfig  # noqa: E402
from cpb.core.serialization import save_state  # noqa: E402


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.max is None
    assert args.progress is None
    assert args.state is None


def test_window_uses_cli_values(qapp, tmp_path, clean_cpb_env):
    clean_cpb_env.chdir(tmp_path)
    w = build_window(build_parser().parse_args(["--max", "10", "--progress", "13"]))
    bar = w.centralWidget().bar
    assert bar.maximum() == 10
    assert bar.progress() == 3
    w.deleteLater()


def test_window_defaults_max_and_reads_settings(qapp, tmp_path, clean_cpb_env):
    (tmp_path / "cpb_settings.json").write_text(
        json.dumps({"widget": {"cpb_stroke_width": 4, "cpb_progress": 7}}), encoding="utf-8"
    )
    clean_cpb_env.chdir(tmp_path)
    w = build_window(build_parser().parse_args([]))
    bar = w.centralWidget().bar
    assert bar.maximum() == 100
    assert bar.progress() == 7
    assert bar.model.style.stroke_width == 4
    w.deleteLater()


def test_window_restores_state_file(qapp, tmp_path, clean_cpb_env):
    clean_cpb_env.chdir(tmp_path)
    save_state(ProgressBarConfig(max=20, progress=5, finished_color="#00ff00"), tmp_path / "demo")
    w = build_window(build_parser().parse_args(["--state", str(tmp_path / "demo")]))
    bar = w.centralWidget().bar
    assert (bar.maximum(), bar.progress()) == (20, 5)
    assert bar.model.style.finished_color == "#00ff00"
    w.deleteLater()
