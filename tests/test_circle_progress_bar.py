import pytest

pytest.importorskip("PySide6")

from PySide6.QtGui import QColor  # noqa: E402

from cpb.core.angle_mapping import CustomAngleMapping  # noqa: E402
from cpb.core.models import ArcStyle, ProgressState  # noqa: E402
from cpb.geom.arc_geometry import Arc  # noqa: E402
from cpb.ui.circle_progress_bar import CircleProgressBar, to_qt_angle, to_qt_arc  # noqa: E402
from cpb.ui.progress_container import ProgressContainer  # noqa: E402


@pytest.fixture
def bar(qapp):
    w = CircleProgressBar(state=ProgressState(progress=0, max=100))
    w.resize(100, 100)
    yield w
    w.deleteLater()


def _pixel(widget, x, y):
    return QColor(widget.grab().toImage().pixel(x, y)).name()


def test_to_qt_angle_flips_direction_and_scales():
    assert to_qt_angle(-90) == 1440
    assert to_qt_angle(270) == -4320
    assert to_qt_angle(0) == 0
    assert to_qt_angle(0.5) == -8


def test_setters_and_signals(bar):
    progress_seen, max_seen = [], []
    bar.progress_changed.connect(progress_seen.append)
    bar.max_changed.connect(max_seen.append)

    bar.set_max(0)
    bar.set_max(50)
    bar.set_progress(120)

    assert bar.maximum() == 50
    assert bar.progress() == 20
    assert max_seen == [50]
    assert progress_seen == [20]


def test_measure_uses_widget_size(bar):
    bar.resize(200, 100)
    r = bar.measure()
    assert r.as_tuple() == (60.0, 10.0, 140.0, 90.0)
    assert bar.measure(50, 50).as_tuple() == (10.0, 10.0, 40.0, 40.0)


def test_stroke_width_change_updates_layout_hints(bar):
    before = bar.sizeHint()
    bar.set_stroke_width(20)
    assert bar.model.style.stroke_width == 20
    assert bar.sizeHint().width() > before.width()
    assert bar.minimumSizeHint().width() == 42


def test_paint_full_ring_at_zero_progress(bar):
    # progress 0: el arco finished cubre todo el anillo
    assert _pixel(bar, 50, 10) == "#0000ff"
    assert _pixel(bar, 50, 90) == "#0000ff"


def test_paint_quarter_progress_leaves_track_visible(bar):
    bar.set_progress(25)
    # arco finished: de 3 en punto, 270° en sentido horario (hasta 12 en punto)
    assert _pixel(bar, 50, 90) == "#0000ff"
    assert _pixel(bar, 10, 50) == "#0000ff"
    # cuadrante superior derecho: solo pista
    assert _pixel(bar, 78, 22) == "#888888"


def test_paint_custom_mapping(bar):
    bar.set_custom_draw(CustomAngleMapping(progress_angle=lambda p: 90, start_angle=lambda p: 0))
    bar.set_progress(10)
    # de 3 en punto a 6 en punto (horario): cuadrante inferior derecho
    assert _pixel(bar, 78, 78) == "#0000ff"
    assert _pixel(bar, 22, 22) == "#888888"


def test_degenerate_rect_paints_nothing(qapp):
    w = CircleProgressBar(style=ArcStyle(stroke_width=30), state=ProgressState(max=10))
    w.resize(40, 40)
    assert w.measure().is_degenerate
    w.grab()  # no debe fallar


def test_save_restore_state(bar):
    bar.set_finished_color("#ff0000")
    bar.set_round_cap(False)
    bar.set_progress(42)
    cfg = bar.save_state()
    assert cfg.base_view_state_b64

    other = CircleProgressBar()
    seen = []
    other.progress_changed.connect(seen.append)
    other.restore_state(cfg)

    assert other.maximum() == 100
    assert other.progress() == 42
    assert other.model.style == bar.model.style
    assert seen == [42]
    other.deleteLater()


def test_restore_state_ignores_bad_geometry(bar, caplog):
    cfg = bar.save_state()
    cfg.base_view_state_b64 = "!!not base64!!"
    other = CircleProgressBar()
    other.restore_state(cfg)
    assert other.maximum() == 100
    assert "base_view_state_b64" in caplog.text
    other.deleteLater()


def test_container_syncs_slider_and_bar(bar):
    c = ProgressContainer(bar)
    assert c.slider().maximum() == 99

    c.slider().setValue(30)
    assert bar.progress() == 30
    assert c.percent_text() == "30%"

    bar.set_max(50)
    assert c.slider().maximum() == 49
    bar.set_progress(25)
    assert c.slider().value() == 25
    assert c.percent_text() == "50%"
    c.deleteLater()


# --- ángulos fuera de rango --------------------------------------------------

def test_to_qt_arc_reduces_start_and_clamps_sweep():
    assert to_qt_arc(Arc(2e8, 90)) == (to_qt_angle(200), to_qt_angle(90))
    assert to_qt_arc(Arc(-725, -1000)) == (to_qt_angle(-5), to_qt_angle(-360))
    assert to_qt_arc(Arc(-90, 360)) == (1440, -5760)


@pytest.mark.parametrize("arc", [Arc(float("nan"), 90), Arc(0, float("inf")), Arc(float("-inf"), float("nan"))])
def test_to_qt_arc_skips_non_finite(arc):
    assert to_qt_arc(arc) is None


def test_paint_huge_custom_start_angle(bar):
    bar.set_custom_draw(CustomAngleMapping(progress_angle=lambda p: 90, start_angle=lambda p: 2e8))
    # 2e8 ≡ 200°: el arco cubre 200°..290° (cuadrante superior izquierdo)
    assert _pixel(bar, 33, 13) == "#0000ff"
    assert _pixel(bar, 50, 90) == "#888888"


def test_paint_huge_negative_progress(bar):
    bar.set_max(3)
    bar.set_progress(-10**9)
    assert bar.progress() == -10**9
    # sweep enorme -> óvalo completo
    assert _pixel(bar, 50, 90) == "#0000ff"
    assert _pixel(bar, 50, 10) == "#0000ff"


def test_paint_nan_mapping_draws_only_track(bar):
    bar.set_custom_draw(CustomAngleMapping(progress_angle=lambda p: float("nan"), start_angle=lambda p: 0))
    assert _pixel(bar, 50, 10) == "#888888"
    assert _pixel(bar, 50, 90) == "#888888"
