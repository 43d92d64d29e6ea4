import logging

import pytest

from cpb.utils import log as cpb_log


@pytest.fixture
def fresh_logging(monkeypatch):
    """Permite llamar setup_logging de nuevo y deja root/cpb como estaban."""
    root = logging.getLogger()
    pkg = logging.getLogger(cpb_log.PACKAGE_LOGGER)
    handlers, root_level, pkg_level = list(root.handlers), root.level, pkg.level
    monkeypatch.setattr(cpb_log, "_LOGGER_CONFIGURED", False)
    monkeypatch.delenv(cpb_log.LOG_LEVEL_ENV, raising=False)
    yield monkeypatch
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(root_level)
    pkg.setLevel(pkg_level)


@pytest.mark.parametrize(
    "raw,expected",
    [("", logging.INFO), ("debug", logging.DEBUG), (" Warning ", logging.WARNING), ("15", 15), ("loud", logging.INFO)],
)
def test_level_from_env(fresh_logging, raw, expected):
    fresh_logging.setenv(cpb_log.LOG_LEVEL_ENV, raw)
    assert cpb_log.level_from_env() == expected


def test_setup_logging_writes_file_with_env_level(fresh_logging, tmp_path):
    fresh_logging.setenv(cpb_log.LOG_LEVEL_ENV, "debug")
    cpb_log.setup_logging(tmp_path / "logs")

    assert logging.getLogger("cpb").level == logging.DEBUG
    cpb_log.get_logger("cpb.test").debug("hola debug")
    for h in logging.getLogger().handlers:
        h.flush()

    text = (tmp_path / "logs" / cpb_log.LOG_FILENAME).read_text(encoding="utf-8")
    assert "cpb.test: hola debug" in text


def test_setup_logging_is_idempotent(fresh_logging, tmp_path):
    root = logging.getLogger()
    cpb_log.setup_logging(tmp_path, level=logging.WARNING)
    count = len(root.handlers)
    cpb_log.setup_logging(tmp_path, level=logging.DEBUG)
    assert len(root.handlers) == count
    assert logging.getLogger("cpb").level == logging.WARNING
