# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from demand_timeline.logging_setup import console_min_level, setup_logging


def test_console_levels_per_logger() -> None:
    assert console_min_level("demand_timeline.tasks.task_store") == logging.NOTSET
    assert console_min_level("demand_timeline.timeline.layout") == logging.WARNING
    assert console_min_level("py.warnings") == logging.ERROR
    assert console_min_level("asyncio") == logging.ERROR


@pytest.fixture
def isolated_root_logger():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file_and_filters_console(
    tmp_path: Path, isolated_root_logger: logging.Logger, capsys: pytest.CaptureFixture[str]
) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs")
    setup_logging(log_dir=tmp_path / "logs")
    assert log_file == tmp_path / "logs" / "demand.log"
    assert len(isolated_root_logger.handlers) == 2

    logging.getLogger("demand_timeline.timeline.layout").debug("layout chatter")
    logging.getLogger("demand_timeline.tasks.task_store").info("store ready")
    logging.getLogger("some.library").warning("library noise")
    for h in isolated_root_logger.handlers:
        h.flush()

    err = capsys.readouterr().err
    assert "store ready" in err
    assert "layout chatter" not in err
    assert "library noise" not in err

    text = log_file.read_text(encoding="utf-8")
    assert "layout chatter" in text and "library noise" in text
