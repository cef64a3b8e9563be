import logging
from pathlib import Path

import pytest

from cmsaf_reader.core.exceptions import ParameterError
from cmsaf_reader.core.logging_config import (
    default_log_level,
    get_logger,
    parse_log_level,
    set_log_level,
    setup_logging,
)


@pytest.fixture
def restore_logger():
    logger = logging.getLogger("cmsaf_reader")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_setup_logging_with_file(tmp_path: Path, restore_logger):
    log_file = tmp_path / "logs" / "cmsaf_reader.log"
    logger = setup_logging("debug", log_file=log_file)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert not logger.propagate

    get_logger("io.connection").debug("opened %s", "sample.nc")
    for handler in logger.handlers:
        handler.flush()
    assert "opened sample.nc" in log_file.read_text()


def test_setup_logging_replaces_handlers(restore_logger):
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1


def test_set_log_level(restore_logger):
    logger = setup_logging(logging.INFO)
    set_log_level("ERROR")
    assert logger.level == logging.ERROR
    assert all(h.level == logging.ERROR for h in logger.handlers)


def test_get_logger_namespace():
    assert get_logger("main").name == "cmsaf_reader.main"


def test_get_logger_accepts_module_dunder_name():
    assert get_logger("cmsaf_reader.io.connection").name == "cmsaf_reader.io.connection"
    assert get_logger().name == "cmsaf_reader"


def test_package_modules_log_under_package_logger():
    from cmsaf_reader.io import connection
    from cmsaf_reader.processing import reprojection

    assert connection.logger is get_logger("io.connection")
    assert reprojection.logger.name == "cmsaf_reader.processing.reprojection"


@pytest.mark.parametrize("level, expected", [
    ("debug", logging.DEBUG),
    (" Warning ", logging.WARNING),
    (logging.ERROR, logging.ERROR),
])
def test_parse_log_level(level, expected):
    assert parse_log_level(level) == expected


def test_parse_log_level_unknown_name():
    with pytest.raises(ParameterError):
        parse_log_level("verbose")


def test_default_log_level_from_environment(monkeypatch):
    monkeypatch.delenv("CMSAF_READER_LOG_LEVEL", raising=False)
    assert default_log_level() == logging.WARNING
    monkeypatch.setenv("CMSAF_READER_LOG_LEVEL", "info")
    assert default_log_level() == logging.INFO
