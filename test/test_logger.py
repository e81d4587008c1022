"""
Tests for the structured logger setup.
"""

import logging

import pytest
import structlog

from kyuubi.logger import KyuubiStructLogger, get_kyuubi_logger, init_logger, setup_logging


@pytest.fixture
def clean_root_logger():
    root = logging.getLogger()
    level = root.level
    _remove_structlog_handlers(root)
    yield root
    _remove_structlog_handlers(root)
    root.setLevel(level)
    structlog.reset_defaults()


def _structlog_handlers(root):
    return [h for h in root.handlers if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)]


def _remove_structlog_handlers(root):
    for handler in _structlog_handlers(root):
        root.removeHandler(handler)


def test_setup_logging_installs_single_handler(clean_root_logger):
    setup_logging(log_level="DEBUG")
    setup_logging(log_level="INFO")

    assert len(_structlog_handlers(clean_root_logger)) == 1
    assert clean_root_logger.level == logging.INFO


def test_init_logger_reads_environment(clean_root_logger, monkeypatch):
    monkeypatch.setenv("KYUUBI_LOG_LEVEL", "warning")
    logger = init_logger()

    assert isinstance(logger, KyuubiStructLogger)
    assert clean_root_logger.level == logging.WARNING


def test_init_logger_debug_flag(clean_root_logger):
    init_logger(debug=True)
    assert clean_root_logger.level == logging.DEBUG


def test_bind_returns_new_logger():
    logger = get_kyuubi_logger()
    bound = logger.bind(component="KyuubiConf")

    assert isinstance(bound, KyuubiStructLogger)
    assert bound is not logger
    assert bound.log_name == "kyuubi"


def test_bind_accumulates_values():
    bound = get_kyuubi_logger().bind(component="ConfigRegistry").bind(registry="test")

    assert bound.initial_values == {"component": "ConfigRegistry", "registry": "test"}
    assert not hasattr(bound, "bind_context")


def test_messages_reach_stdlib_logging(clean_root_logger, caplog):
    setup_logging(log_level="INFO")
    clean_root_logger.addHandler(caplog.handler)

    get_kyuubi_logger().bind(component="test").info("Config entry registered", key="kyuubi.a")

    assert any("Config entry registered" in record.getMessage() for record in caplog.records)
