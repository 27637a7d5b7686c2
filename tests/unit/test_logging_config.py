import logging

from responses_adapter.config import Settings
from responses_adapter.logging_config import STREAM_LOGGER, build_logging_config, setup_logging


def test_default_levels_follow_debug_flag():
    config = build_logging_config(Settings(DEBUG=False))
    assert config["loggers"]["responses_adapter"]["level"] == "INFO"
    assert STREAM_LOGGER not in config["loggers"]

    config = build_logging_config(Settings(DEBUG=True))
    assert config["loggers"]["responses_adapter"]["level"] == "DEBUG"


def test_stream_logger_level_override():
    config = build_logging_config(Settings(DEBUG=False, STREAM_LOG_LEVEL="debug"))
    assert config["loggers"][STREAM_LOGGER] == {"level": "DEBUG"}


def test_setup_logging_applies_stream_override(monkeypatch):
    monkeypatch.setenv("STREAM_LOG_LEVEL", "DEBUG")

    setup_logging()

    assert logging.getLogger(STREAM_LOGGER).level == logging.DEBUG
    assert logging.getLogger("responses_adapter").level == logging.INFO
