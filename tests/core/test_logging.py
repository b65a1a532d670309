"""Tests for daybook.core.utils.logging."""

import os

import pytest
from loguru import logger

from daybook.core.config import Config
from daybook.core.utils.logging import setup_logging, setup_logging_from_config


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()


def _drain():
    logger.complete()


class TestSetupLogging:
    def test_writes_to_file(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "daybook.log")
        setup_logging(level="info", log_file=log_file)
        logger.info("entries loaded")
        logger.debug("not shown")
        _drain()

        with open(log_file) as f:
            content = f.read()
        assert "entries loaded" in content
        assert "not shown" not in content

    def test_console_respects_level(self, capsys):
        setup_logging(level="ERROR")
        logger.warning("quiet")
        logger.error("loud")
        captured = capsys.readouterr()
        assert "quiet" not in captured.err
        assert "loud" in captured.err


class TestSetupLoggingFromConfig:
    def test_uses_config_section(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "from-config.log")
        config = Config(data_dir=tmp_dir)
        config.set("logging.level", "DEBUG")
        config.set("logging.file", log_file)

        setup_logging_from_config(config)
        logger.debug("debug line")
        _drain()

        with open(log_file) as f:
            assert "debug line" in f.read()

    def test_override_wins(self, tmp_dir, capsys):
        config = Config(data_dir=tmp_dir)
        config.set("logging.level", "ERROR")

        setup_logging_from_config(config, level_override="warning")
        logger.warning("visible warning")
        assert "visible warning" in capsys.readouterr().err
