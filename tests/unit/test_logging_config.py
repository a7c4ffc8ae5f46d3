"""Unit tests for logger setup."""

import logging
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler

import pytest

from contract_deployer.config.logging_config import get_log_level, setup_logger


@pytest.fixture
def fresh_logger_name(request):
    name = f"test_logger_{request.node.name}"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_console_only(fresh_logger_name):
    logger = setup_logger(fresh_logger_name, log_to_file=False)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_file_handlers_under_log_dir(fresh_logger_name, clean_env, tmp_path):
    clean_env.setenv("LOG_DIR", str(tmp_path / "logs"))

    logger = setup_logger(fresh_logger_name, console=False)
    logger.error("deployment failed")

    types = {type(h) for h in logger.handlers}
    assert types == {TimedRotatingFileHandler, RotatingFileHandler}
    assert (tmp_path / "logs" / f"{fresh_logger_name}.log").exists()
    assert (tmp_path / "logs" / f"{fresh_logger_name}_errors.log").exists()


def test_no_duplicate_handlers(fresh_logger_name):
    setup_logger(fresh_logger_name, log_to_file=False)
    logger = setup_logger(fresh_logger_name, log_to_file=False)

    assert len(logger.handlers) == 1


@pytest.mark.parametrize(
    "raw,expected",
    [(None, logging.INFO), ("debug", logging.DEBUG), ("30", 30), ("nonsense", logging.INFO)],
)
def test_get_log_level(clean_env, raw, expected):
    if raw is not None:
        clean_env.setenv("LOG_LEVEL", raw)

    assert get_log_level() == expected
