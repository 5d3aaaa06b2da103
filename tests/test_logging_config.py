import logging

import pytest

from phonontransport.logging_config import parse_level, setup_logging


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("WARNING") == logging.WARNING
    with pytest.raises(ValueError):
        parse_level("chatty")


def test_setup_logging_does_not_stack_handlers(tmp_path):
    log_file = tmp_path / "run.log"
    logger = logging.getLogger("phonontransport")
    try:
        setup_logging(level=logging.INFO)
        setup_logging(level=logging.INFO, log_file=str(log_file))

        assert len(logger.handlers) == 2
        logging.getLogger("phonontransport.solvers.solver").info("hello from the solver")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from the solver" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
