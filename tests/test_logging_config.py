"""setup_logging attaches one handler set per module logger, even when rerun."""

import logging

from logging_config import setup_logging


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / "dash.log"
    setup_logging(logging.DEBUG, log_file=str(log_file))
    setup_logging(logging.DEBUG, log_file=str(log_file))

    logger = logging.getLogger("deviation")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    assert logger.propagate is False

    logger.debug("hello from the analyzer")
    for h in logger.handlers:
        h.flush()
    assert "hello from the analyzer" in log_file.read_text(encoding="utf-8")

    setup_logging(logging.INFO)
    assert len(logging.getLogger("deviation").handlers) == 1
