"""
Logging Configuration
Sets up console (and optional file) logging for the dashboard modules.
"""
import logging
import sys
from typing import Optional

# loggers of the modules that make up the dashboard
_MODULE_LOGGERS = ("wellpath", "deviation", "scene3d", "streamlit_app")


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Attach handlers to the dashboard module loggers.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to also write logs to.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(formatter)

    for name in _MODULE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Streamlit reruns the script; drop handlers from the previous run
        if logger.hasHandlers():
            logger.handlers.clear()
        for h in handlers:
            logger.addHandler(h)
        logger.propagate = False

    logging.getLogger("streamlit_app").info("Logging initialized.")
