import logging
import sys

ROOT_LOGGER_NAME = "sales_reports"


def setup_logger(name: str = "reports") -> logging.Logger:
    """
    Configure and return a logger instance for the reporting run.

    Loggers live under the ``sales_reports`` namespace so one call to
    ``set_log_level`` adjusts all of them.
    """
    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    logger.setLevel(logging.NOTSET)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    if root.level == logging.NOTSET:
        root.setLevel(logging.INFO)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        root.addHandler(handler)

    return logger


def set_log_level(level: str) -> None:
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.getLevelNamesMapping()[level.upper()])
