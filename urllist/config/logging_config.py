import logging
import logging.handlers
import os
from datetime import datetime

from urllist.core.config import settings

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = None, log_dir: str = None, log_to_file: bool = None):
    """
    Set up logging for the service: console output plus, optionally, a
    log file named after the start time. Safe to call more than once.
    """
    level = (level or settings.log_level).upper()
    log_dir = log_dir or settings.log_dir
    if log_to_file is None:
        log_to_file = settings.log_to_file

    root_logger = logging.getLogger()
    if getattr(root_logger, "_urllist_configured", False):
        root_logger.setLevel(level)
        return

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_to_file:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        current_time = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_filename = os.path.join(log_dir, f"app_{current_time}.log")

        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

        # Keep uvicorn access logs in the same file
        access_logger = logging.getLogger("uvicorn.access")
        access_logger.addHandler(file_handler)
        access_logger.setLevel(logging.INFO)

    root_logger._urllist_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name
    """
    return logging.getLogger(name)
