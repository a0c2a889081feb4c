"""
Logging setup for the API server.

Everything goes through the root logger: one console handler, plus an
append-mode file handler when a log file is configured.  Modules log with
``logging.getLogger(__name__)``.
"""

import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Third-party loggers that are too chatty at DEBUG/INFO
QUIET_LOGGERS = {
    'urllib3': logging.WARNING,
    'httpx': logging.INFO,
    'httpcore': logging.INFO,
}


def resolve_level(log_level=None) -> int:
    """Numeric level for *log_level*; unknown names fall back to INFO.

    ``None`` means the configured ``LOG_LEVEL`` (see ``utils.settings``).
    """
    if log_level is None:
        from utils.settings import LOG_LEVEL
        log_level = LOG_LEVEL
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def _file_handler(log_file, level, formatter):
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_file=None, log_level=None):
    """
    Configure the root logger for the API process.

    Args:
        log_file: Log file path (optional); parent directories are created
        log_level: Level name or number (optional, falls back to LOG_LEVEL)

    Returns:
        The root logger
    """
    level = resolve_level(log_level)
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if isinstance(handler, logging.FileHandler):
            handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        root_logger.addHandler(_file_handler(log_file, level, formatter))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, quiet_level))

    return root_logger
