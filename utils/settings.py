"""
Runtime settings for the API server.

Values come from the optional ``config.py`` at the project root (copy
``config.example.py``), and any ``OTAKUDESU_*`` environment variable
overrides the file.
"""

import os
import logging
from typing import Optional

from utils.request_handler import RequestConfig, RetryPolicy, DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

# Import unified configuration
try:
    from config import BASE_URL
except ImportError:
    BASE_URL = DEFAULT_BASE_URL

try:
    from config import MAX_ATTEMPTS, BACKOFF_SECONDS, REQUEST_TIMEOUT
except ImportError:
    MAX_ATTEMPTS = 3
    BACKOFF_SECONDS = 2.0
    REQUEST_TIMEOUT = 30.0

try:
    from config import LOG_LEVEL, API_LOG_FILE
except ImportError:
    LOG_LEVEL = 'INFO'
    API_LOG_FILE = None

try:
    from config import API_HOST, API_PORT
except ImportError:
    API_HOST = '0.0.0.0'
    API_PORT = 8100


def _env_float(name: str, default: Optional[float], allow_none: bool = False) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    if raw.lower() in ('none', 'null'):
        if allow_none:
            return None
        logger.warning(f"{name} cannot be disabled; using {default!r}")
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid value for {name}: {raw!r}")
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid value for {name}: {raw!r}")
        return default


def load_request_config() -> RequestConfig:
    """Build a RequestConfig from config.py and the environment."""
    return RequestConfig(
        base_url=os.environ.get('OTAKUDESU_BASE_URL') or BASE_URL,
        retry=RetryPolicy(
            max_attempts=_env_int('OTAKUDESU_MAX_ATTEMPTS', MAX_ATTEMPTS),
            backoff_seconds=_env_float('OTAKUDESU_BACKOFF_SECONDS', BACKOFF_SECONDS),
        ),
        timeout=_env_float('OTAKUDESU_REQUEST_TIMEOUT', REQUEST_TIMEOUT, allow_none=True),
    )
