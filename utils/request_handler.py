"""
Request Handler for the Otakudesu API

This module provides the HTTP fetch layer used by every scrape:
- Direct requests with browser-like headers
- Linear-backoff retry driven by an explicit RetryPolicy
- Explicit failures (NetworkError / RetriesExhaustedError) once retries run out

Usage:
    from utils.request_handler import RequestHandler, RequestConfig

    handler = RequestHandler(config=RequestConfig(base_url='https://otakudesu.best/'))
    response = handler.fetch_with_retry(url)
    html = response.text
"""

import requests
import time
import logging
from typing import Callable, Dict, Optional
from dataclasses import dataclass, field

from utils.errors import NetworkError, RetriesExhaustedError

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = 'https://otakudesu.best/'


@dataclass
class RetryPolicy:
    """How many times to try a request and how long to wait in between."""
    max_attempts: int = 3
    backoff_seconds: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Delay before the attempt that follows *attempt* (1-based)."""
        return self.backoff_seconds * attempt


@dataclass
class RequestConfig:
    """Configuration for request handler"""
    base_url: str = DEFAULT_BASE_URL
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    timeout: Optional[float] = 30.0
    user_agent: str = (
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    )
    accept_language: str = 'id-ID,id;q=0.9,en-US;q=0.8,en;q=0.7'

    def __post_init__(self):
        if not self.base_url.endswith('/'):
            self.base_url = self.base_url + '/'


class RequestHandler:
    """
    HTTP request handler with browser headers and linear-backoff retry.

    Features:
    - Browser-like headers so the upstream site serves the normal HTML
    - Configurable retry policy with an injectable sleep function
    - A ``requests.Session`` reused across the retries of one scrape

    A handler is meant to live for a single client request: its session
    keeps whatever cookies upstream sets, so it must not be shared.
    """

    def __init__(self, config: Optional[RequestConfig] = None,
                 session: Optional[requests.Session] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize request handler.

        Args:
            config: RequestConfig instance with configuration settings
            session: requests.Session to send requests through
            sleep: function used for the backoff delay (tests pass a stub)
        """
        self.config = config or RequestConfig()
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.sleep = sleep

    def build_headers(self) -> Dict[str, str]:
        """Headers emulating a desktop browser visiting the site."""
        return {
            'User-Agent': self.config.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
            'Accept-Language': self.config.accept_language,
            'Cache-Control': 'no-cache',
            'Referer': self.config.base_url,
        }

    def fetch_with_retry(self, url: str, max_attempts: Optional[int] = None) -> requests.Response:
        """
        GET *url*, retrying on non-2xx responses and transport errors.

        Args:
            url: URL to fetch
            max_attempts: overrides ``config.retry.max_attempts`` for this call

        Returns:
            The first response with a 2xx status.

        Raises:
            NetworkError: the final attempt raised ``requests.RequestException``
            RetriesExhaustedError: every attempt returned a non-2xx status
        """
        policy = self.config.retry
        attempts = max_attempts if max_attempts is not None else policy.max_attempts
        attempts = max(1, attempts)
        headers = self.build_headers()
        last_status = None

        for attempt in range(1, attempts + 1):
            logger.info(f"Attempt {attempt}/{attempts} for {url}")
            try:
                response = self.session.get(url, headers=headers, timeout=self.config.timeout)
            except requests.RequestException as e:
                logger.warning(f"Attempt {attempt}/{attempts} for {url} failed: {e}")
                if attempt == attempts:
                    raise NetworkError(url, e, attempts) from e
            else:
                if 200 <= response.status_code < 300:
                    logger.debug(f"Fetched {url}: HTTP {response.status_code}, {len(response.content)} bytes")
                    return response
                last_status = response.status_code
                logger.warning(f"Attempt {attempt}/{attempts} for {url} returned HTTP {response.status_code}")
                if attempt == attempts:
                    break

            delay = policy.delay_for(attempt)
            logger.debug(f"Waiting {delay}s before retrying {url}")
            self.sleep(delay)

        logger.error(f"Giving up on {url} after {attempts} attempt(s)")
        raise RetriesExhaustedError(url, attempts, last_status)

    def fetch_html(self, url: str) -> str:
        """Fetch *url* and return the decoded body."""
        return self.fetch_with_retry(url).text

    def close(self):
        """Close the session if this handler created it."""
        if self._owns_session:
            self.session.close()
