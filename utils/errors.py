"""
Exceptions raised by the fetch layer.

Both failure kinds share ``FetchError`` so route handlers can catch them in
one place and turn them into an error envelope.
"""

from typing import Optional


class FetchError(Exception):
    """Base class for every failure to obtain a page from upstream."""

    def __init__(self, message: str, url: str = ''):
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """The final attempt raised a transport-level exception."""

    def __init__(self, url: str, cause: Exception, attempts: int):
        super().__init__(str(cause), url)
        self.cause = cause
        self.attempts = attempts


class RetriesExhaustedError(FetchError):
    """Every attempt completed but none returned a 2xx status."""

    def __init__(self, url: str, attempts: int, status_code: Optional[int] = None):
        message = f"Upstream returned HTTP {status_code} for {url} after {attempts} attempt(s)"
        super().__init__(message, url)
        self.attempts = attempts
        self.status_code = status_code
