"""
Unit tests for utils/request_handler.py
"""
import os
import sys
import pytest
from unittest.mock import MagicMock
import requests

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from utils.request_handler import (
    RequestConfig,
    RequestHandler,
    RetryPolicy,
)
from utils.errors import FetchError, NetworkError, RetriesExhaustedError
from conftest import make_response


def _handler(session, sleep, **config_kwargs):
    config_kwargs.setdefault('base_url', 'https://otakudesu.test/')
    return RequestHandler(config=RequestConfig(**config_kwargs), session=session, sleep=sleep)


class TestRetryPolicy:
    """Test cases for RetryPolicy."""

    def test_default_values(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 3
        assert policy.backoff_seconds == 2.0

    def test_linear_backoff(self):
        policy = RetryPolicy(backoff_seconds=2.0)

        assert policy.delay_for(1) == 2.0
        assert policy.delay_for(2) == 4.0
        assert policy.delay_for(3) == 6.0


class TestRequestConfig:
    """Test cases for RequestConfig class."""

    def test_default_values(self):
        config = RequestConfig()

        assert config.base_url == 'https://otakudesu.best/'
        assert config.retry.max_attempts == 3
        assert config.timeout == 30.0

    def test_base_url_gets_trailing_slash(self):
        config = RequestConfig(base_url='http://localhost:9000')

        assert config.base_url == 'http://localhost:9000/'

    def test_base_url_with_slash_unchanged(self):
        config = RequestConfig(base_url='http://localhost:9000/')

        assert config.base_url == 'http://localhost:9000/'


class TestBuildHeaders:
    """Test cases for the browser headers."""

    def test_browser_headers(self):
        handler = _handler(MagicMock(), lambda s: None)
        headers = handler.build_headers()

        assert 'Mozilla/5.0' in headers['User-Agent']
        assert headers['Accept'].startswith('text/html')
        assert headers['Accept-Language'].startswith('id-ID')
        assert headers['Cache-Control'] == 'no-cache'
        assert headers['Referer'] == 'https://otakudesu.test/'

    def test_headers_sent_with_request(self, fake_sleep):
        session = MagicMock()
        session.get.return_value = make_response(200, '<html></html>')
        handler = _handler(session, fake_sleep, timeout=5)

        handler.fetch_with_retry('https://otakudesu.test/')

        _, kwargs = session.get.call_args
        assert kwargs['headers']['Referer'] == 'https://otakudesu.test/'
        assert kwargs['timeout'] == 5


class TestFetchWithRetry:
    """Test cases for RequestHandler.fetch_with_retry."""

    def test_success_first_attempt(self, fake_sleep, sleep_calls):
        session = MagicMock()
        ok = make_response(200, 'ok')
        session.get.return_value = ok
        handler = _handler(session, fake_sleep)

        result = handler.fetch_with_retry('https://otakudesu.test/')

        assert result is ok
        assert session.get.call_count == 1
        assert sleep_calls == []

    def test_fails_twice_then_succeeds(self, fake_sleep, sleep_calls):
        session = MagicMock()
        ok = make_response(200, 'ok')
        session.get.side_effect = [
            make_response(503),
            requests.ConnectionError('connection reset'),
            ok,
        ]
        handler = _handler(session, fake_sleep)

        result = handler.fetch_with_retry('https://otakudesu.test/')

        assert result is ok
        assert session.get.call_count == 3
        assert sleep_calls == [2.0, 4.0]

    def test_non_2xx_exhausted_raises(self, fake_sleep, sleep_calls):
        session = MagicMock()
        session.get.return_value = make_response(502)
        handler = _handler(session, fake_sleep)

        with pytest.raises(RetriesExhaustedError) as exc_info:
            handler.fetch_with_retry('https://otakudesu.test/anime-list/')

        assert exc_info.value.status_code == 502
        assert exc_info.value.attempts == 3
        assert exc_info.value.url == 'https://otakudesu.test/anime-list/'
        assert '502' in str(exc_info.value)
        assert session.get.call_count == 3
        # No wait after the final attempt
        assert sleep_calls == [2.0, 4.0]

    def test_redirect_status_is_not_success(self, fake_sleep):
        session = MagicMock()
        session.get.return_value = make_response(304)
        handler = _handler(session, fake_sleep)

        with pytest.raises(RetriesExhaustedError):
            handler.fetch_with_retry('https://otakudesu.test/')

    def test_network_error_exhausted_raises(self, fake_sleep, sleep_calls):
        session = MagicMock()
        session.get.side_effect = requests.Timeout('read timed out')
        handler = _handler(session, fake_sleep)

        with pytest.raises(NetworkError) as exc_info:
            handler.fetch_with_retry('https://otakudesu.test/')

        assert 'read timed out' in str(exc_info.value)
        assert isinstance(exc_info.value.cause, requests.Timeout)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert session.get.call_count == 3
        assert sleep_calls == [2.0, 4.0]

    def test_last_failure_decides_error_kind(self, fake_sleep):
        session = MagicMock()
        session.get.side_effect = [
            requests.ConnectionError('boom'),
            requests.ConnectionError('boom'),
            make_response(500),
        ]
        handler = _handler(session, fake_sleep)

        with pytest.raises(RetriesExhaustedError):
            handler.fetch_with_retry('https://otakudesu.test/')

    def test_both_errors_are_fetch_errors(self):
        assert issubclass(NetworkError, FetchError)
        assert issubclass(RetriesExhaustedError, FetchError)

    def test_max_attempts_override(self, fake_sleep, sleep_calls):
        session = MagicMock()
        session.get.return_value = make_response(500)
        handler = _handler(session, fake_sleep)

        with pytest.raises(RetriesExhaustedError):
            handler.fetch_with_retry('https://otakudesu.test/', max_attempts=1)

        assert session.get.call_count == 1
        assert sleep_calls == []

    def test_custom_backoff(self, fake_sleep, sleep_calls):
        session = MagicMock()
        session.get.side_effect = [make_response(500), make_response(500), make_response(200)]
        handler = _handler(session, fake_sleep, retry=RetryPolicy(max_attempts=3, backoff_seconds=0.5))

        handler.fetch_with_retry('https://otakudesu.test/')

        assert sleep_calls == [0.5, 1.0]

    def test_fetch_html_returns_text(self, fake_sleep):
        session = MagicMock()
        session.get.return_value = make_response(200, '<p>hi</p>')
        handler = _handler(session, fake_sleep)

        assert handler.fetch_html('https://otakudesu.test/') == '<p>hi</p>'


class TestSessionLifecycle:

    def test_default_session_is_created(self):
        handler = RequestHandler(config=RequestConfig(base_url='http://localhost:8000'))

        assert handler.config.base_url == 'http://localhost:8000/'
        assert isinstance(handler.session, requests.Session)

    def test_each_handler_gets_its_own_session(self):
        assert RequestHandler().session is not RequestHandler().session

    def test_close_closes_owned_session(self):
        handler = RequestHandler()
        handler.session = MagicMock()

        handler.close()

        handler.session.close.assert_called_once()

    def test_close_leaves_injected_session_open(self, fake_sleep):
        session = MagicMock()
        handler = _handler(session, fake_sleep)

        handler.close()

        session.close.assert_not_called()
