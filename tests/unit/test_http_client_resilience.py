"""Tests for HTTP client resilience features."""
import logging

import pytest
import requests
from unittest.mock import Mock, patch

from smart_route.http_client import create_http_session, describe_request_error, is_transient_error


def http_error(status_code):
    response = Mock()
    response.status_code = status_code
    return requests.exceptions.HTTPError(f"{status_code} Error", response=response)


def fast_session(max_retries=3, timeout=15):
    """Session without backoff delays."""
    return create_http_session(max_retries=max_retries, timeout=timeout, backoff_multiplier=0)


class TestTenacityRetries:
    """Retry behavior."""

    def test_retries_on_connection_error(self):
        """Should make 1 initial attempt + max_retries retries."""
        with patch('requests.Session.request') as mock_request:
            mock_request.side_effect = requests.exceptions.ConnectionError("Connection failed")

            session = fast_session(max_retries=3)

            with pytest.raises(requests.exceptions.ConnectionError):
                session.get("http://test.com/api")

            assert mock_request.call_count == 4

    def test_retries_on_timeout(self):
        with patch('requests.Session.request') as mock_request:
            mock_request.side_effect = requests.exceptions.Timeout("Request timeout")

            session = fast_session(max_retries=2)

            with pytest.raises(requests.exceptions.Timeout):
                session.get("http://test.com/api")

            assert mock_request.call_count == 3

    def test_retries_on_503_service_unavailable(self):
        with patch('requests.Session.request') as mock_request:
            mock_response = Mock()
            mock_response.status_code = 503
            mock_response.raise_for_status.side_effect = http_error(503)
            mock_request.return_value = mock_response

            session = fast_session(max_retries=3)

            with pytest.raises(requests.exceptions.HTTPError):
                session.get("http://test.com/api")

            assert mock_request.call_count == 4

    def test_does_not_retry_on_401(self):
        """Auth failures are not transient."""
        with patch('requests.Session.request') as mock_request:
            mock_response = Mock()
            mock_response.status_code = 401
            mock_response.raise_for_status.side_effect = http_error(401)
            mock_request.return_value = mock_response

            session = fast_session(max_retries=3)

            with pytest.raises(requests.exceptions.HTTPError):
                session.get("http://test.com/api")

            assert mock_request.call_count == 1

    def test_zero_retries_makes_single_attempt(self):
        with patch('requests.Session.request') as mock_request:
            mock_request.side_effect = requests.exceptions.ConnectionError("Failed")

            session = fast_session(max_retries=0)

            with pytest.raises(requests.exceptions.ConnectionError):
                session.get("http://test.com/api")

            assert mock_request.call_count == 1

    def test_success_on_second_attempt(self):
        with patch('requests.Session.request') as mock_request:
            mock_response = Mock()
            mock_response.status_code = 200
            mock_response.json.return_value = {"status": "OK"}
            mock_response.raise_for_status.return_value = None

            mock_request.side_effect = [
                requests.exceptions.ConnectionError("Failed"),
                mock_response
            ]

            session = fast_session()

            response = session.get("http://test.com/api")

            assert response.status_code == 200
            assert mock_request.call_count == 2


class TestTimeout:
    """Default timeout is applied."""

    def test_default_timeout_is_set(self):
        with patch('requests.Session.request') as mock_request:
            mock_response = Mock()
            mock_response.raise_for_status.return_value = None
            mock_request.return_value = mock_response

            session = fast_session(timeout=7)
            session.get("http://test.com/api")

            assert mock_request.call_args.kwargs["timeout"] == 7

    def test_explicit_timeout_wins(self):
        with patch('requests.Session.request') as mock_request:
            mock_response = Mock()
            mock_response.raise_for_status.return_value = None
            mock_request.return_value = mock_response

            session = fast_session(timeout=7)
            session.get("http://test.com/api", timeout=2)

            assert mock_request.call_args.kwargs["timeout"] == 2


class TestIsTransientError:

    @pytest.mark.parametrize("exc,expected", [
        (requests.exceptions.ConnectionError(), True),
        (requests.exceptions.Timeout(), True),
        (http_error(429), True),
        (http_error(502), True),
        (http_error(400), False),
        (http_error(403), False),
        (requests.exceptions.HTTPError("no response"), False),
        (ValueError("bad json"), False),
    ])
    def test_classification(self, exc, expected):
        assert is_transient_error(exc) is expected


KEYED_URL = "https://maps.googleapis.com/maps/api/distancematrix/json?origins=A&key=SECRET-KEY"


class TestDescribeRequestError:
    """Failure descriptions leave out the request URL."""

    def test_http_error_uses_status_code(self):
        exc = requests.exceptions.HTTPError(
            f"500 Server Error: Internal Server Error for url: {KEYED_URL}",
            response=Mock(status_code=500)
        )
        assert describe_request_error(exc) == "HTTP 500"

    def test_connection_error_uses_class_name(self):
        exc = requests.exceptions.ConnectionError(f"Max retries exceeded with url: {KEYED_URL}")
        assert describe_request_error(exc) == "ConnectionError"

    def test_read_timeout_uses_class_name(self):
        exc = requests.exceptions.ReadTimeout(f"Read timed out. url: {KEYED_URL}")
        assert describe_request_error(exc) == "ReadTimeout"

    def test_retry_warning_omits_url(self, caplog):
        caplog.set_level(logging.WARNING, logger="smart_route.http_client")

        with patch('requests.Session.request') as mock_request:
            mock_request.side_effect = requests.exceptions.ConnectionError(
                f"Max retries exceeded with url: {KEYED_URL}"
            )
            session = fast_session(max_retries=1)

            with pytest.raises(requests.exceptions.ConnectionError):
                session.get(KEYED_URL)

        assert "Retrying outbound request" in caplog.text
        assert "ConnectionError" in caplog.text
        assert "SECRET-KEY" not in caplog.text
