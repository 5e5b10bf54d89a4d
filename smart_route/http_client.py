"""HTTP client utilities with retry and connection pooling.

Purpose: One place for timeout and retry policy on the two outbound calls
(appointment lookup and distance lookup).

Pattern: requests.Session with tenacity retry strategy and connection pooling.

- Every request gets a timeout (default 15s)
- Only transient failures are retried: connection errors, timeouts,
  HTTP 429 and 5xx. Auth errors and other 4xx fail immediately.
- max_retries=0 gives a single attempt per call

requests puts the full URL (query string included, so API keys too) into
its exception messages. Never log or return str(exc) for these; use
describe_request_error instead.
"""
import logging

import requests
from requests.adapters import HTTPAdapter
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception
)

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def is_transient_error(exc: BaseException) -> bool:
    """Return True when a failed request is worth another attempt."""
    if isinstance(exc, (requests.exceptions.ConnectionError, requests.exceptions.Timeout)):
        return True
    if isinstance(exc, requests.exceptions.HTTPError):
        response = exc.response
        return response is not None and response.status_code in RETRYABLE_STATUS_CODES
    return False


def response_status_code(exc: BaseException):
    """HTTP status code carried by a requests exception, if any."""
    response = getattr(exc, "response", None)
    return getattr(response, "status_code", None)


def describe_request_error(exc: BaseException) -> str:
    """
    Describe a failed request without the request URL.

    Args:
        exc: Exception raised by requests

    Returns:
        "HTTP 503" when a response was received, otherwise the exception
        class name (e.g. "ConnectionError", "ReadTimeout")
    """
    status_code = response_status_code(exc)
    if status_code is not None:
        return f"HTTP {status_code}"
    return type(exc).__name__


def log_before_retry(retry_state):
    """tenacity before_sleep hook; logs the failure without its message."""
    exc = retry_state.outcome.exception()
    logger.warning(
        "Retrying outbound request in %.1fs after attempt %d: %s",
        retry_state.next_action.sleep if retry_state.next_action else 0.0,
        retry_state.attempt_number,
        describe_request_error(exc)
    )


def create_http_session(
    max_retries: int = 2,
    timeout: float = 15,
    backoff_multiplier: float = 1.0,
    backoff_max: float = 8.0
) -> requests.Session:
    """
    Create HTTP session with retry and connection pooling.

    Args:
        max_retries: Retry attempts after the first call (default: 2)
        timeout: Request timeout in seconds (default: 15)
        backoff_multiplier: Exponential backoff multiplier; delays 1s, 2s, 4s...
        backoff_max: Upper bound for a single backoff delay (seconds)

    Returns:
        requests.Session whose ``get`` raises for non-2xx and retries transient failures
    """
    session = requests.Session()

    adapter = HTTPAdapter(pool_connections=10, pool_maxsize=10)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    original_get = session.get

    @retry(
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=backoff_multiplier, max=backoff_max),
        retry=retry_if_exception(is_transient_error),
        before_sleep=log_before_retry,
        reraise=True
    )
    def get_with_retry(*args, **kwargs):
        kwargs.setdefault("timeout", timeout)
        response = original_get(*args, **kwargs)
        response.raise_for_status()
        return response

    session.get = get_with_retry

    return session
