"""HTTP helpers for fetching remote release metadata.

Wraps ``requests`` with a fixed timeout, bounded retries with backoff and
DEBUG traces. Callers never see ``requests`` exceptions: failures come back as
a zero status code so offline use degrades quietly.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer

logger = logging.getLogger(__name__)


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout and retries.

    Server errors (5xx) and transport failures are retried up to
    ``Constants.HTTP_RETRY_MAX`` times.

    Returns:
        Tuple of (status_code, headers_dict, body_text); status 0 on failure.
    """
    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 1)))
        with Timer() as t:
            try:
                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=headers,
                    **kwargs
                )
            except requests.Timeout:
                last_exception = "timeout"
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP timeout",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="timeout",
                            attempt=attempt + 1,
                            target=url
                        )
                    )
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request exception",
                        extra=extra_context(
                            event="http_exception",
                            component="http_client",
                            action="GET",
                            outcome="request_exception",
                            attempt=attempt + 1,
                            target=url
                        )
                    )
                continue

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    attempt=attempt + 1,
                    target=url
                )
            )
        if response.status_code >= 500:
            last_exception = f"HTTP {response.status_code}"
            continue
        return response.status_code, dict(response.headers), response.text

    logger.warning("Request to %s failed after %s attempts: %s",
                   url, Constants.HTTP_RETRY_MAX, last_exception)
    return 0, {}, ""


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Optional[Any]]:
    """Perform GET request and parse a JSON response.

    Returns:
        Tuple of (status_code, parsed_json_or_none)
    """
    status_code, _, text = robust_get(url, headers=headers, **kwargs)
    if status_code != 200 or not text:
        return status_code, None
    try:
        return status_code, json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Invalid JSON received from %s", url)
        return status_code, None
