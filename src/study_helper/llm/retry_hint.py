"""
Retry-after extraction from failed upstream responses.

Providers report how long to wait in different places: a standard
Retry-After header, or a google.rpc.RetryInfo entry inside the JSON error
body. This module reads both without ever raising on malformed input.
"""

import json
import re
from typing import Any, Mapping, Optional, Union

import httpx


RETRY_DELAY_PATTERN = re.compile(r"(\d+)(?:\.\d+)?s")
HEADER_SECONDS_PATTERN = re.compile(r"^\s*(\d+)")


def parse_retry_after_header(value: Optional[str]) -> Optional[int]:
    """
    Parse a Retry-After header holding delay-seconds.
    
    Leading digits are used ("30", "30 " and "30.5" all give 30). HTTP-date
    values are not interpreted.
    
    Returns:
        Positive number of seconds, or None
    """
    if not value:
        return None
    match = HEADER_SECONDS_PATTERN.match(value)
    if not match:
        return None
    seconds = int(match.group(1))
    return seconds if seconds > 0 else None


def _iter_error_details(payload: Any) -> list:
    if not isinstance(payload, dict):
        return []
    error = payload.get("error")
    details = error.get("details") if isinstance(error, dict) else None
    if details is None:
        details = payload.get("details")
    return details if isinstance(details, list) else []


def parse_retry_info_body(body: Union[str, bytes, None]) -> Optional[int]:
    """
    Find a RetryInfo retryDelay in a JSON error body.
    
    Looks at error.details (Google RPC style) or a top-level details list for
    an entry whose "@type" contains "RetryInfo" and whose retryDelay looks
    like "42s" or "42.6s". The integer-second part is returned.
    
    Examples:
        >>> parse_retry_info_body('{"error":{"details":[{"@type":"type.googleapis.com/google.rpc.RetryInfo","retryDelay":"42.6s"}]}}')
        42
        >>> parse_retry_info_body("<html>busy</html>") is None
        True
    """
    if not body:
        return None
    try:
        payload = json.loads(body)
    except (ValueError, TypeError):
        return None
    
    for detail in _iter_error_details(payload):
        if not isinstance(detail, dict):
            continue
        if "RetryInfo" not in str(detail.get("@type", "")):
            continue
        delay = detail.get("retryDelay")
        if not delay:
            continue
        match = RETRY_DELAY_PATTERN.search(str(delay))
        if match:
            seconds = int(match.group(1))
            if seconds > 0:
                return seconds
    return None


def extract_retry_after_seconds(
    status_code: int,
    headers: Optional[Mapping[str, str]],
    body: Union[str, bytes, None],
) -> Optional[int]:
    """
    Recommend a wait duration for a failed upstream response.
    
    Priority order:
    1. Retry-After header holding an integer
    2. RetryInfo.retryDelay in the JSON body
    3. None - the caller applies its status-specific default
    
    Args:
        status_code: HTTP status of the failed response
        headers: Response headers (any mapping; lookup is case-insensitive)
        body: Raw response body
        
    Returns:
        Positive number of seconds, or None when no hint is present
    """
    header_value = httpx.Headers(headers or {}).get("retry-after")
    seconds = parse_retry_after_header(header_value)
    if seconds is not None:
        return seconds
    return parse_retry_info_body(body)
