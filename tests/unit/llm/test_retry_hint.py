"""Unit tests for retry-after extraction."""

import json

import pytest

from study_helper.llm.retry_hint import (
    extract_retry_after_seconds,
    parse_retry_after_header,
    parse_retry_info_body,
)


def retry_info_body(delay: str, nested: bool = True) -> str:
    details = [
        {"@type": "type.googleapis.com/google.rpc.QuotaFailure", "violations": []},
        {"@type": "type.googleapis.com/google.rpc.RetryInfo", "retryDelay": delay},
    ]
    if nested:
        return json.dumps({"error": {"code": 429, "status": "RESOURCE_EXHAUSTED", "details": details}})
    return json.dumps({"details": details})


class TestParseRetryAfterHeader:
    
    @pytest.mark.parametrize("value,expected", [("30", 30), (" 30 ", 30), ("30.5", 30), ("120", 120)])
    def test_integer_values(self, value, expected):
        assert parse_retry_after_header(value) == expected
    
    @pytest.mark.parametrize("value", [None, "", "soon", "Wed, 21 Oct 2015 07:28:00 GMT", "0"])
    def test_no_usable_value(self, value):
        assert parse_retry_after_header(value) is None


class TestParseRetryInfoBody:
    
    def test_fractional_delay_uses_integer_part(self):
        assert parse_retry_info_body(retry_info_body("42.6s")) == 42
    
    def test_whole_delay(self):
        assert parse_retry_info_body(retry_info_body("42s")) == 42
    
    def test_top_level_details_list(self):
        assert parse_retry_info_body(retry_info_body("7s", nested=False)) == 7
    
    def test_bytes_body(self):
        assert parse_retry_info_body(retry_info_body("9s").encode()) == 9
    
    @pytest.mark.parametrize(
        "body",
        [
            None,
            "",
            "<html>Service Unavailable</html>",
            "{not json",
            "[]",
            '{"error": "quota exceeded"}',
            '{"error": {"details": "not-a-list"}}',
            '{"error": {"details": [{"@type": "google.rpc.ErrorInfo", "reason": "RATE_LIMIT_EXCEEDED"}]}}',
            '{"error": {"details": [{"@type": "google.rpc.RetryInfo", "retryDelay": "later"}]}}',
            '{"error": {"details": [{"@type": "google.rpc.RetryInfo"}]}}',
        ],
    )
    def test_malformed_or_missing_is_no_hint(self, body):
        assert parse_retry_info_body(body) is None


class TestExtractRetryAfterSeconds:
    
    def test_header_takes_precedence_over_body(self):
        assert extract_retry_after_seconds(429, {"Retry-After": "30"}, retry_info_body("42.6s")) == 30
    
    def test_header_lookup_is_case_insensitive(self):
        assert extract_retry_after_seconds(429, {"retry-after": "12"}, None) == 12
    
    def test_falls_back_to_body(self):
        assert extract_retry_after_seconds(503, {"Content-Type": "application/json"}, retry_info_body("42.6s")) == 42
    
    def test_unusable_header_falls_back_to_body(self):
        assert extract_retry_after_seconds(429, {"Retry-After": "soon"}, retry_info_body("5s")) == 5
    
    def test_no_hint(self):
        assert extract_retry_after_seconds(429, None, "rate limited") is None
