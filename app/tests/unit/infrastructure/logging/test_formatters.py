"""Unit tests for infrastructure.logging.formatters module."""

import pytest

from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)


@pytest.mark.unit
class TestAddAppInfo:
    def test_adds_name_and_version(self):
        processor = add_app_info("event-relay", "abc123")

        result = processor(None, "info", {"event": "incident_dispatched"})

        assert result["app_name"] == "event-relay"
        assert result["app_version"] == "abc123"
        assert result["event"] == "incident_dispatched"

    def test_version_defaults_to_unknown(self):
        result = add_app_info("event-relay")(None, "info", {"event": "x"})

        assert result["app_version"] == "unknown"


@pytest.mark.unit
class TestMaskSensitiveData:
    def test_webhook_urls_are_masked(self):
        processor = mask_sensitive_data()

        result = processor(
            None,
            "info",
            {"event": "slack_webhook_sent", "webhook_url": "https://hooks.slack.com/x"},
        )

        assert result["webhook_url"] == "***REDACTED***"
        assert result["event"] == "slack_webhook_sent"

    def test_matching_is_case_insensitive_substring(self):
        processor = mask_sensitive_data()

        result = processor(
            None, "info", {"NOTIFY_CLIENT_SECRET": "s", "Authorization": "Bearer x"}
        )

        assert result["NOTIFY_CLIENT_SECRET"] == "***REDACTED***"
        assert result["Authorization"] == "***REDACTED***"

    def test_none_values_are_kept(self):
        result = mask_sensitive_data()(None, "info", {"token": None})

        assert result["token"] is None

    def test_additional_patterns(self):
        processor = mask_sensitive_data(
            mask_value="[HIDDEN]", additional_patterns=frozenset({"recipient"})
        )

        result = processor(None, "info", {"recipient": "oncall@example.com"})

        assert result["recipient"] == "[HIDDEN]"

    def test_default_patterns_include_credentials(self):
        assert {"password", "secret", "token", "webhook_url"} <= SENSITIVE_PATTERNS


@pytest.mark.unit
class TestTruncateLargeValues:
    def test_long_strings_are_truncated(self):
        processor = truncate_large_values(max_length=10)

        result = processor(None, "info", {"body": "x" * 25, "short": "ok"})

        assert result["body"].startswith("x" * 10)
        assert "25 chars total" in result["body"]
        assert result["short"] == "ok"

    def test_non_strings_are_untouched(self):
        result = truncate_large_values(max_length=1)(None, "info", {"count": 12345})

        assert result["count"] == 12345
