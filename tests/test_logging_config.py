"""
Tests for Logging Configuration

Tests the sensitive-data redaction applied to every log entry.
"""

from levanta_webhook.logging_config import filter_sensitive_data, redact_dict


class TestRedaction:
    """Tests for redact_dict and the structlog processor."""

    def test_top_level_secret(self):
        result = redact_dict({"webhook_secret": "s3cr3t", "event_id": "evt_1"})

        assert result == {"webhook_secret": "[REDACTED]", "event_id": "evt_1"}

    def test_nested_dict(self):
        result = redact_dict({"data": {"auth": {"user": "x"}, "asin": "B1"}})

        assert result == {"data": {"auth": "[REDACTED]", "asin": "B1"}}

    def test_dicts_inside_lists(self):
        result = redact_dict({
            "data": {"links": [{"id": "lnk_1", "token": "abc"}, "plain"]}
        })

        assert result == {
            "data": {"links": [{"id": "lnk_1", "token": "[REDACTED]"}, "plain"]}
        }

    def test_dicts_inside_tuples(self):
        result = redact_dict({"items": ({"password": "hunter2"},)})

        assert result == {"items": ({"password": "[REDACTED]"},)}

    def test_telegram_url_in_list(self):
        result = redact_dict({"urls": ["https://api.telegram.org/bot123:abc/sendMessage"]})

        assert result == {"urls": ["[REDACTED]"]}

    def test_processor(self):
        event_dict = {"event": "Notification delivered", "signature": "deadbeef"}

        result = filter_sensitive_data(None, "info", event_dict)

        assert result == {"event": "Notification delivered", "signature": "[REDACTED]"}
