"""Tests for log redaction."""

import json
import logging

from gh_notify.log import _filter_sensitive, get_logger, setup_logging


class TestFilterSensitive:
    def test_bot_token_in_url(self):
        event = {
            "event": "telegram_delivery_failed",
            "error": "ConnectError for url https://api.telegram.org/bot123456:AAH-x_y/sendMessage",
        }
        out = _filter_sensitive(None, "error", event)
        assert "AAH-x_y" not in out["error"]
        assert "bot***REDACTED***/sendMessage" in out["error"]

    def test_token_assignment(self):
        out = _filter_sensitive(None, "info", {"event": "x", "detail": "token=abc123"})
        assert out["detail"] == "token=***REDACTED***"

    def test_non_strings_untouched(self):
        out = _filter_sensitive(None, "info", {"event": "x", "count": 3})
        assert out["count"] == 3


class TestSetupLogging:
    def test_json_output_flattens_tracebacks(self, capsys):
        setup_logging("INFO", json_output=True)
        log = get_logger("gh_notify.tests")
        try:
            raise ValueError("bad payload")
        except ValueError:
            log.exception("event_render_failed", gh_event="push")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "event_render_failed"
        assert record["gh_event"] == "push"
        assert record["level"] == "error"
        assert "ValueError: bad payload" in record["exception"]

    def test_token_never_reaches_output(self, capsys):
        setup_logging("INFO", json_output=True)
        get_logger("gh_notify.tests").error(
            "telegram_delivery_failed",
            error="https://api.telegram.org/bot123456:SECRET-x/sendMessage",
        )
        assert "SECRET-x" not in capsys.readouterr().err

    def test_httpx_held_at_warning(self):
        setup_logging("DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
