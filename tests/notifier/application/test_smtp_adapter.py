"""Application tests for the aiosmtplib-backed email adapter."""

from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest
from notifier.channel.smtp_email import SmtpEmailAdapter


@pytest.fixture
def adapter():
    return SmtpEmailAdapter(
        host="smtp.example.com",
        port=465,
        from_address="alerts@example.com",
        from_name="Sistema de Quejas Boyacá",
        username="relay",
        password="secret",
        use_tls=True,
        timeout=5.0,
    )


class TestSend:
    def test_success(self, adapter):
        with patch("notifier.channel.smtp_email.aiosmtplib.send", new_callable=AsyncMock) as send:
            send.return_value = ({}, "250 OK queued")
            result = adapter.send("admin@example.com", "Asunto", "texto", "<p>html</p>")

        assert result["status"] == "sent"
        assert result["message_id"].startswith("<")
        message = send.call_args.args[0]
        assert message["To"] == "admin@example.com"
        kwargs = send.call_args.kwargs
        assert kwargs["hostname"] == "smtp.example.com"
        assert kwargs["port"] == 465
        assert kwargs["username"] == "relay"
        assert kwargs["use_tls"] is True
        assert kwargs["timeout"] == 5.0

    def test_smtp_exception_is_failed_status(self, adapter):
        with patch("notifier.channel.smtp_email.aiosmtplib.send", new_callable=AsyncMock) as send:
            send.side_effect = aiosmtplib.SMTPConnectError("Connection refused")
            result = adapter.send("admin@example.com", "Asunto", "texto")

        assert result["status"] == "failed"
        assert "Connection refused" in result["error"]

    def test_refused_recipient_is_failed_status(self, adapter):
        with patch("notifier.channel.smtp_email.aiosmtplib.send", new_callable=AsyncMock) as send:
            send.return_value = ({"admin@example.com": (550, "mailbox unavailable")}, "250 OK")
            result = adapter.send("admin@example.com", "Asunto", "texto")

        assert result["status"] == "failed"
        assert "admin@example.com" in result["error"]

    def test_from_settings(self, settings_factory):
        adapter = SmtpEmailAdapter.from_settings(
            settings_factory(smtp_host="mail.test", smtp_port=2525, email_from="x@test.org")
        )
        assert (adapter.host, adapter.port, adapter.from_address) == ("mail.test", 2525, "x@test.org")
        assert adapter.from_name == "Sistema de Quejas Boyacá"
