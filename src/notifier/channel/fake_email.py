"""Fake email adapter — records sent emails for testing and local runs."""

import threading
from uuid import uuid4

from notifier.channel.email_port import EmailPort


class FakeEmailAdapter(EmailPort):
    """Email adapter that records messages in memory for test assertions.

    Safe to call from several sender threads at once.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self.sent_emails: list[dict] = []
        self.attempts: list[str] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
        self.failing_recipients: frozenset[str] = frozenset()
        self.raising_recipients: frozenset[str] = frozenset()

    def configure(
        self,
        should_succeed: bool = True,
        failure_reason: str = "Email delivery failed",
        failing_recipients=(),
        raising_recipients=(),
    ):
        """Configure the fake adapter behavior for testing.

        ``failing_recipients`` get a failed status back; ``raising_recipients``
        make ``send`` raise ``ConnectionError`` as a broken transport would.
        """
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.failing_recipients = frozenset(failing_recipients)
        self.raising_recipients = frozenset(raising_recipients)

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        with self._lock:
            self.attempts.append(to)

        if to in self.raising_recipients:
            raise ConnectionError(f"{self.failure_reason}: {to}")

        if not self.should_succeed or to in self.failing_recipients:
            return {
                "message_id": None,
                "status": "failed",
                "error": self.failure_reason,
            }

        message_id = f"email-{uuid4().hex[:12]}"
        record = {
            "message_id": message_id,
            "to": to,
            "subject": subject,
            "body": body,
            "html_body": html_body,
        }
        with self._lock:
            self.sent_emails.append(record)

        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        """Clear sent emails (useful between tests)."""
        with self._lock:
            self.sent_emails.clear()
            self.attempts.clear()
        self.configure()
