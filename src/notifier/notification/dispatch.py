"""Report-viewed notifier — renders one alert and fans it out to every admin.

Content is rendered once per event and shared read-only by the send
tasks. Each send runs on the email executor and contains its own
failure: a broken recipient is logged and recorded as a failed outcome,
never raised, so the remaining sends always run. ``notify`` returns only
after every send has finished.
"""

from concurrent.futures import Future, wait
from dataclasses import dataclass

import structlog

from notifier.channel.email_port import EmailPort
from notifier.config import NotifierSettings
from notifier.event.event import REPORT_VIEWED, ReportViewedEvent
from notifier.executors import BoundedThreadPoolExecutor
from notifier.templates import get_template
from notifier.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)

SENT = "sent"
FAILED = "failed"


class NotificationDispatchError(RuntimeError):
    """Raised when an event's notification could not be prepared or dispatched."""

    def __init__(self, event_id: str, message: str):
        super().__init__(message)
        self.event_id = event_id


@dataclass(frozen=True)
class DispatchOutcome:
    recipient: str
    status: str
    message_id: str | None = None
    error: str | None = None

    @property
    def delivered(self) -> bool:
        return self.status == SENT


class ReportViewedNotifier:
    """Sends the REPORT_VIEWED alert to the configured administrators."""

    def __init__(
        self,
        settings: NotifierSettings,
        email_channel: EmailPort,
        event_executor: BoundedThreadPoolExecutor,
        email_executor: BoundedThreadPoolExecutor,
    ):
        self.settings = settings
        self.email_channel = email_channel
        self.event_executor = event_executor
        self.email_executor = email_executor

    @property
    def email_enabled(self) -> bool:
        return self.settings.email_enabled

    @property
    def recipients(self) -> tuple[str, ...]:
        return self.settings.admin_emails

    def submit(self, event: ReportViewedEvent) -> Future:
        """Schedule ``notify`` in the background and return its future.

        Failures surface as ``NotificationDispatchError`` on the future and
        are logged by a done-callback, since nobody awaits the result.
        """
        future = self.event_executor.submit(self.notify, event)
        future.add_done_callback(_log_background_failure)
        return future

    def notify(self, event: ReportViewedEvent) -> list[DispatchOutcome]:
        """Render the alert once and send it to every recipient in parallel."""
        if not self.email_enabled:
            logger.debug("Email notifications disabled, skipping", event_id=event.event_id)
            return []

        if not self.recipients:
            logger.warning("No admin emails configured", event_id=event.event_id)
            return []

        add_context(event_id=event.event_id)
        try:
            logger.info(
                "Processing notification",
                event_type=event.event_type,
                report_type=event.report_type,
                timestamp=str(event.timestamp) if event.timestamp else None,
                total_complaints=event.total_complaints,
                ip_address=event.ip_address,
            )

            template_cls = get_template(REPORT_VIEWED)
            rendered = template_cls.render(event, self.settings.default_report_type)

            outcomes = self._fan_out(rendered["subject"], rendered["body"], rendered["html_body"])

            failed = [o.recipient for o in outcomes if not o.delivered]
            logger.info(
                "Report viewed notification processed",
                recipients=len(outcomes),
                sent=len(outcomes) - len(failed),
                failed=len(failed),
                failed_recipients=failed,
            )
            return outcomes
        except Exception as e:
            logger.error(
                "Failed to send report viewed notification",
                event_id=event.event_id,
                error=str(e),
                exc_info=True,
            )
            raise NotificationDispatchError(event.event_id, "Error sending email notification") from e
        finally:
            clear_context()

    def _fan_out(self, subject: str, body: str, html_body: str) -> list[DispatchOutcome]:
        futures = [
            self.email_executor.submit(self.send_one, recipient, subject, body, html_body)
            for recipient in self.recipients
        ]
        # All-complete barrier: no early abort on the first failure.
        wait(futures)
        return [future.result() for future in futures]

    def send_one(self, recipient: str, subject: str, body: str, html_body: str | None = None) -> DispatchOutcome:
        """Send exactly one email. Never raises."""
        logger.debug("Sending email", recipient=recipient)
        try:
            result = self.email_channel.send(
                to=recipient,
                subject=subject,
                body=body,
                html_body=html_body,
            )
        except Exception as e:
            logger.error("Failed to send email", recipient=recipient, error=str(e), exc_info=True)
            return DispatchOutcome(recipient=recipient, status=FAILED, error=str(e))

        if result.get("status") != SENT:
            error = result.get("error", "Unknown dispatch error")
            logger.error("Email rejected by transport", recipient=recipient, error=error)
            return DispatchOutcome(recipient=recipient, status=FAILED, error=error)

        logger.info("Email sent", recipient=recipient, message_id=result.get("message_id"))
        return DispatchOutcome(recipient=recipient, status=SENT, message_id=result.get("message_id"))


def _log_background_failure(future: Future) -> None:
    exc = future.exception()
    if exc is None:
        return
    logger.error(
        "Background notification failed",
        event_id=getattr(exc, "event_id", None),
        error=str(exc),
        exc_info=exc,
    )
