"""Inbound event boundary.

Validates broker payloads, logs receipt and hands events to the notifier.
Nothing raised below this point reaches the HTTP layer: every outcome is
translated into a status code and a JSON body.
"""

import time

import structlog
from pydantic import ValidationError

from notifier.config import NotifierSettings
from notifier.event.event import ReportViewedEvent, browser_name
from notifier.notification.dispatch import ReportViewedNotifier

logger = structlog.get_logger(__name__)

INVALID_PAYLOAD = "Invalid event payload"


class EventReceiver:
    """Entry point for REPORT_VIEWED callbacks from the broker."""

    def __init__(self, notifier: ReportViewedNotifier, settings: NotifierSettings):
        self.notifier = notifier
        self.settings = settings

    def handle(self, payload) -> tuple[int, dict]:
        """Validate ``payload`` and forward it for delivery.

        Returns ``(status_code, body)``. The acknowledgement does not wait
        for the emails; delivery continues on the event executor.
        """
        if payload is None or not isinstance(payload, dict):
            logger.error("Received invalid REPORT_VIEWED payload", payload_type=type(payload).__name__)
            return 400, {"error": INVALID_PAYLOAD}

        try:
            event = ReportViewedEvent.model_validate(payload)
        except ValidationError as exc:
            logger.error("Rejected malformed REPORT_VIEWED payload", errors=exc.errors(include_url=False))
            return 400, {"error": f"{INVALID_PAYLOAD}: {_summarize(exc)}"}

        logger.info(
            "Received REPORT_VIEWED event",
            event_id=event.event_id,
            event_type=event.event_type,
            timestamp=str(event.timestamp) if event.timestamp else None,
            ip_address=event.ip_address,
            total_complaints=event.total_complaints,
            report_type=event.report_type,
            browser=browser_name(event.user_agent),
        )
        if not event.is_report_viewed:
            logger.warning(
                "Unexpected event type on REPORT_VIEWED callback",
                event_id=event.event_id,
                event_type=event.event_type,
            )

        try:
            self.notifier.submit(event)
        except Exception as exc:
            logger.exception("Error processing REPORT_VIEWED event", event_id=event.event_id)
            return 500, {"error": f"Failed to process event: {exc}"}

        return 200, {"message": "Event processed successfully", "eventId": event.event_id}

    def health(self) -> dict:
        return {
            "status": "UP",
            "service": self.settings.service_name,
            "timestamp": int(time.time() * 1000),
        }

    def status(self) -> dict:
        return {
            "emailEnabled": self.settings.email_enabled,
            "service": self.settings.service_name,
        }


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in err.get("loc", []))
        msg = err.get("msg", str(err))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return " | ".join(parts)
