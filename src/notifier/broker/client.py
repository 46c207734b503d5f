"""Event broker client — subscription registration and health probe.

Both calls are best-effort: failures are logged and reported through the
return value, never raised. Startup must not depend on the broker being up.
"""

import requests
import structlog
from pydantic import BaseModel, ConfigDict, Field

from notifier.config import NotifierSettings
from notifier.event.event import REPORT_VIEWED

logger = structlog.get_logger(__name__)

SUBSCRIBE_PATH = "/api/events/subscribe"
HEALTH_PATH = "/api/events/health"
CALLBACK_PATH = "/api/notifications/events/report-viewed"


class SubscriptionRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    event_type: str = Field(REPORT_VIEWED, alias="eventType")
    callback_url: str = Field(..., alias="callbackUrl")
    subscriber_name: str = Field(..., alias="subscriberName")


class BrokerClient:
    def __init__(
        self,
        broker_url: str,
        callback_url: str,
        subscriber_name: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.broker_url = broker_url.rstrip("/")
        self.callback_url = callback_url.rstrip("/")
        self.subscriber_name = subscriber_name
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: NotifierSettings, session: requests.Session | None = None) -> "BrokerClient":
        return cls(
            broker_url=settings.broker_url,
            callback_url=settings.callback_url,
            subscriber_name=settings.service_name,
            timeout=settings.broker_timeout_seconds,
            session=session,
        )

    def build_subscription(self) -> SubscriptionRequest:
        return SubscriptionRequest(
            event_type=REPORT_VIEWED,
            callback_url=self.callback_url + CALLBACK_PATH,
            subscriber_name=self.subscriber_name,
        )

    def subscribe(self) -> str | None:
        """Register this service for REPORT_VIEWED events.

        Returns the subscription id on a 2xx response (``"unknown"`` when
        the broker does not send one) and ``None`` on any failure.
        """
        subscribe_url = self.broker_url + SUBSCRIBE_PATH
        subscription = self.build_subscription()
        logger.info(
            "Subscribing to REPORT_VIEWED events",
            broker_url=self.broker_url,
            callback_url=subscription.callback_url,
        )

        try:
            response = self.session.post(
                subscribe_url,
                json=subscription.model_dump(by_alias=True),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "Error subscribing to broker",
                broker_url=self.broker_url,
                error=str(e),
                exc_info=True,
            )
            return None

        if not _is_success(response.status_code):
            logger.warning(
                "Failed to subscribe to broker",
                broker_url=self.broker_url,
                status_code=response.status_code,
            )
            return None

        subscription_id = _subscription_id(response)
        logger.info("Subscribed to broker", subscription_id=subscription_id)
        return subscription_id

    def check_health(self) -> bool:
        """Return True when the broker health endpoint answers 2xx."""
        try:
            response = self.session.get(self.broker_url + HEALTH_PATH, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Broker health check failed", broker_url=self.broker_url, error=str(e))
            return False
        return _is_success(response.status_code)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _subscription_id(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return "unknown"
    if not isinstance(body, dict) or not body.get("subscriptionId"):
        return "unknown"
    return str(body["subscriptionId"])
