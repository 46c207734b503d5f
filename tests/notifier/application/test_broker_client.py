"""Application tests for the broker subscription client."""

from unittest.mock import MagicMock

import pytest
import requests
from notifier.broker.client import BrokerClient, SubscriptionRequest


def _response(status_code=200, json_body=None, json_error=False):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if json_error:
        response.json.side_effect = requests.JSONDecodeError("Expecting value", "", 0)
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return BrokerClient(
        broker_url="http://broker.test/",
        callback_url="http://notifier.test",
        subscriber_name="notification-service",
        timeout=3.0,
        session=session,
    )


class TestSubscriptionRequest:
    def test_wire_format(self, client):
        body = client.build_subscription().model_dump(by_alias=True)
        assert body == {
            "eventType": "REPORT_VIEWED",
            "callbackUrl": "http://notifier.test/api/notifications/events/report-viewed",
            "subscriberName": "notification-service",
        }

    def test_defaults_to_report_viewed(self):
        request = SubscriptionRequest(callback_url="http://x", subscriber_name="n")
        assert request.event_type == "REPORT_VIEWED"


class TestSubscribe:
    def test_posts_to_subscribe_path(self, client, session):
        session.post.return_value = _response(201, {"subscriptionId": "sub-123"})

        assert client.subscribe() == "sub-123"

        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args[0] == "http://broker.test/api/events/subscribe"
        assert kwargs["json"]["eventType"] == "REPORT_VIEWED"
        assert kwargs["timeout"] == 3.0

    def test_missing_subscription_id_is_unknown(self, client, session):
        session.post.return_value = _response(200, {})
        assert client.subscribe() == "unknown"

    def test_non_json_body_is_unknown(self, client, session):
        session.post.return_value = _response(200, json_error=True)
        assert client.subscribe() == "unknown"

    @pytest.mark.parametrize("status_code", [302, 400, 404, 500, 503])
    def test_non_2xx_returns_none(self, client, session, status_code):
        session.post.return_value = _response(status_code, {"subscriptionId": "ignored"})
        assert client.subscribe() is None

    def test_connection_refused_returns_none(self, client, session):
        session.post.side_effect = requests.ConnectionError("Connection refused")
        assert client.subscribe() is None

    def test_timeout_returns_none(self, client, session):
        session.post.side_effect = requests.Timeout("read timed out")
        assert client.subscribe() is None

    def test_does_not_retry(self, client, session):
        session.post.side_effect = requests.ConnectionError("Connection refused")
        client.subscribe()
        assert session.post.call_count == 1


class TestHealth:
    def test_healthy_broker(self, client, session):
        session.get.return_value = _response(200, {"status": "UP"})
        assert client.check_health() is True
        assert session.get.call_args[0][0] == "http://broker.test/api/events/health"

    def test_unhealthy_status(self, client, session):
        session.get.return_value = _response(503)
        assert client.check_health() is False

    def test_transport_error_is_unhealthy(self, client, session):
        session.get.side_effect = requests.ConnectionError("Connection refused")
        assert client.check_health() is False


class TestFromSettings:
    def test_uses_settings(self, settings_factory, session):
        settings = settings_factory(service_name="relay-a", broker_timeout_seconds=2.5)
        client = BrokerClient.from_settings(settings, session=session)
        assert client.broker_url == "http://broker.test"
        assert client.subscriber_name == "relay-a"
        assert client.timeout == 2.5
        assert client.build_subscription().callback_url.startswith("http://notifier.test/")
