from datetime import datetime

import pytest
from notifier.channel.fake_email import FakeEmailAdapter
from notifier.config import NotifierSettings
from notifier.event.event import ReportViewedEvent
from notifier.executors import BoundedThreadPoolExecutor
from notifier.notification.dispatch import ReportViewedNotifier

ADMINS = ("admin1@example.com", "admin2@example.com", "admin3@example.com")


def make_settings(**overrides) -> NotifierSettings:
    defaults = {
        "_env_file": None,
        "broker_url": "http://broker.test",
        "callback_url": "http://notifier.test",
        "admin_emails": ADMINS,
        "email_backend": "fake",
        "email_from": "alerts@example.com",
        "subscribe_on_startup": False,
    }
    defaults.update(overrides)
    return NotifierSettings(**defaults)


def make_event(**overrides) -> ReportViewedEvent:
    payload = {
        "eventId": "evt-001",
        "eventType": "REPORT_VIEWED",
        "timestamp": "2025-03-14T09:26:53",
        "totalComplaints": 42,
        "reportType": "WATER_LEAK",
        "ipAddress": "10.0.0.7",
        "userAgent": "Mozilla/5.0 (X11; Linux x86_64; rv:124.0) Gecko/20100101 Firefox/124.0",
        "source": "complaints-api",
    }
    payload.update(overrides)
    return ReportViewedEvent.model_validate(payload)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_email():
    return FakeEmailAdapter()


@pytest.fixture
def executors():
    event_executor = BoundedThreadPoolExecutor(
        name="test-events",
        core_pool_size=2,
        max_pool_size=4,
        queue_capacity=10,
        thread_name_prefix="test-event-",
        await_termination_seconds=5,
    )
    email_executor = BoundedThreadPoolExecutor(
        name="test-email",
        core_pool_size=2,
        max_pool_size=4,
        queue_capacity=10,
        thread_name_prefix="test-email-",
        await_termination_seconds=5,
    )
    yield event_executor, email_executor
    event_executor.shutdown()
    email_executor.shutdown()


@pytest.fixture
def notifier_factory(fake_email, executors):
    event_executor, email_executor = executors

    def _build(**overrides) -> ReportViewedNotifier:
        return ReportViewedNotifier(make_settings(**overrides), fake_email, event_executor, email_executor)

    return _build


@pytest.fixture
def notifier(notifier_factory):
    return notifier_factory()


@pytest.fixture
def fixed_now():
    return datetime(2025, 6, 1, 8, 5, 9)


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def event_factory():
    return make_event
