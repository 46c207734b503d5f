"""Broker callback scenarios.

BrokerCallbackUser mimics the broker's steady delivery of REPORT_VIEWED
events. EventFloodUser pushes far more than the event pool can queue, to
exercise the caller-runs overflow path: responses slow down, nothing fails.
"""

from locust import HttpUser, between, constant_pacing, task

from loadtests.data_generators import (
    malformed_event,
    report_viewed_event,
    report_viewed_event_without_timestamp,
)

EVENT_PATH = "/api/notifications/events/report-viewed"


class BrokerCallbackUser(HttpUser):
    """Steady broker traffic with the occasional bad payload."""

    wait_time = between(0.5, 2.0)

    @task(10)
    def deliver_event(self):
        with self.client.post(
            EVENT_PATH,
            json=report_viewed_event(),
            name="POST report-viewed",
            catch_response=True,
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Expected 200, got {resp.status_code}")

    @task(2)
    def deliver_event_without_timestamp(self):
        self.client.post(
            EVENT_PATH,
            json=report_viewed_event_without_timestamp(),
            name="POST report-viewed (no ts)",
        )

    @task(1)
    def deliver_malformed_event(self):
        with self.client.post(
            EVENT_PATH,
            json=malformed_event(),
            name="POST report-viewed (bad)",
            catch_response=True,
        ) as resp:
            if resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Expected 400, got {resp.status_code}")

    @task(1)
    def poll_health(self):
        self.client.get("/api/notifications/health", name="GET health")


class EventFloodUser(HttpUser):
    """Stress test: saturate the event and email executors.

    Target: more in-flight events than event_executor max + queue.
    Watch for "Executor saturated" log lines; the error rate should stay at zero.
    """

    wait_time = constant_pacing(0.05)  # ~20 requests/sec per user

    @task
    def flood(self):
        self.client.post(EVENT_PATH, json=report_viewed_event(), name="[STRESS] POST report-viewed")
