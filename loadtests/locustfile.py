"""Notification service load testing — Locust entry point.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:8081

    # Stress test, headless (CI mode):
    locust -f loadtests/locustfile.py EventFloodUser --headless \
           -u 50 -r 5 -t 120s --csv=results/loadtest --host http://localhost:8081

Run the service with NOTIFIER_EMAIL_BACKEND=fake (or against a mail sink)
so the flood does not reach real inboxes.
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.report_viewed import BrokerCallbackUser, EventFloodUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400 and "(bad)" not in name:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker and the target's status when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    try:
        resp = requests.get(f"{environment.host}/api/notifications/status", timeout=5)
        print(f"[LOADTEST] Service status: {resp.json()}")
    except Exception as e:
        print(f"[LOADTEST] Could not fetch service status: {e}")
    print()


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}\n")
