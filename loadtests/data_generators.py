"""Faker-based data generators for Locust load test scenarios.

Payloads match the broker's REPORT_VIEWED wire format (camelCase keys,
``yyyy-MM-ddTHH:mm:ss`` timestamps) so they pass the receiver's validation.
"""

import random
import uuid

from faker import Faker

fake = Faker()

REPORT_TYPES = [
    "WATER_LEAK",
    "ROAD_DAMAGE",
    "STREET_LIGHTING",
    "NOISE_COMPLAINT",
    "WASTE_COLLECTION",
    "",
    None,
]


def unique_event_id() -> str:
    """Generate unique event IDs like 'EVT-LT-a1b2c3d4'."""
    return f"EVT-LT-{uuid.uuid4().hex[:8]}"


def report_viewed_event() -> dict:
    """A valid REPORT_VIEWED payload with randomized metadata."""
    return {
        "eventId": unique_event_id(),
        "eventType": "REPORT_VIEWED",
        "timestamp": fake.date_time_this_year().strftime("%Y-%m-%dT%H:%M:%S"),
        "totalComplaints": random.randint(0, 5000),
        "reportType": random.choice(REPORT_TYPES),
        "ipAddress": fake.ipv4(),
        "userAgent": fake.user_agent(),
        "source": "loadtest",
    }


def report_viewed_event_without_timestamp() -> dict:
    """Exercise the render-with-current-time path."""
    payload = report_viewed_event()
    del payload["timestamp"]
    return payload


def malformed_event() -> dict:
    """Payloads the receiver must reject with 400."""
    return random.choice(
        [
            {"eventType": "REPORT_VIEWED"},
            {"eventId": unique_event_id(), "totalComplaints": -1},
            {"eventId": unique_event_id(), "timestamp": "not-a-date"},
        ]
    )
