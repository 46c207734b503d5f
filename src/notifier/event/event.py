"""REPORT_VIEWED event as delivered by the broker.

The broker speaks camelCase JSON; the model accepts either the wire name
or the attribute name and is immutable once parsed.
"""

from datetime import datetime

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = structlog.get_logger(__name__)

REPORT_VIEWED = "REPORT_VIEWED"


class ReportViewedEvent(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    event_id: str = Field(..., alias="eventId", min_length=1)
    event_type: str | None = Field(None, alias="eventType")
    timestamp: datetime | None = Field(None, examples=["2025-03-14T09:26:53"])
    total_complaints: int = Field(0, alias="totalComplaints", ge=0)
    report_type: str | None = Field(None, alias="reportType")
    ip_address: str | None = Field(None, alias="ipAddress")
    user_agent: str | None = Field(None, alias="userAgent")
    source: str | None = None

    @property
    def is_report_viewed(self) -> bool:
        return self.event_type == REPORT_VIEWED

    @field_validator("total_complaints", mode="before")
    @classmethod
    def null_count_is_zero(cls, value):
        return 0 if value is None else value


def normalize_report_type(value, default: str) -> str:
    """Turn a raw report type like ``" WATER_LEAK "`` into ``"WATER LEAK"``.

    Blank or missing values, and anything that cannot be normalized,
    fall back to ``default``.
    """
    if value is None:
        return default
    try:
        trimmed = value.strip()
        if not trimmed:
            return default
        return trimmed.replace("_", " ")
    except Exception as exc:
        logger.warning(
            "Error processing report type, using default",
            report_type=repr(value),
            default=default,
            error=str(exc),
        )
        return default


def browser_name(user_agent: str | None) -> str:
    """Best-effort browser family from a User-Agent header."""
    if user_agent is None:
        return "Unknown"

    # Edge and Chrome both advertise Safari; Edge also advertises Chrome.
    if "Edg" in user_agent:
        return "Edge"
    if "Firefox" in user_agent:
        return "Firefox"
    if "Chrome" in user_agent:
        return "Chrome"
    if "Safari" in user_agent:
        return "Safari"
    return "Other"
