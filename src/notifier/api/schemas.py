"""Pydantic request/response models for the notifications API.

Wire names are camelCase to match the broker and the original clients.
"""

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------
class EventAcceptedResponse(_CamelModel):
    message: str = "Event processed successfully"
    event_id: str = Field(..., alias="eventId")


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "UP"
    service: str
    timestamp: int = Field(..., description="Epoch milliseconds")


class ServiceStatusResponse(_CamelModel):
    email_enabled: bool = Field(..., alias="emailEnabled")
    service: str
