"""FastAPI routes for the notifications API.

Thin adapters over ``EventReceiver``. No business logic: parse the body,
hand it to the receiver, return what it says.
"""

from json import JSONDecodeError

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from notifier.api.schemas import (
    ErrorResponse,
    EventAcceptedResponse,
    HealthResponse,
    ServiceStatusResponse,
)
from notifier.event.receiver import EventReceiver

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

_MALFORMED = object()


def get_receiver(request: Request) -> EventReceiver:
    return request.app.state.receiver


# ---------------------------------------------------------------------------
# Broker callback
# ---------------------------------------------------------------------------
@router.post(
    "/events/report-viewed",
    response_model=EventAcceptedResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def handle_report_viewed(request: Request, receiver: EventReceiver = Depends(get_receiver)):
    """Accept a REPORT_VIEWED event. Delivery continues after the response."""
    try:
        payload = await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        payload = _MALFORMED

    # Off the event loop: a saturated executor runs the task in this thread.
    status_code, body = await run_in_threadpool(receiver.handle, payload)
    return JSONResponse(status_code=status_code, content=body)


# ---------------------------------------------------------------------------
# Health / status
# ---------------------------------------------------------------------------
@router.get("/health", response_model=HealthResponse)
async def health(receiver: EventReceiver = Depends(get_receiver)) -> HealthResponse:
    return HealthResponse(**receiver.health())


@router.get("/status", response_model=ServiceStatusResponse)
async def status(receiver: EventReceiver = Depends(get_receiver)) -> ServiceStatusResponse:
    return ServiceStatusResponse.model_validate(receiver.status())
