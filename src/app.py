"""Notification relay FastAPI application.

Receives REPORT_VIEWED callbacks from the event broker and emails the
configured administrators. The app factory wires every component from
one immutable settings object.

The lifespan hook creates the two worker pools. It starts the broker
subscription in a background thread so the server never waits on the
broker. On shutdown it drains the event pool first and the email pool
second, so fan-outs in flight can finish their sends.

Usage:
    uvicorn app:create_app --factory --app-dir src --host 0.0.0.0 --port 8081
    python src/server.py --port 8081
"""

import threading
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notifier.api import router as notifications_router
from notifier.broker.client import BrokerClient
from notifier.channel import get_email_channel
from notifier.channel.email_port import EmailPort
from notifier.config import NotifierSettings, get_settings
from notifier.event.receiver import EventReceiver
from notifier.executors import BoundedThreadPoolExecutor
from notifier.notification.dispatch import ReportViewedNotifier

logger = structlog.get_logger(__name__)


def start_subscription(broker: BrokerClient) -> threading.Thread:
    """Fire the one-shot broker subscription without blocking startup."""
    thread = threading.Thread(target=broker.subscribe, name="broker-subscribe", daemon=True)
    thread.start()
    return thread


def create_app(
    settings: NotifierSettings | None = None,
    email_channel: EmailPort | None = None,
    broker: BrokerClient | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    email_channel = email_channel or get_email_channel(settings)
    broker = broker or BrokerClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        event_executor = BoundedThreadPoolExecutor.from_settings("event-processor", settings.event_executor)
        email_executor = BoundedThreadPoolExecutor.from_settings("email-sender", settings.email_executor)
        notifier = ReportViewedNotifier(settings, email_channel, event_executor, email_executor)

        app.state.settings = settings
        app.state.broker = broker
        app.state.event_executor = event_executor
        app.state.email_executor = email_executor
        app.state.notifier = notifier
        app.state.receiver = EventReceiver(notifier, settings)

        if settings.subscribe_on_startup:
            app.state.subscription_thread = start_subscription(broker)
        else:
            logger.info("Broker subscription disabled", broker_url=settings.broker_url)

        logger.info(
            "Notification service started",
            service=settings.service_name,
            email_enabled=settings.email_enabled,
            recipients=len(settings.admin_emails),
        )
        try:
            yield
        finally:
            event_executor.shutdown()
            email_executor.shutdown()
            logger.info("Notification service stopped", service=settings.service_name)

    app = FastAPI(
        title="Notification Service",
        description="REPORT_VIEWED event consumer — email alerts for administrators",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(notifications_router)
    return app
