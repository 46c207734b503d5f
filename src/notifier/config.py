"""Runtime configuration for the notification relay.

Settings are read once from the environment (``NOTIFIER_`` prefix) or a
local ``.env`` file and frozen. Components receive the settings object
explicitly; nothing reads the environment after startup.

Examples::

    NOTIFIER_BROKER_URL=http://broker:8080
    NOTIFIER_CALLBACK_URL=http://notifier:8081
    NOTIFIER_ADMIN_EMAILS=ops@example.com,audit@example.com
    NOTIFIER_EMAIL_EXECUTOR__MAX_POOL_SIZE=20
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class ExecutorSettings(BaseModel):
    """Sizing for one bounded worker pool."""

    model_config = ConfigDict(frozen=True)

    core_pool_size: int = Field(default=1, ge=1)
    max_pool_size: int = Field(default=1, ge=1)
    queue_capacity: int = Field(default=0, ge=0)
    thread_name_prefix: str = "worker-"
    await_termination_seconds: float = Field(default=60, ge=0)


class EventExecutorSettings(ExecutorSettings):
    """Orchestration pool: one task per inbound event."""

    core_pool_size: int = Field(default=5, ge=1)
    max_pool_size: int = Field(default=15, ge=1)
    queue_capacity: int = Field(default=100, ge=0)
    thread_name_prefix: str = "event-proc-"
    await_termination_seconds: float = Field(default=60, ge=0)


class EmailExecutorSettings(ExecutorSettings):
    """Send pool: one task per recipient, sized for the SMTP relay."""

    core_pool_size: int = Field(default=3, ge=1)
    max_pool_size: int = Field(default=10, ge=1)
    queue_capacity: int = Field(default=200, ge=0)
    thread_name_prefix: str = "email-sender-"
    await_termination_seconds: float = Field(default=120, ge=0)


class NotifierSettings(BaseSettings):
    """Typed, immutable settings container."""

    model_config = SettingsConfigDict(
        env_prefix="NOTIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    # Broker
    broker_url: str = "http://localhost:8080"
    callback_url: str = "http://localhost:8081"
    service_name: str = "notification-service"
    subscribe_on_startup: bool = True
    broker_timeout_seconds: float = 10.0

    # Email
    email_enabled: bool = True
    admin_emails: Annotated[tuple[str, ...], NoDecode] = ()
    email_from: str = "noreply@localhost"
    email_from_name: str = "Sistema de Quejas Boyacá"
    email_backend: Literal["smtp", "fake"] = "smtp"
    default_report_type: str = "GENERAL REPORT"

    # SMTP transport
    smtp_host: str = "localhost"
    smtp_port: int = 587
    smtp_username: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = False
    smtp_start_tls: bool | None = None
    smtp_timeout_seconds: float = 30.0

    # Worker pools
    event_executor: EventExecutorSettings = Field(default_factory=EventExecutorSettings)
    email_executor: EmailExecutorSettings = Field(default_factory=EmailExecutorSettings)

    @field_validator("admin_emails", mode="before")
    @classmethod
    def _split_admin_emails(cls, value):
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        return tuple(email.strip() for email in value if email and email.strip())

    @field_validator("broker_url", "callback_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def get_settings(**overrides) -> NotifierSettings:
    """Build settings from the environment, with keyword overrides on top."""
    return NotifierSettings(**overrides)
