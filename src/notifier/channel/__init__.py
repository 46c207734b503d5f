"""Email channel registry.

Provides singleton access to the configured email adapter. The SMTP
adapter is the production default; ``NOTIFIER_EMAIL_BACKEND=fake`` keeps
messages in memory for local runs and tests.
"""

from notifier.channel.email_port import EmailPort
from notifier.config import NotifierSettings

_channel_instances: dict[str, EmailPort] = {}


def get_email_channel(settings: NotifierSettings) -> EmailPort:
    """Return the configured email adapter (singleton per backend)."""
    backend = settings.email_backend
    if backend not in _channel_instances:
        if backend == "smtp":
            from notifier.channel.smtp_email import SmtpEmailAdapter

            _channel_instances[backend] = SmtpEmailAdapter.from_settings(settings)
        elif backend == "fake":
            from notifier.channel.fake_email import FakeEmailAdapter

            _channel_instances[backend] = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email backend: {backend}")

    return _channel_instances[backend]


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
