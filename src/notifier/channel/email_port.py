"""Email channel port — abstract interface for email dispatch."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        """Send one email message to one recipient.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)

        Adapters may also raise; callers treat an exception like a failed status.
        """
        ...
