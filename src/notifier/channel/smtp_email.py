"""SMTP email adapter backed by aiosmtplib.

Each ``send`` opens its own SMTP session, so one adapter instance can be
shared by every sender thread. The coroutine runs on a private event
loop in the calling worker thread.
"""

import asyncio
import uuid
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate

import aiosmtplib
import structlog

from notifier.channel.email_port import EmailPort
from notifier.config import NotifierSettings

logger = structlog.get_logger(__name__)


class SmtpEmailAdapter(EmailPort):
    """Sends multipart (text + HTML) messages through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        from_address: str,
        from_name: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = False,
        start_tls: bool | None = None,
        timeout: float = 30.0,
    ):
        self.host = host
        self.port = port
        self.from_address = from_address
        self.from_name = from_name
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.start_tls = start_tls
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: NotifierSettings) -> "SmtpEmailAdapter":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            from_address=settings.email_from,
            from_name=settings.email_from_name,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            start_tls=settings.smtp_start_tls,
            timeout=settings.smtp_timeout_seconds,
        )

    def build_message(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.from_address))
        msg["To"] = to
        msg["Date"] = formatdate(localtime=True)
        domain = self.from_address.rpartition("@")[2] or "localhost"
        msg["Message-ID"] = f"<{uuid.uuid4()}@{domain}>"

        msg.attach(MIMEText(body, "plain", "utf-8"))
        if html_body:
            msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        msg = self.build_message(to, subject, body, html_body)
        return asyncio.run(self._send_async(msg))

    async def _send_async(self, msg: MIMEMultipart) -> dict:
        try:
            errors, response = await aiosmtplib.send(
                msg,
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                use_tls=self.use_tls,
                start_tls=self.start_tls,
                timeout=self.timeout,
            )
        except aiosmtplib.SMTPException as e:
            logger.warning(
                "SMTP delivery failed",
                to=msg["To"],
                smtp_host=self.host,
                error=str(e),
            )
            return {"message_id": None, "status": "failed", "error": str(e)}

        if errors:
            return {
                "message_id": None,
                "status": "failed",
                "error": "; ".join(f"{addr}: {resp}" for addr, resp in errors.items()),
            }

        logger.debug("SMTP relay accepted message", to=msg["To"], response=response)
        return {"message_id": msg["Message-ID"], "status": "sent"}
