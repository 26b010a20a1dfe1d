"""
Notification relay: turns a /notify request into one outbound email.
"""

import logging
from abc import ABC, abstractmethod
from email.message import EmailMessage
from email.utils import formatdate

import aiosmtplib

from pocket_app.config import SMTPSettings
from pocket_app.errors import RelayFailure

logger = logging.getLogger(__name__)

SMTPS_PORT = 465


class NotificationRelay(ABC):
    """Delivers a (level, body) notification somewhere outside the server"""

    @abstractmethod
    async def send(self, level: str, body: str) -> None:
        """
        Deliver one notification.

        Raises:
            RelayFailure: if delivery fails
        """


class SMTPNotificationRelay(NotificationRelay):
    """
    Sends notifications through the configured SMTP server.

    The level becomes the subject line and the body the text part. Login
    uses the configured username/password; STARTTLS is negotiated when the
    server offers it, and port 465 connects with implicit TLS.
    """

    def __init__(self, settings: SMTPSettings):
        self.settings = settings

    def build_message(self, level: str, body: str) -> EmailMessage:
        # Header values can't carry line breaks; a multi-line level is
        # folded into the subject and kept verbatim above the body
        subject = " ".join(level.splitlines())
        if subject != level:
            body = f"{level}\n\n{body}"

        message = EmailMessage()
        message["From"] = self.settings.envelope_sender
        message["To"] = ", ".join(self.settings.recipients)
        message["Subject"] = subject
        message["Date"] = formatdate(localtime=True)
        message.set_content(body)
        return message

    async def send(self, level: str, body: str) -> None:
        try:
            message = self.build_message(level, body)
            await aiosmtplib.send(
                message,
                sender=self.settings.envelope_sender,
                recipients=self.settings.recipients,
                hostname=self.settings.server,
                port=self.settings.port,
                username=self.settings.username,
                password=self.settings.password,
                use_tls=self.settings.port == SMTPS_PORT,
                timeout=self.settings.timeout,
            )
        except (aiosmtplib.SMTPException, OSError, ValueError) as e:
            logger.error(
                "Relaying %r notification via %s:%s failed: %s",
                level, self.settings.server, self.settings.port, e,
            )
            raise RelayFailure(str(e)) from e

        logger.info(
            "Relayed %r notification to %d recipient(s)",
            level, len(self.settings.recipients),
        )
