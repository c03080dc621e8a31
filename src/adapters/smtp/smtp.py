"""
SMTP email sender adapter - Implements EmailSender protocol.

Sends multipart (text + HTML) messages through an SMTP relay using the
standard library client. Errors propagate; the NotificationDispatcher
decides what a failed delivery means for the caller.
"""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

from src.domain.models import Recipient

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """Implements EmailSender protocol via smtplib."""

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def build_message(
        self, recipient: Recipient, subject: str, text_body: str, html_body: str
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = formataddr((recipient.name, recipient.email))
        message["Subject"] = subject
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    def send(self, recipient: Recipient, subject: str, text_body: str, html_body: str) -> None:
        message = self.build_message(recipient, subject, text_body, html_body)
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as client:
            if self._use_tls:
                client.starttls()
            if self._username:
                client.login(self._username, self._password or "")
            client.send_message(message)
        logger.info("Email sent: to=%s subject=%r", recipient.email, subject)
