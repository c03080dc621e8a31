"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging outbound messages for demo purposes.
"""

import logging

from src.domain.models import Recipient

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - the full text body (including any
    verification code or reset link) is written to the log.
    """

    def send(self, recipient: Recipient, subject: str, text_body: str, html_body: str) -> None:
        """
        Log the message (simulates email delivery).

        The message is logged at INFO level to be visible in docker-compose logs.
        """
        logger.info(
            "[EMAIL] To: %s <%s> Subject: %s\n%s",
            recipient.name,
            recipient.email,
            subject,
            text_body,
        )
