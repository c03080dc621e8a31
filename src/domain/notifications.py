"""
Notification dispatcher - outbound account emails.

Builds the lifecycle messages and hands them to an EmailSender. Delivery
is fire-and-forget: a failing sender is logged and never fails the
operation that triggered it, and nothing is retried here.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from .models import Recipient, User
from .ports import EmailSender

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Message:
    recipient: Recipient
    subject: str
    text_body: str
    html_body: str


def recipient_for(user: User) -> Recipient:
    return Recipient(email=user.email, name=user.full_name)


@dataclass
class NotificationDispatcher:
    """Renders account emails and sends them without propagating failures."""

    email_sender: EmailSender
    app_name: str = "BestWishes"
    reset_url_base: str = "http://localhost:3000/reset-password"

    def dispatch(self, message: Message) -> None:
        try:
            self.email_sender.send(
                message.recipient, message.subject, message.text_body, message.html_body
            )
        except Exception:
            logger.exception(
                "Email delivery failed: to=%s subject=%r", message.recipient.email, message.subject
            )

    def send_verification_code(self, user: User, otp: str) -> None:
        self.dispatch(self.verification_code_message(user, otp))

    def send_account_verified(self, user: User) -> None:
        self.dispatch(self.account_verified_message(user))

    def send_password_reset_link(self, user: User, token: str) -> None:
        self.dispatch(self.password_reset_link_message(user, token))

    def send_password_reset_success(self, user: User) -> None:
        self.dispatch(self.password_reset_success_message(user))

    def verification_code_message(self, user: User, otp: str) -> Message:
        text = (
            f"Hello {user.full_name},\n\n"
            f"Please use the code below to verify your account.\n{otp}"
        )
        html = (
            f"<p>Hello {user.full_name},</p>"
            f"<p>Please use the code below to verify your account.</p>"
            f"<p><strong>{otp}</strong></p>"
        )
        return Message(recipient_for(user), f"Welcome to {self.app_name}", text, html)

    def account_verified_message(self, user: User) -> Message:
        text = f"Your account is now verified. Please login to {self.app_name}."
        return Message(
            recipient_for(user), f"{self.app_name} Account Verified", text, f"<p>{text}</p>"
        )

    def password_reset_link_message(self, user: User, token: str) -> Message:
        link = self.reset_link(user, token)
        text = f"Password reset request\n\n{link}"
        html = f'<p>Password reset request</p><p><a href="{link}">{link}</a></p>'
        return Message(recipient_for(user), f"{self.app_name} Reset Password", text, html)

    def password_reset_success_message(self, user: User) -> Message:
        text = "Password reset successfully, now you can login with your new password."
        return Message(
            recipient_for(user), f"{self.app_name} New Password Success", text, f"<p>{text}</p>"
        )

    def reset_link(self, user: User, token: str) -> str:
        return f"{self.reset_url_base}?{urlencode({'token': token, 'id': user.id})}"
