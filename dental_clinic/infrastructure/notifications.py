import logging
from typing import Dict, Any

from dental_clinic.core.config import settings

logger = logging.getLogger(__name__)


def send_notification(recipient: str, subject: str, body: str, channel: str = "email") -> Dict[str, Any]:
    """Lightweight notification sender used by services.

    Messages are written to the application log; swap this adapter for a
    real provider (SMTP, SMS) when the clinic gets one.
    """
    logger.info(f"Sending {channel} notification to {recipient}: {subject}\n{body}")
    return {"status": "sent", "recipient": recipient, "channel": channel}


def build_password_reset_link(token: str) -> str:
    return f"{settings.FRONTEND_URL.rstrip('/')}/reset-password?token={token}"


def send_password_reset_email(email: str, token: str) -> Dict[str, Any]:
    link = build_password_reset_link(token)
    body = (
        "A password reset was requested for your account.\n"
        f"Open the link below within {settings.PASSWORD_RESET_TOKEN_EXPIRE_MINUTES} minutes:\n"
        f"{link}\n"
        "If you did not request it, ignore this message."
    )
    return send_notification(email, "Password reset", body)
