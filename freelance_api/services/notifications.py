"""
Notifications Module - outgoing e-mail
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from freelance_api.core.config import settings

logger = logging.getLogger(__name__)


def send_email(recipient: str, subject: str, body: str) -> bool:
    """
    Send a plain-text e-mail through the configured SMTP server.

    Returns:
        bool: True if the message was handed to the server, False when SMTP is not
        configured or sending failed (the failure is logged)
    """
    if not settings.smtp_configured:
        logger.info("Email sending skipped: no SMTP credentials configured")
        return False

    msg = MIMEMultipart()
    msg["Subject"] = subject
    msg["From"] = settings.EMAIL_FROM or settings.SMTP_USER
    msg["To"] = recipient
    msg.attach(MIMEText(body, "plain", "utf-8"))

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as server:
            server.starttls()
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
            server.send_message(msg)
    except (smtplib.SMTPException, OSError) as exc:
        logger.error("Error sending email to %s: %s", recipient, exc)
        return False

    logger.info("Email '%s' sent to %s", subject, recipient)
    return True


def send_client_account_notification(email: str, name: str, username: str, portal_url: str) -> bool:
    """Tell a client that their portal account exists and where to log in."""
    body = (
        f"Hello {name},\n\n"
        "Your client account has been created. You can now follow your projects, "
        "message us and share documents from your dashboard.\n\n"
        f"Username: {username}\n"
        f"Login URL: {portal_url}\n\n"
        "Use the password you were given to log in.\n"
    )
    return send_email(email, "Your Client Portal Account", body)
