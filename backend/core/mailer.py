# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Outbound mail – password-reset links.

Messages go out over SMTP with STARTTLS using the account configured in
etc/app.conf (GMAIL_USER / GMAIL_APP_PASSWORD).  Transport failures are
raised to the caller; nothing is retried.
"""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from urllib.parse import quote, urlencode

from core.config import settings
from core.logger import logger

_RESET_SUBJECT = "Password Reset Request"


def build_reset_link(token: str, role: str) -> str:
    """Link to the SPA reset page, carrying the token and the account role."""
    base = settings.frontend_url.rstrip("/")
    return f"{base}/reset-password/{quote(token)}?{urlencode({'role': role})}"


def send_reset_email(to_email: str, reset_link: str) -> None:
    html = (
        "<p>You requested a password reset. Click this "
        f'<a href="{reset_link}">link</a> to reset your password. '
        f"The link will expire in {settings.reset_token_expire_minutes} minutes.</p>"
    )

    msg = MIMEMultipart()
    msg["From"] = f'"{settings.mail_sender_name}" <{settings.gmail_user}>'
    msg["To"] = to_email
    msg["Subject"] = _RESET_SUBJECT
    msg.attach(MIMEText(html, "html"))

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as server:
        server.starttls()
        server.login(settings.gmail_user, settings.gmail_app_password)
        server.send_message(msg)

    logger.info("Reset email sent | to=%s", to_email)
