"""SMTP mailer for the mail handler."""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from patchbay.config.models import MailConfig

logger = logging.getLogger(__name__)


class SmtpMailer:
    """Send plain-text messages through one SMTP connection per send."""

    def __init__(self, config: MailConfig) -> None:
        if not config.host:
            msg = "SmtpMailer requires [mail] host"
            raise ValueError(msg)
        self._config = config

    def send(self, recipients: list[str], subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self._config.sender
        message["To"] = ", ".join(recipients)
        message["Subject"] = subject
        message.set_content(body)

        assert self._config.host is not None
        with smtplib.SMTP(
            self._config.host, self._config.port, timeout=self._config.timeout
        ) as smtp:
            smtp.send_message(message)
        logger.debug("Sent mail to %d recipient(s)", len(recipients))
