"""Plain-auth SMTP submission of alert reports."""

from __future__ import annotations

import logging
import smtplib
from typing import Callable, Optional

from models.schemas import SMTPConfig

logger = logging.getLogger(__name__)

ALERT_SUBJECT = "System Alert: Resource Usage Exceeded"


class NotificationError(RuntimeError):
    """The alert email could not be delivered."""


def build_message(subject: str, body: str) -> str:
    return f"Subject: {subject}\n\n{body}"


class EmailNotifier:
    """Sends one message per call through the configured SMTP server."""

    def __init__(
        self,
        config: SMTPConfig,
        timeout: Optional[float] = 30.0,
        smtp_factory: Callable[..., smtplib.SMTP] = smtplib.SMTP,
    ) -> None:
        self.config = config
        self.timeout = timeout
        self._smtp_factory = smtp_factory

    def send(self, subject: str, body: str) -> None:
        config = self.config
        message = build_message(subject, body)
        try:
            with self._smtp_factory(config.smtp_host, config.port_number, timeout=self.timeout) as client:
                client.ehlo()
                if client.has_extn("starttls"):
                    client.starttls()
                    client.ehlo()
                client.login(config.from_email, config.email_password)
                client.sendmail(config.from_email, [config.to_email], message.encode("utf-8"))
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Error sending email", extra={"smtp_host": config.smtp_host, "reason": str(exc)})
            raise NotificationError(f"error sending email via {config.smtp_host}:{config.smtp_port}: {exc}") from exc

        logger.info("Alert email sent", extra={"smtp_host": config.smtp_host})
