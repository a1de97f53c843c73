# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import smtplib
from email.message import EmailMessage

from autoservice.application.interfaces import MailTransport
from autoservice.domain.bookings.exceptions import NotificationError
from autoservice.shared.config import MailConfig
from autoservice.shared.logging import logger


class SmtpMailTransport(MailTransport):
    """Deliver plain-text messages over SMTP, one connection per message."""

    def __init__(
        self,
        *,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, sender: str, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as client:
                if self._use_tls:
                    client.starttls()
                if self._username and self._password:
                    client.login(self._username, self._password)
                client.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(type(exc).__name__) from exc
        logger.debug(f"mail: smtp delivered host={self._host} subject={subject!r}")


class LogMailTransport(MailTransport):
    """Fallback used when no SMTP host is configured."""

    def send(self, sender: str, to: str, subject: str, body: str) -> None:
        logger.info(f"mail: not delivered (smtp disabled) to={to} subject={subject!r}")
        logger.debug(f"mail: body={body!r}")


def build_mail_transport(config: MailConfig) -> MailTransport:
    if not config.enabled:
        return LogMailTransport()
    return SmtpMailTransport(
        host=config.smtp_host or "",
        port=config.smtp_port,
        username=config.smtp_user,
        password=config.smtp_password,
        use_tls=config.smtp_use_tls,
        timeout=config.smtp_timeout,
    )
