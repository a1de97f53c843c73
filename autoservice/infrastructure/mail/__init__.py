# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .notifier import EmailNotificationAdapter, render_confirmation
from .transports import LogMailTransport, SmtpMailTransport, build_mail_transport

__all__ = [
    "EmailNotificationAdapter",
    "LogMailTransport",
    "SmtpMailTransport",
    "build_mail_transport",
    "render_confirmation",
]
