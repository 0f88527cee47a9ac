"""Mail handler: notify recipients after a successful operation."""

from __future__ import annotations

import json
from typing import Any, Protocol

from patchbay.handlers.audit import describe


class Mailer(Protocol):
    """Side-effect boundary for sending mail."""

    def send(self, recipients: list[str], subject: str, body: str) -> None: ...


def render_body(value: Any) -> str:
    return json.dumps(describe(value), indent=2, sort_keys=True, default=str)


class MailNotificationHandler:
    """Send one message per value to a fixed recipient list."""

    name = "mail"

    def __init__(self, mailer: Mailer, recipients: list[str], *, subject: str) -> None:
        if not recipients:
            msg = "Mail handler needs at least one recipient"
            raise ValueError(msg)
        self._mailer = mailer
        self._recipients = list(recipients)
        self._subject = subject

    def __call__(self, value: Any) -> None:
        self._mailer.send(self._recipients, self._subject, render_body(value))
