"""Built-in post-operation handlers and the factory registry that builds them.

``[pipeline] handlers`` in ``patchbay.toml`` lists handler names; each name
is resolved through :data:`HANDLER_FACTORIES`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from patchbay.dispatch.registry import StrategyRegistry
from patchbay.handlers.audit import AuditLogHandler
from patchbay.handlers.cache import Cache, CacheUpdateHandler
from patchbay.handlers.mail import Mailer, MailNotificationHandler


@dataclass(frozen=True)
class HandlerContext:
    """Collaborators available to handler factories."""

    cache: Cache
    mailer: Mailer | None = None
    recipients: list[str] = field(default_factory=list)
    subject: str = "patchbay notification"


def _build_mail(ctx: HandlerContext) -> MailNotificationHandler:
    if ctx.mailer is None:
        msg = "Mail handler requires [mail] host to be configured"
        raise ValueError(msg)
    return MailNotificationHandler(ctx.mailer, ctx.recipients, subject=ctx.subject)


HandlerFactory = Callable[[HandlerContext], Callable[[Any], object]]

HANDLER_FACTORIES: StrategyRegistry[str, HandlerFactory] = StrategyRegistry("handlers")
HANDLER_FACTORIES.register("audit", lambda ctx: AuditLogHandler())
HANDLER_FACTORIES.register("cache", lambda ctx: CacheUpdateHandler(ctx.cache))
HANDLER_FACTORIES.register("mail", _build_mail)

__all__ = [
    "HANDLER_FACTORIES",
    "AuditLogHandler",
    "Cache",
    "CacheUpdateHandler",
    "HandlerContext",
    "MailNotificationHandler",
    "Mailer",
]
