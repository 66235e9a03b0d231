"""Run a trigger alongside a domain transaction without letting it fail that transaction."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from sqlalchemy.orm import Session

from talentbook.domain.errors import PersistenceError

T = TypeVar("T")

_default_logger = logging.getLogger(__name__)


def notify_best_effort(
    trigger: Callable[..., T],
    session: Session,
    /,
    *,
    logger: logging.Logger | None = None,
    **event: Any,
) -> T | None:
    """Invoke ``trigger`` and log, rather than raise, a failed write.

    A booking acceptance or contract signature must still succeed when the
    resulting notification cannot be stored. ``ValidationError`` is not
    caught: incomplete event data is a bug in the caller.
    """

    log = logger or _default_logger
    try:
        return trigger(session, **event)
    except PersistenceError:
        log.exception(
            "Notification from %s could not be stored; continuing without it",
            getattr(trigger, "__name__", repr(trigger)),
        )
        return None


__all__ = ["notify_best_effort"]
