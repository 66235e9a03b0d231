"""Delete notifications past the retention window; meant to be run from cron."""

from __future__ import annotations

import argparse
import logging

from talentbook.application.use_cases.notifications import purge_stale_notifications
from talentbook.config import get_settings
from talentbook.domain.errors import PersistenceError, ValidationError
from talentbook.infrastructure.database import SessionLocal
from talentbook.logging_config import configure_logging

logger = logging.getLogger("talentbook.scripts.purge_notifications")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Remove notifications older than the retention window.",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=None,
        help="Age in days; defaults to NOTIFICATION_RETENTION_DAYS (30).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    configure_logging(settings)

    session = SessionLocal()
    try:
        removed = purge_stale_notifications(session, days=args.days)
    except (PersistenceError, ValidationError) as exc:
        raise SystemExit(f"Retention sweep failed: {exc}") from exc
    finally:
        session.close()

    if removed is None:
        logger.info("Another sweep is running; nothing done")
    else:
        logger.info("Retention sweep removed %d notification(s)", removed)


if __name__ == "__main__":
    main()
