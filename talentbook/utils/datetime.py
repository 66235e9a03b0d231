"""Clock helpers pinned to the ``APP_TIMEZONE`` setting.

Rows are written with naive UTC timestamps (SQLite keeps no offset, and a
local wall clock repeats itself when DST ends) and handed back to callers
as aware datetimes in the app timezone. Everything that stamps or compares
rows goes through here.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from talentbook.config import get_settings

_FIXED_OFFSET = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


def _fixed_offset(name: str) -> tzinfo | None:
    match = _FIXED_OFFSET.match(name)
    if match is None:
        return None
    offset = timedelta(
        hours=int(match["hours"]), minutes=int(match["minutes"] or 0)
    )
    return timezone(-offset if match["sign"] == "-" else offset)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """IANA names and ``UTC+hh:mm`` offsets are accepted; anything else means UTC."""

    name = (get_settings().app_timezone or "").strip()
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return _fixed_offset(name) or timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def utc_now_naive() -> datetime:
    """Column default for ``created_at``/``updated_at``."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_storage_datetime(value: datetime | None) -> datetime | None:
    """Return ``value`` as stored: naive UTC.

    Naive input is read as app-local time.
    """

    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=get_app_timezone())
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def from_storage_datetime(value: datetime | None) -> datetime | None:
    """Turn a stored naive UTC value into an aware datetime in the app timezone."""

    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(get_app_timezone())
