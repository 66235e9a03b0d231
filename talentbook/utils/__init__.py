"""Timezone-aware clock shared by the repositories and use cases."""

from .datetime import (
    from_storage_datetime,
    get_app_timezone,
    now_in_app_timezone,
    to_storage_datetime,
    utc_now_naive,
)

__all__ = [
    "from_storage_datetime",
    "get_app_timezone",
    "now_in_app_timezone",
    "to_storage_datetime",
    "utc_now_naive",
]
