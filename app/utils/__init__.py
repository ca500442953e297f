"""Utility helper functions."""

from app.utils.helpers import (
    epoch_ms,
    file_logger,
    get_summary,
    host,
    iso_now,
    time_taken,
    today_str,
    utc_now,
)

__all__ = [
    "epoch_ms",
    "file_logger",
    "get_summary",
    "host",
    "iso_now",
    "time_taken",
    "today_str",
    "utc_now",
]
