"""Conversion between native datetimes and Salesforce datetime strings.

Encoding is strict, decoding is lenient:

    to_remote_string    datetime -> "YYYY-MM-DDTHH:MM:SSZ" (one fixed format)
    from_remote_string  any reasonable date/time text -> aware UTC datetime

The encoder relabels the value as UTC instead of converting it: the wall-clock
reading is kept and only the zone changes. A value of 14:30 at +02:00 is
therefore sent as ``14:30:00Z``. Sub-second precision is dropped.

The decoder uses ``dateutil.parser`` so responses in other formats (locale
style dates, RFC 2822, offsets, missing time parts) still parse. It never
raises; anything unparseable yields ``None``. Returned datetimes are always
timezone-aware UTC: aware results are converted, naive ones labelled UTC.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from ..config import get_settings

__all__ = ["REMOTE_DATETIME_FORMAT", "to_remote_string", "from_remote_string"]

logger = logging.getLogger(__name__)

# Documentation of the wire shape; formatting below is explicit so years
# before 1000 stay zero-padded on every platform.
REMOTE_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def to_remote_string(value: Optional[date]) -> Optional[str]:
    """Format ``value`` as a Salesforce UTC datetime string.

    A plain ``date`` is treated as midnight. ``None`` returns ``None``.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    value = value.replace(tzinfo=timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}Z"
    )


def from_remote_string(
    text: Any,
    *,
    dayfirst: Optional[bool] = None,
    yearfirst: Optional[bool] = None,
) -> Optional[datetime]:
    """Parse Salesforce (or any other reasonable) date/time text.

    Args:
        text: Date/time text; non-string input yields None
        dayfirst: Read ambiguous ``05/03/2024`` as 5 March (default from settings)
        yearfirst: Read ambiguous ``10-09-08`` as year first (default from settings)

    Returns:
        Timezone-aware UTC datetime, or None when the text cannot be parsed
    """
    if not isinstance(text, str) or not text.strip():
        return None
    settings = get_settings()
    if dayfirst is None:
        dayfirst = settings.DATE_PARSE_DAYFIRST
    if yearfirst is None:
        yearfirst = settings.DATE_PARSE_YEARFIRST
    try:
        parsed = date_parser.parse(text, dayfirst=dayfirst, yearfirst=yearfirst)
    except (ValueError, OverflowError) as e:
        logger.debug("Unparseable datetime %r: %s", text, e)
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        # Offsets can push values just outside datetime's range
        logger.debug("Datetime %r out of range after UTC conversion: %s", text, e)
        return None
