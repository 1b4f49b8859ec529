"""Exchange clock: India Standard Time, trading days and session hours."""

from datetime import datetime
from typing import Any, Optional

import pytz
from dateutil import parser as date_parser

MARKET_TZ = pytz.timezone("Asia/Kolkata")


def now_market() -> datetime:
    """Current exchange time."""
    return datetime.now(MARKET_TZ)


def to_market(dt: datetime) -> datetime:
    """Express dt in exchange time; naive values are read as exchange time."""
    if dt.tzinfo is None:
        return MARKET_TZ.localize(dt)
    return dt.astimezone(MARKET_TZ)


def market_time_from(value: Any) -> Optional[datetime]:
    """
    Decode a stored timestamp.

    Accepts ISO-8601 strings (an offset-less string is exchange time) and
    epoch milliseconds as kept by the browser client. Returns None when the
    value is missing or unreadable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, MARKET_TZ)
    try:
        return to_market(date_parser.isoparse(str(value)))
    except (ValueError, OverflowError):
        return None


def is_weekday(at: datetime) -> bool:
    """Monday to Friday on the exchange calendar; holidays are not modelled."""
    return to_market(at).weekday() < 5


def in_session(at: datetime, open_hour: int, close_hour: int) -> bool:
    return open_hour <= to_market(at).hour < close_hour
