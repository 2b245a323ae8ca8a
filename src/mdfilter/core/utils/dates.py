"""Epoch-millisecond helpers for date-range filters"""

import time
from datetime import date, datetime, timezone


DAY_MS = 24 * 60 * 60 * 1000


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def to_ms(moment: datetime) -> int:
    """Epoch milliseconds for a datetime; naive values are read as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def parse_date_ms(value: str | date | None) -> int | None:
    """Parse an ISO date or datetime into epoch ms, or None if missing/unparseable."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return to_ms(value)
    if isinstance(value, date):
        return to_ms(datetime(value.year, value.month, value.day))
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return to_ms(datetime.fromisoformat(text))
    except ValueError:
        return None
