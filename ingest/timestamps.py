from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.errors import InvalidTimezoneError

# Tried in order, first match wins. Month-first before year-first keeps
# "01/02/2024" meaning January 2nd regardless of what follows.
DATE_FORMATS: Tuple[str, ...] = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


def load_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneError(f"Unknown timezone: {name}") from e


def parse_wall_clock(raw: str) -> Optional[datetime]:
    """Naive local datetime for the first matching format, else None."""
    text = (raw or "").strip()
    if not text:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_timestamp(raw: str, tz: str | ZoneInfo) -> Optional[datetime]:
    """Parse a broker timestamp as wall-clock time in `tz`, return it in UTC.

    Ambiguous fall-back times take the first occurrence (fold=0).
    """
    zone = tz if isinstance(tz, ZoneInfo) else load_zone(tz)
    local = parse_wall_clock(raw)
    if local is None:
        return None
    return local.replace(tzinfo=zone).astimezone(timezone.utc)


def local_date(instant: datetime, tz: str | ZoneInfo):
    zone = tz if isinstance(tz, ZoneInfo) else load_zone(tz)
    return instant.astimezone(zone).date()
