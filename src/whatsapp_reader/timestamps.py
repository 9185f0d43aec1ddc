"""Turn exported date/time tokens into comparable integer instants.

Instants are milliseconds since 1970-01-01 of the wall-clock value read as if
it were UTC. Exports carry no zone information, so none is applied; ``0``
means the value could not be parsed.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

_EPOCH = datetime(1970, 1, 1)

TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{2})(?::([0-9]{2}))?\s*([AaPp][Mm])?$")
_DATE_PART = re.compile(r"^\s*[0-9]+\s*$")


def _to_millis(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def normalize_timestamp(date: str, time: str) -> int:
    """Convert a ``D/M/Y`` date and ``H:MM[:SS][ AM/PM]`` time into an instant.

    Two-digit years are read as ``2000 + year``. An unrecognized time falls
    back to midnight of the date; an invalid date gives ``0``.
    """
    parts = date.strip().split("/")
    if len(parts) < 3 or not all(_DATE_PART.match(part) for part in parts[:3]):
        return 0
    day_text, month_text, year_text = parts[:3]

    try:
        day = int(day_text)
        month = int(month_text)
        year = int(year_text)
    except ValueError:
        return 0
    if len(year_text) == 2:
        year += 2000

    parsed = TIME_PATTERN.match(time.strip())
    try:
        if not parsed:
            return _to_millis(datetime(year, month, day))

        hours = int(parsed.group(1))
        minutes = int(parsed.group(2))
        seconds = int(parsed.group(3) or 0)
        meridian = (parsed.group(4) or "").lower()

        if meridian == "pm" and hours < 12:
            hours += 12
        if meridian == "am" and hours == 12:
            hours = 0

        return _to_millis(datetime(year, month, day, hours, minutes, seconds))
    except (ValueError, OverflowError):
        return 0


def timestamp_to_datetime(timestamp: int) -> datetime | None:
    """Inverse of :func:`normalize_timestamp`; ``None`` for the unknown instant."""
    if not timestamp:
        return None
    return _EPOCH + timedelta(milliseconds=timestamp)
