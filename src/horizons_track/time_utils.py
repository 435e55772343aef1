"""Timestamp parsing for Horizons rows, Julian dates (rms-julian) and sidereal time."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone

import julian

from horizons_track.constants import (
    DAYS_PER_JULIAN_CENTURY,
    GMST_DEG_AT_J2000,
    GMST_DEG_PER_DAY,
    GMST_T2_COEFF,
    GMST_T3_DIVISOR,
    JD_2000_JAN_1_MIDNIGHT,
    JD_J2000,
    SECONDS_PER_DAY,
)

logger = logging.getLogger(__name__)

TWOPI = 2.0 * math.pi

# Angular-row timestamps: minutes only, whole seconds, or fractional seconds.
ROW_DATE_FORMATS = (
    '%Y-%b-%d %H:%M',
    '%Y-%b-%d %H:%M:%S',
    '%Y-%b-%d %H:%M:%S.%f',
)

# State-vector record timestamps: fractional seconds first, then coarser forms.
STATE_VECTOR_DATE_FORMAT = '%Y-%b-%d %H:%M:%S.%f'
STATE_VECTOR_FALLBACK_FORMATS = ('%Y-%b-%d %H:%M:%S', '%Y-%b-%d %H:%M')

# Accepted for user-supplied query times (CLI).
QUERY_DATE_FORMATS = (
    '%Y-%m-%d %H:%M:%S.%f',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%d %H:%M',
    '%Y-%m-%d',
) + ROW_DATE_FORMATS


def as_utc(value: datetime) -> datetime:
    """Return value as a timezone-aware UTC datetime; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _strptime_utc(text: str, formats: tuple[str, ...]) -> datetime | None:
    """Try each format in order; return the first UTC result or None."""
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def parse_row_timestamp(date_text: str, time_text: str) -> datetime | None:
    """Parse an angular-row 'YYYY-Mon-DD' + 'HH:MM[:SS[.fff]]' pair as UTC.

    Returns:
        Aware UTC datetime, or None if no accepted format matches.
    """
    return _strptime_utc(f'{date_text} {time_text}', ROW_DATE_FORMATS)


def parse_state_vector_timestamp(date_text: str, time_text: str) -> datetime | None:
    """Parse a state-vector record timestamp, falling back to coarser formats.

    The fixed fractional-seconds form is tried first; if it fails, the
    fractional part is dropped and whole-second and minute forms are tried.

    Returns:
        Aware UTC datetime, or None if every format fails.
    """
    text = f'{date_text} {time_text}'
    parsed = _strptime_utc(text, (STATE_VECTOR_DATE_FORMAT,))
    if parsed is not None:
        return parsed
    coarse = text.split('.', 1)[0] if '.' in time_text else text
    return _strptime_utc(coarse, STATE_VECTOR_FALLBACK_FORMATS)


def parse_query_time(string: str) -> datetime | None:
    """Parse a user-supplied UTC time (ISO 8601, 'YYYY-MM-DD HH:MM[:SS]' or Horizons style).

    A trailing 'Z' and a 'T' separator are accepted.

    Returns:
        Aware UTC datetime, or None on parse failure.
    """
    stripped = string.strip()
    if stripped.endswith(('Z', 'z')):
        stripped = stripped[:-1]
    candidates = [stripped]
    if 'T' in stripped:
        candidates.append(stripped.replace('T', ' ', 1))
    for candidate in candidates:
        try:
            return as_utc(datetime.fromisoformat(candidate))
        except ValueError:
            pass
        parsed = _strptime_utc(candidate, QUERY_DATE_FORMATS)
        if parsed is not None:
            return parsed
    return None


def julian_date(value: datetime) -> float:
    """Return the Julian date of a UTC instant (leap seconds ignored).

    Parameters:
        value: Civil UTC time; naive values are taken as UTC.

    Returns:
        Julian date (days).
    """
    utc = as_utc(value)
    day = int(julian.day_from_ymd(utc.year, utc.month, utc.day))
    sec = (
        utc.hour * 3600.0
        + utc.minute * 60.0
        + utc.second
        + utc.microsecond / 1.0e6
    )
    return JD_2000_JAN_1_MIDNIGHT + day + sec / SECONDS_PER_DAY


def gmst_radians(value: datetime) -> float:
    """Return Greenwich mean sidereal time (radians, in [0, 2*pi)) at a UTC instant.

    Uses the Julian-date polynomial
    theta = 280.46061837 + 360.98564736629*(JD - 2451545)
            + 0.000387933*T**2 - T**3/38710000   (degrees),
    with T in Julian centuries since J2000.0.
    """
    jd = julian_date(value)
    days = jd - JD_J2000
    t = days / DAYS_PER_JULIAN_CENTURY
    theta_deg = (
        GMST_DEG_AT_J2000
        + GMST_DEG_PER_DAY * days
        + GMST_T2_COEFF * t * t
        - (t * t * t) / GMST_T3_DIVISOR
    )
    theta = math.radians(theta_deg) % TWOPI
    # % can return exactly TWOPI for tiny negative inputs.
    return 0.0 if theta >= TWOPI else theta
