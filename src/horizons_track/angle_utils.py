"""Sexagesimal angle conversion and formatting for RA (hours) and DEC (degrees)."""

from __future__ import annotations

import math

from horizons_track.constants import (
    ARCMIN_PER_DEGREE,
    ARCSEC_PER_DEGREE,
    DEGREES_PER_HOUR_RA,
    HOURS_PER_DAY,
)


def hms_to_hours(hours: float, minutes: float, seconds: float) -> float:
    """Return right ascension in decimal hours from h, m, s."""
    return hours + minutes / ARCMIN_PER_DEGREE + seconds / ARCSEC_PER_DEGREE


def hours_to_radians(hours: float) -> float:
    """Return right ascension in radians from decimal hours (raHours * pi / 12)."""
    return hours * math.pi / 12.0


def dms_to_degrees(degrees: float, minutes: float, seconds: float, negative: bool) -> float:
    """Return a signed angle in decimal degrees from d, m, s.

    The sign is passed separately because '-00 30 00' has a degree field of
    zero, which cannot carry the minus itself. Minutes and seconds are taken
    as magnitudes.

    Parameters:
        degrees: Degree field (its own sign is ignored).
        minutes: Arc minutes.
        seconds: Arc seconds.
        negative: True if the degree field was written with a leading minus.

    Returns:
        Angle in degrees.
    """
    angle = abs(degrees) + abs(minutes) / ARCMIN_PER_DEGREE + abs(seconds) / ARCSEC_PER_DEGREE
    return -angle if negative else angle


def _split_sexagesimal(value: float, ndecimal: int) -> tuple[bool, int, int, int, int]:
    """Split |value| into whole units, minutes, seconds and a fixed-point fraction.

    Rounding is done once on the total so that 59.9999 seconds carries into
    the next minute instead of printing as 60.
    """
    ntens = 10**ndecimal
    ticks = round(abs(value) * ARCSEC_PER_DEGREE * ntens)
    whole_secs, frac = divmod(ticks, ntens)
    whole_mins, secs = divmod(whole_secs, 60)
    units, mins = divmod(whole_mins, 60)
    return value < 0, units, mins, secs, frac


def format_sexagesimal(value: float, separator: str = '   ', ndecimal: int = 3) -> str:
    """Format an angle as units, minutes, seconds.

    Parameters:
        value: Angle in degrees (or hours for RA).
        separator: Three characters printed after each field (e.g. 'hms', 'dms').
        ndecimal: Decimal places for seconds.

    Returns:
        Formatted string (e.g. " 12h30m45.123s" or "-00 30 00.000").
    """
    sep1, sep2, sep3 = (separator + '   ')[:3]
    negative, units, mins, secs, frac = _split_sexagesimal(value, ndecimal)
    sign = '-' if negative else ' '
    return f'{sign}{units:02d}{sep1}{mins:02d}{sep2}{secs:02d}.{frac:0{ndecimal}d}{sep3}'.rstrip()


def format_right_ascension(ra_rad: float) -> str:
    """Format right ascension (radians) as 'hh mm ss.sss'."""
    hours = (math.degrees(ra_rad) / DEGREES_PER_HOUR_RA) % HOURS_PER_DAY
    _, units, mins, secs, frac = _split_sexagesimal(hours, 3)
    # Rounding up from 23h59m59.9995s wraps to 00h.
    return f'{units % int(HOURS_PER_DAY):02d} {mins:02d} {secs:02d}.{frac:03d}'


def format_declination(dec_rad: float) -> str:
    """Format declination (radians) as '+dd mm ss.ss' with an explicit sign."""
    text = format_sexagesimal(math.degrees(dec_rad), '   ', 2)
    return ('+' + text[1:]) if text.startswith(' ') else text
