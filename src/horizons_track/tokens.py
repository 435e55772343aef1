"""Tolerant tokenizing of Horizons text rows: numbers, leading timestamps, RA/DEC groups."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Signed decimal with optional exponent ("-23", "+12", "0.9876", "1.5E+08").
_NUMBER_RE = re.compile(r'[-+]?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?')

# "2024-Jan-01 00:00", "2024-Jan-01 00:00:30" or "2024-Jan-01 00:00:30.125" at line start.
_TIMESTAMP_RE = re.compile(
    r'^\s*(\d{4}-[A-Za-z]{3}-\d{2})\s+(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)'
)

# "hh mm ss.ff +dd mm ss.f" anywhere in a line; DEC sign is mandatory.
_RADEC_RE = re.compile(
    r'\b(\d{2})\s+(\d{2})\s+(\d{1,2}(?:\.\d+)?)\s+([+\-]\d{2})\s+(\d{2})\s+(\d{1,2}(?:\.\d+)?)'
)


@dataclass(frozen=True)
class NumericToken:
    """One number found in a line, keeping its text so a '-0' sign survives."""

    text: str
    value: float
    start: int
    end: int

    @property
    def negative(self) -> bool:
        """True if the token is written with a leading minus (including '-00')."""
        return self.text.startswith('-')


@dataclass(frozen=True)
class TimestampToken:
    """Leading date and time tokens of a row and the offset just past them."""

    date_text: str
    time_text: str
    end: int


@dataclass(frozen=True)
class RaDecGroup:
    """Sexagesimal RA (h m s) and DEC (d m s) found together in a line."""

    ra_hours: NumericToken
    ra_minutes: NumericToken
    ra_seconds: NumericToken
    dec_degrees: NumericToken
    dec_minutes: NumericToken
    dec_seconds: NumericToken
    end: int


def find_numbers(text: str, start: int = 0) -> list[NumericToken]:
    """Return every numeric token in text at or after offset start.

    Parameters:
        text: Line to scan.
        start: Offset where scanning begins.

    Returns:
        Tokens in left-to-right order; offsets refer to the full text.
    """
    return [
        NumericToken(m.group(0), float(m.group(0)), m.start(), m.end())
        for m in _NUMBER_RE.finditer(text, start)
    ]


def find_leading_timestamp(line: str) -> TimestampToken | None:
    """Return the date/time pair at the start of line, or None if the row has none."""
    m = _TIMESTAMP_RE.match(line)
    if m is None:
        return None
    return TimestampToken(m.group(1), m.group(2), m.end())


def find_radec_group(line: str) -> RaDecGroup | None:
    """Return the first combined RA+DEC sexagesimal group in line, or None."""
    m = _RADEC_RE.search(line)
    if m is None:
        return None
    tokens = [
        NumericToken(m.group(i), float(m.group(i)), m.start(i), m.end(i))
        for i in range(1, 7)
    ]
    return RaDecGroup(*tokens, end=m.end())
