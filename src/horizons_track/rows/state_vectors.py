"""Cartesian state-vector records between $$SOE and $$EOE.

Each record is three lines::

    2460310.500000000 = A.D. 2024-Jan-01 00:00:00.0000 TDB
     X =-2.726836271599465E+07 Y = 1.333438143213474E+08 Z = 5.779908698498756E+07
     VX=-2.978467239287049E+01 VY=-5.406050389547183E+00 VZ=-2.341889082036034E+00

Light-time, range and range-rate fields after the velocity are ignored.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from horizons_track.constants import END_OF_EPHEMERIS, KM_PER_AU, SENTINEL_TIME, START_OF_EPHEMERIS
from horizons_track.frames import radec_from_position
from horizons_track.models import Entry, ParseDiagnostics, Vector3
from horizons_track.time_utils import parse_state_vector_timestamp

logger = logging.getLogger(__name__)

_FLOAT = r'([-+]?[0-9.]+(?:[eE][-+]?\d+)?)'

_START_RE = re.compile(
    r'^\s*(\d+\.\d+)\s*=\s*A\.D\.\s*(\d{4}-[A-Za-z]{3}-\d{2})\s+(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)'
)
_POSITION_RE = re.compile(rf'(?<![A-Z])X\s*=\s*{_FLOAT}\s*Y\s*=\s*{_FLOAT}\s*Z\s*=\s*{_FLOAT}')
_VELOCITY_RE = re.compile(rf'VX\s*=\s*{_FLOAT}\s*VY\s*=\s*{_FLOAT}\s*VZ\s*=\s*{_FLOAT}')


def _vector_from_match(m: re.Match[str]) -> Vector3 | None:
    """Return the three captured numbers, or None if any is not a valid float."""
    try:
        return (float(m.group(1)), float(m.group(2)), float(m.group(3)))
    except ValueError:
        return None


def _data_block(lines: Sequence[str]) -> list[str]:
    """Return the lines strictly between the first $$SOE and the next $$EOE."""
    block: list[str] = []
    inside = False
    for raw in lines:
        line = raw.rstrip()
        if line.lstrip().startswith(START_OF_EPHEMERIS):
            inside = True
            continue
        if line.lstrip().startswith(END_OF_EPHEMERIS):
            break
        if inside:
            block.append(line)
    return block


def parse_state_vector_record(start_line: str, position_line: str, velocity_line: str) -> Entry | None:
    """Parse one three-line record.

    A timestamp that parses in no accepted format becomes SENTINEL_TIME; the
    sample is still returned.

    Returns:
        Entry with position, velocity and derived RA/DEC/range/direction, or
        None if any of the three lines does not have its expected shape.
    """
    m_start = _START_RE.match(start_line)
    m_pos = _POSITION_RE.search(position_line)
    m_vel = _VELOCITY_RE.search(velocity_line)
    if m_start is None or m_pos is None or m_vel is None:
        return None
    position = _vector_from_match(m_pos)
    velocity = _vector_from_match(m_vel)
    if position is None or velocity is None:
        return None

    time_utc = parse_state_vector_timestamp(m_start.group(2), m_start.group(3))
    range_km, ra_rad, dec_rad, direction = radec_from_position(position)
    return Entry(
        time_utc=time_utc if time_utc is not None else SENTINEL_TIME,
        right_ascension_rad=ra_rad,
        declination_rad=dec_rad,
        range_au=range_km / KM_PER_AU,
        direction=direction,
        position_km=position,
        velocity_km_s=velocity,
    )


def parse_state_vectors(lines: Sequence[str]) -> tuple[list[Entry], ParseDiagnostics]:
    """Parse every state-vector record of a report.

    Scanning reacts only to record start lines. A record whose following two
    lines do not match is skipped and scanning resumes on the next line.

    Parameters:
        lines: Every line of the report.

    Returns:
        (entries in file order, diagnostics).
    """
    block = _data_block(lines)
    entries: list[Entry] = []
    considered = skipped = date_failures = 0
    i = 0
    while i < len(block):
        line = block[i]
        if not line.strip() or _START_RE.match(line) is None:
            i += 1
            continue
        considered += 1
        if i + 2 >= len(block):
            skipped += 1
            logger.debug('Truncated state-vector record at block line %d: %r', i + 1, line)
            break
        entry = parse_state_vector_record(line, block[i + 1], block[i + 2])
        if entry is None:
            skipped += 1
            logger.debug('Skipping malformed state-vector record at block line %d', i + 1)
            i += 1
            continue
        if not entry.has_time:
            date_failures += 1
            logger.debug('Unparseable state-vector time at block line %d: %r', i + 1, line)
        entries.append(entry)
        i += 3

    diagnostics = ParseDiagnostics(
        rows_considered=considered,
        rows_skipped=skipped,
        date_failures=date_failures,
    )
    return entries, diagnostics
