"""Angular astrometric rows: date, RA (h m s), DEC (d m s) and range in AU.

Two layouts are recognized. The columnar layout has at least nine numbers
after the timestamp: RA in tokens 0-2, DEC in tokens 3-5 and range in token 8.
Shorter rows fall back to locating the combined 'hh mm ss +dd mm ss' group
anywhere in the line and taking the third number after it as the range.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from horizons_track.angle_utils import dms_to_degrees, hms_to_hours, hours_to_radians
from horizons_track.constants import (
    COLUMNAR_RANGE_INDEX,
    END_OF_EPHEMERIS,
    MIN_COLUMNAR_TOKENS,
    SENTINEL_TIME,
    START_OF_EPHEMERIS,
)
from horizons_track.frames import approximate_position, correct_topocentric, direction_from_radec
from horizons_track.models import Entry, HeaderInfo, ParseDiagnostics
from horizons_track.time_utils import parse_row_timestamp
from horizons_track.tokens import find_leading_timestamp, find_numbers, find_radec_group

logger = logging.getLogger(__name__)

# Column-header lines of observer tables.
_COLUMN_HEADER_PREFIXES = ('Date__(UT)', 'Ephemeris /')


def _candidate_lines(lines: Sequence[str], header: HeaderInfo) -> list[tuple[int, str]]:
    """Return (index, line) pairs that may hold data rows.

    When the report has a $$SOE marker only the block it opens is used;
    otherwise every line the header scan did not claim is a candidate.
    Blank, '$$' and '*' comment lines and column headers are dropped.
    """
    indexed = list(enumerate(lines))
    starts = [i for i, raw in indexed if raw.strip().startswith(START_OF_EPHEMERIS)]
    if starts:
        block: list[tuple[int, str]] = []
        for i, raw in indexed[starts[0] + 1:]:
            if raw.strip().startswith(END_OF_EPHEMERIS):
                break
            block.append((i, raw))
        indexed = block
    candidates = []
    for i, raw in indexed:
        if i in header.header_line_indices:
            continue
        line = raw.rstrip()
        stripped = line.lstrip()
        if not stripped or stripped.startswith(('$$', '*')):
            continue
        if stripped.startswith(_COLUMN_HEADER_PREFIXES):
            continue
        candidates.append((i, line))
    return candidates


def parse_angular_row(line: str) -> Entry | None:
    """Parse one angular row into an uncorrected Entry.

    Parameters:
        line: Row text without line ending.

    Returns:
        Entry with time (SENTINEL_TIME if the row has no parseable timestamp),
        RA, DEC, range and Y-polar direction; position and velocity unset.
        None if the row fits neither layout.
    """
    time_utc = SENTINEL_TIME
    start = 0
    stamp = find_leading_timestamp(line)
    if stamp is not None:
        parsed = parse_row_timestamp(stamp.date_text, stamp.time_text)
        if parsed is not None:
            time_utc = parsed
        start = stamp.end

    nums = find_numbers(line, start)
    if len(nums) >= MIN_COLUMNAR_TOKENS:
        rah, ram, ras, decd, decm, decs = nums[:6]
        range_au = nums[COLUMNAR_RANGE_INDEX].value
    else:
        group = find_radec_group(line)
        if group is None:
            return None
        rah, ram, ras = group.ra_hours, group.ra_minutes, group.ra_seconds
        decd, decm, decs = group.dec_degrees, group.dec_minutes, group.dec_seconds
        trailing = find_numbers(line, group.end)
        if len(trailing) < 3:
            return None
        range_au = trailing[2].value

    ra_rad = hours_to_radians(hms_to_hours(rah.value, ram.value, ras.value))
    dec_rad = math.radians(dms_to_degrees(decd.value, decm.value, decs.value, decd.negative))
    return Entry(
        time_utc=time_utc,
        right_ascension_rad=ra_rad,
        declination_rad=dec_rad,
        range_au=range_au,
        direction=direction_from_radec(ra_rad, dec_rad),
    )


def parse_angular_rows(
    lines: Sequence[str],
    header: HeaderInfo,
) -> tuple[list[Entry], ParseDiagnostics]:
    """Parse all angular rows of a report, correcting topocentric samples.

    A sample is corrected to geocentric when the header is topocentric, the
    row's time parsed and the site's cylindrical coordinates are known;
    otherwise its position is direction * range with zero velocity.
    Rows matching no layout are skipped.

    Parameters:
        lines: Every line of the report.
        header: Result of scan_header on the same lines.

    Returns:
        (entries in file order, diagnostics).
    """
    site = header.observer_site
    cylindrical = site.cylindrical if site is not None else None
    entries: list[Entry] = []
    considered = skipped = date_failures = corrected = 0

    for index, line in _candidate_lines(lines, header):
        considered += 1
        entry = parse_angular_row(line)
        if entry is None:
            skipped += 1
            logger.debug('Skipping line %d (no RA/DEC layout): %r', index + 1, line)
            continue
        if not entry.has_time:
            date_failures += 1
            logger.debug('Line %d has no parseable timestamp: %r', index + 1, line)
        if header.is_topocentric and entry.has_time and cylindrical is not None:
            entry = correct_topocentric(entry, cylindrical)
            corrected += 1
        else:
            entry = approximate_position(entry)
        entries.append(entry)

    diagnostics = ParseDiagnostics(
        rows_considered=considered,
        rows_skipped=skipped,
        date_failures=date_failures,
        corrected_entries=corrected,
    )
    return entries, diagnostics
