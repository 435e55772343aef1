"""CLI entry point: horizons-track info|evaluate|sample|check subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import datetime
from typing import TextIO

from horizons_track.angle_utils import format_declination, format_right_ascension
from horizons_track.config import get_units_per_au
from horizons_track.errors import EphemerisError
from horizons_track.models import EphemerisDocument
from horizons_track.parser import parse_file
from horizons_track.record import Record
from horizons_track.time_utils import parse_query_time
from horizons_track.track import EphemerisTrack
from horizons_track.track_set import TrackSet

logger = logging.getLogger(__name__)

_TIME_FMT = '%Y-%m-%d %H:%M:%S'


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or HORIZONS_TRACK_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('HORIZONS_TRACK_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _query_time(text: str) -> datetime:
    """argparse type for --time."""
    parsed = parse_query_time(text)
    if parsed is None:
        raise argparse.ArgumentTypeError(f'invalid UTC time {text!r}')
    return parsed


def _format_time(t: datetime | None) -> str:
    return '-' if t is None else t.strftime(_TIME_FMT)


def _format_vector(vec: object) -> str:
    x, y, z = vec  # type: ignore[misc]
    return f'({x:.6f}, {y:.6f}, {z:.6f})'


def write_document_summary(out: TextIO, document: EphemerisDocument, track: EphemerisTrack) -> None:
    """Write the header metadata, sample span and diagnostics of one document."""
    diag = document.diagnostics
    print(f'Source:        {document.source}', file=out)
    print(f'Target:        {document.target_name}', file=out)
    print(f'Center:        {document.center_name}', file=out)
    print(f'Target radii:  {_format_vector(document.target_radii_km)} km', file=out)
    print(f'Center radii:  {_format_vector(document.center_radii_km)} km', file=out)
    print(f'Format:        {document.format_kind.value}', file=out)
    print(f'Topocentric:   {"yes" if document.is_topocentric else "no"}', file=out)
    site = document.observer_site
    if site is not None:
        print(f'Site name:     {site.name}', file=out)
        if site.geodetic is not None:
            g = site.geodetic
            print(f'Site geodetic: lon={g.lon_deg} lat={g.lat_deg} alt={g.alt_km} km', file=out)
        if site.cylindrical is not None:
            c = site.cylindrical
            print(f'Site cylindr.: lon={c.lon_deg} dxy={c.dxy_km} km dz={c.dz_km} km', file=out)
    print(f'Entries:       {len(document.entries)}', file=out)
    print(f'Track samples: {track.count}', file=out)
    print(f'Start:         {_format_time(track.start_time)}', file=out)
    print(f'End:           {_format_time(track.end_time)}', file=out)
    print(f'Step:          {track.nominal_step}', file=out)
    print(
        f'Diagnostics:   considered={diag.rows_considered} skipped={diag.rows_skipped} '
        f'date_failures={diag.date_failures} corrected={diag.corrected_entries}',
        file=out,
    )


def write_sample_table(out: TextIO, document: EphemerisDocument, scale: float) -> None:
    """Write one fixed-width row per timed entry: time, scaled x y z, range, RA, DEC."""
    rec = Record()
    for label, width in (
        ('time_utc', 19), ('x', 15), ('y', 15), ('z', 15),
        ('range_au', 16), ('ra', 12), ('dec', 12),
    ):
        rec.append(label, width)
    rec.write(out)
    for entry in document.entries:
        if not entry.has_time:
            continue
        factor = entry.range_au * scale
        rec.append(entry.time_utc.strftime(_TIME_FMT), 19)
        for component in entry.direction:
            rec.append_exp(component * factor, 15, 7)
        rec.append_float(entry.range_au, 16, 12)
        rec.append(format_right_ascension(entry.right_ascension_rad), 12)
        rec.append(format_declination(entry.declination_rad), 12)
        rec.write(out)


def _info_cmd(args: argparse.Namespace, out: TextIO) -> int:
    document = parse_file(args.file)
    write_document_summary(out, document, EphemerisTrack.from_document(document))
    return 0


def _evaluate_cmd(args: argparse.Namespace, out: TextIO) -> int:
    document = parse_file(args.file)
    track = EphemerisTrack.from_document(document)
    if track.count == 0:
        print(f'Error: no ephemeris rows found in {args.file}', file=sys.stderr)
        return 1
    scale = args.scale if args.scale is not None else get_units_per_au()
    position = track.evaluate_position(args.time, scale)
    print(f'Time:      {_format_time(args.time)}', file=out)
    print(f'Position:  {_format_vector(position)} (scale {scale} per AU)', file=out)
    print(f'Distance:  {track.evaluate_distance_au(args.time):.12f} AU', file=out)
    return 0


def _sample_cmd(args: argparse.Namespace, out: TextIO) -> int:
    document = parse_file(args.file)
    scale = args.scale if args.scale is not None else get_units_per_au()
    write_sample_table(out, document, scale)
    return 0


def _check_cmd(args: argparse.Namespace, out: TextIO) -> int:
    tracks = TrackSet()
    for path in args.files:
        tracks.add(parse_file(path))
    print(
        f'{len(tracks)} tracks around {tracks.center_name}: '
        f'{_format_time(tracks.start_time)} .. {_format_time(tracks.end_time)}, step {tracks.step}',
        file=out,
    )
    return 0


def main() -> int:
    """Entry point for horizons-track CLI (info | evaluate | sample | check).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='horizons-track',
        description='Inspect and query JPL Horizons ephemeris reports.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    info_parser = subparsers.add_parser('info', help='Show header metadata and sample span')
    info_parser.add_argument('file', type=str, help='Horizons text report')
    info_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    info_parser.set_defaults(func=_info_cmd)

    eval_parser = subparsers.add_parser('evaluate', help='Interpolate position and distance')
    eval_parser.add_argument('file', type=str, help='Horizons text report')
    eval_parser.add_argument(
        '--time', type=_query_time, required=True, help='UTC time, e.g. "2024-01-01 00:30"'
    )
    eval_parser.add_argument(
        '--scale', type=float, default=None, help='Units per AU; env: HORIZONS_UNITS_PER_AU'
    )
    eval_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    eval_parser.set_defaults(func=_evaluate_cmd)

    sample_parser = subparsers.add_parser('sample', help='Print every sample as a table')
    sample_parser.add_argument('file', type=str, help='Horizons text report')
    sample_parser.add_argument(
        '--scale', type=float, default=None, help='Units per AU; env: HORIZONS_UNITS_PER_AU'
    )
    sample_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    sample_parser.set_defaults(func=_sample_cmd)

    check_parser = subparsers.add_parser('check', help='Check that reports share center and timeline')
    check_parser.add_argument('files', type=str, nargs='+', help='Horizons text reports')
    check_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    check_parser.set_defaults(func=_check_cmd)

    args = parser.parse_args()
    _configure_logging(getattr(args, 'verbose', False))
    try:
        return int(args.func(args, sys.stdout))
    except EphemerisError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
