"""Ingestion of JPL Horizons ephemeris text reports into queryable tracks.

This package provides:
- Parser: header metadata, angular (RA/DEC/range) rows and Cartesian state-vector
  blocks, with topocentric-to-geocentric correction via Greenwich mean sidereal time
- Track: time-ordered samples answering interpolated position and distance queries
- Track set: several tracks sharing one center and one timeline

Vector math uses the SPICE toolkit via cspyce; calendar day numbering uses rms-julian.
"""

from horizons_track.errors import (
    EphemerisError,
    FileUnreadableError,
    MissingHeaderFieldError,
)
from horizons_track.models import EphemerisDocument, Entry, FormatKind
from horizons_track.parser import load_track, parse_file, parse_lines
from horizons_track.track import EphemerisTrack

__all__: list[str] = [
    'EphemerisDocument',
    'EphemerisError',
    'EphemerisTrack',
    'Entry',
    'FileUnreadableError',
    'FormatKind',
    'MissingHeaderFieldError',
    'load_track',
    'parse_file',
    'parse_lines',
]
