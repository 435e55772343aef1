"""Import pipeline: read a Horizons report, scan its header, dispatch to one row parser."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from horizons_track.config import get_file_encoding
from horizons_track.constants import FALLBACK_FILE_ENCODING
from horizons_track.errors import FileUnreadableError, MissingHeaderFieldError
from horizons_track.header import scan_header
from horizons_track.models import EphemerisDocument, FormatKind
from horizons_track.rows.angular import parse_angular_rows
from horizons_track.rows.state_vectors import parse_state_vectors

if TYPE_CHECKING:
    from horizons_track.track import EphemerisTrack

logger = logging.getLogger(__name__)


def read_lines(path: str | Path) -> list[str]:
    """Read a report into lines using the configured encoding.

    Falls back to latin-1 when the file is not valid in the configured
    encoding, so stray bytes in comment blocks do not abort an import.

    Raises:
        FileUnreadableError: If the file cannot be opened or read.
    """
    p = Path(path)
    encoding = get_file_encoding()
    try:
        try:
            text = p.read_text(encoding=encoding)
        except UnicodeDecodeError as e:
            logger.info('%s is not valid %s (%s); retrying as %s', p, encoding, e, FALLBACK_FILE_ENCODING)
            text = p.read_text(encoding=FALLBACK_FILE_ENCODING)
    except OSError as e:
        raise FileUnreadableError(str(p), e.strerror or str(e)) from e
    return text.splitlines()


def parse_lines(lines: Sequence[str], source: str = '<memory>') -> EphemerisDocument:
    """Parse the lines of one Horizons report into an EphemerisDocument.

    Parameters:
        lines: Every line of the report.
        source: Name used in log and error messages (usually the file path).

    Returns:
        Complete document; it may hold zero entries.

    Raises:
        MissingHeaderFieldError: If the target or center name is absent.
    """
    header = scan_header(lines)
    if not header.target_name:
        raise MissingHeaderFieldError('Target body name', source)
    if not header.center_name:
        raise MissingHeaderFieldError('Center body name', source)

    if header.format_kind is FormatKind.CARTESIAN_STATE_VECTOR:
        entries, diagnostics = parse_state_vectors(lines)
    else:
        entries, diagnostics = parse_angular_rows(lines, header)

    logger.info(
        'Parsed %s: %d entries (%s), %d rows skipped, %d date failures',
        source,
        len(entries),
        header.format_kind.value,
        diagnostics.rows_skipped,
        diagnostics.date_failures,
    )
    return EphemerisDocument(
        target_name=header.target_name,
        center_name=header.center_name,
        target_radii_km=header.target_radii_km,
        center_radii_km=header.center_radii_km,
        is_topocentric=header.is_topocentric,
        observer_site=header.observer_site,
        format_kind=header.format_kind,
        entries=tuple(entries),
        diagnostics=diagnostics,
        source=source,
    )


def parse_file(path: str | Path) -> EphemerisDocument:
    """Read and parse one Horizons report file.

    Raises:
        FileUnreadableError: If the file cannot be read.
        MissingHeaderFieldError: If the target or center name is absent.
    """
    return parse_lines(read_lines(path), source=str(path))


def load_track(path: str | Path) -> EphemerisTrack:
    """Parse a report file and return its queryable track."""
    from horizons_track.track import EphemerisTrack

    return EphemerisTrack.from_document(parse_file(path))
