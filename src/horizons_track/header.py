"""Header scan: names, radii, observing site and declared row format of a Horizons file.

Each trimmed line is offered to an ordered list of fixed-prefix recognizers;
the first whose prefix matches owns the line and updates one field. Lines no
recognizer claims are ignored, so unknown header lines are harmless.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from horizons_track.constants import DEFAULT_RADII_KM
from horizons_track.models import (
    CylindricalCoords,
    FormatKind,
    GeodeticCoords,
    HeaderInfo,
    ObserverSite,
    Vector3,
)

logger = logging.getLogger(__name__)

_NUM = r'([-+]?(?:\d+\.?\d*|\.\d+))'

_TARGET_NAME_RE = re.compile(r'^Target body name:\s*(.+?)\s*(?:[({].*)?$')
_CENTER_NAME_RE = re.compile(r'^Center body name:\s*(.+?)\s*(?:[({].*)?$')
# Older reports separate radii with commas, newer ones with 'x'.
_TARGET_RADII_RE = re.compile(
    rf'^Target radii\s*:\s*{_NUM}\s*(?:,|x)\s*{_NUM}\s*(?:,|x)\s*{_NUM}\s*km'
)
_CENTER_RADII_RE = re.compile(
    rf'^Center radii\s*:\s*{_NUM}\s*(?:,|x)\s*{_NUM}\s*(?:,|x)\s*{_NUM}\s*km'
)
_EQUATORIAL_RADIUS_RE = re.compile(rf'^Equ\.\s*radius,\s*km\s*=\s*{_NUM}')
_POLAR_AXIS_RE = re.compile(rf'^Polar\s*axis,\s*km\s*=\s*{_NUM}')
_CENTER_SITE_RE = re.compile(r'^Center-site name:\s*(.*?)\s*$')
_CENTER_GEODETIC_RE = re.compile(rf'^Center geodetic\s*:\s*{_NUM}\s*,\s*{_NUM}\s*,\s*{_NUM}')
_CENTER_CYLINDRIC_RE = re.compile(rf'^Center cylindric\s*:\s*{_NUM}\s*,\s*{_NUM}\s*,\s*{_NUM}')

STATE_VECTOR_MARKER = 'GEOMETRIC cartesian states'


@dataclass
class _HeaderAccumulator:
    """Values seen so far during one scan; frozen into HeaderInfo at the end."""

    target_name: str = ''
    center_name: str = ''
    target_radii: Vector3 | None = None
    center_radii: Vector3 | None = None
    equatorial_km: float | None = None
    polar_km: float | None = None
    site_name: str | None = None
    geodetic: GeodeticCoords | None = None
    cylindrical: CylindricalCoords | None = None
    format_kind: FormatKind = FormatKind.ANGULAR_ASTROMETRIC
    indices: set[int] = field(default_factory=set)


def _floats(m: re.Match[str]) -> tuple[float, float, float]:
    return (float(m.group(1)), float(m.group(2)), float(m.group(3)))


def _set_target_name(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.target_name = m.group(1).strip()


def _set_center_name(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.center_name = m.group(1).strip()


def _set_target_radii(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.target_radii = _floats(m)


def _set_center_radii(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.center_radii = _floats(m)


def _set_equatorial(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.equatorial_km = float(m.group(1))


def _set_polar(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.polar_km = float(m.group(1))


def _set_site(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.site_name = m.group(1)


def _set_geodetic(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.geodetic = GeodeticCoords(*_floats(m))


def _set_cylindrical(acc: _HeaderAccumulator, m: re.Match[str]) -> None:
    acc.cylindrical = CylindricalCoords(*_floats(m))


# (line prefix, field pattern, updater). Order matters: first prefix match owns the line.
_RECOGNIZERS = (
    ('Target body name:', _TARGET_NAME_RE, _set_target_name),
    ('Center body name:', _CENTER_NAME_RE, _set_center_name),
    ('Target radii', _TARGET_RADII_RE, _set_target_radii),
    ('Center radii', _CENTER_RADII_RE, _set_center_radii),
    ('Equ. radius', _EQUATORIAL_RADIUS_RE, _set_equatorial),
    ('Polar axis', _POLAR_AXIS_RE, _set_polar),
    ('Center-site name:', _CENTER_SITE_RE, _set_site),
    ('Center geodetic', _CENTER_GEODETIC_RE, _set_geodetic),
    ('Center cylindric', _CENTER_CYLINDRIC_RE, _set_cylindrical),
)


def resolve_target_radii(
    explicit: Vector3 | None,
    equatorial_km: float | None,
    polar_km: float | None,
) -> Vector3:
    """Pick target ellipsoid radii (a, b, c) in km.

    Priority: explicit triaxial radii; else a = b = equatorial and c = polar,
    each substituting for the other when only one is known; else the default
    1000 km sphere.
    """
    if explicit is not None:
        return explicit
    if equatorial_km is not None:
        c = polar_km if polar_km is not None else equatorial_km
        return (equatorial_km, equatorial_km, c)
    if polar_km is not None:
        return (polar_km, polar_km, polar_km)
    return DEFAULT_RADII_KM


def scan_header(lines: Sequence[str]) -> HeaderInfo:
    """Scan every line once and collect header metadata.

    Parameters:
        lines: Raw lines of the report (line endings optional).

    Returns:
        HeaderInfo; names are '' when absent (the caller decides whether that
        is fatal).
    """
    acc = _HeaderAccumulator()
    for index, raw in enumerate(lines):
        line = raw.strip()
        if not line:
            continue
        for prefix, pattern, update in _RECOGNIZERS:
            if line.startswith(prefix):
                m = pattern.match(line)
                if m is not None:
                    update(acc, m)
                    acc.indices.add(index)
                else:
                    logger.debug('Unrecognized %r header line %d: %r', prefix, index + 1, line)
                break
        else:
            if line.startswith('Output type') and STATE_VECTOR_MARKER in line:
                acc.format_kind = FormatKind.CARTESIAN_STATE_VECTOR
                acc.indices.add(index)

    is_topocentric = acc.site_name is not None
    site = None
    if is_topocentric:
        site = ObserverSite(
            name=acc.site_name or '',
            geodetic=acc.geodetic,
            cylindrical=acc.cylindrical,
        )
        if acc.cylindrical is None:
            logger.info('Topocentric header has no cylindrical site; correction will be skipped')

    return HeaderInfo(
        target_name=acc.target_name,
        center_name=acc.center_name,
        target_radii_km=resolve_target_radii(acc.target_radii, acc.equatorial_km, acc.polar_km),
        center_radii_km=acc.center_radii if acc.center_radii is not None else DEFAULT_RADII_KM,
        is_topocentric=is_topocentric,
        observer_site=site,
        format_kind=acc.format_kind,
        header_line_indices=frozenset(acc.indices),
    )
