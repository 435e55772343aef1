"""Data model for a parsed Horizons ephemeris: header metadata, samples, diagnostics."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime

from horizons_track.constants import DEFAULT_RADII_KM, SENTINEL_TIME

Vector3 = tuple[float, float, float]

ZERO_VECTOR: Vector3 = (0.0, 0.0, 0.0)


class FormatKind(enum.Enum):
    """Row layout declared by a file's header."""

    ANGULAR_ASTROMETRIC = 'angular'
    CARTESIAN_STATE_VECTOR = 'cartesian'


@dataclass(frozen=True)
class GeodeticCoords:
    """Observer site from 'Center geodetic' (east longitude, latitude, altitude)."""

    lon_deg: float
    lat_deg: float
    alt_km: float


@dataclass(frozen=True)
class CylindricalCoords:
    """Observer site from 'Center cylindric' (east longitude, distance from spin axis, height).

    dxy_km is measured perpendicular to the spin axis and dz_km along it,
    both from the center body's center.
    """

    lon_deg: float
    dxy_km: float
    dz_km: float


@dataclass(frozen=True)
class ObserverSite:
    """Topocentric observing site; either coordinate form may be missing from the header."""

    name: str = ''
    geodetic: GeodeticCoords | None = None
    cylindrical: CylindricalCoords | None = None


@dataclass(frozen=True)
class HeaderInfo:
    """Metadata collected by the header scan, before any data row is parsed.

    Names are empty strings when the corresponding header line was not found;
    header_line_indices lists every line recognized as a header field.
    """

    target_name: str = ''
    center_name: str = ''
    target_radii_km: Vector3 = DEFAULT_RADII_KM
    center_radii_km: Vector3 = DEFAULT_RADII_KM
    is_topocentric: bool = False
    observer_site: ObserverSite | None = None
    format_kind: FormatKind = FormatKind.ANGULAR_ASTROMETRIC
    header_line_indices: frozenset[int] = frozenset()


@dataclass(frozen=True)
class Entry:
    """One timestamped sample.

    Attributes:
        time_utc: Sample time (UTC, timezone-aware); SENTINEL_TIME if unparseable.
        right_ascension_rad: Right ascension in radians.
        declination_rad: Declination in radians.
        range_au: Distance in astronomical units.
        direction: Unit vector toward the target.
        position_km: Cartesian position in km.
        velocity_km_s: Cartesian velocity in km/s (zero for angular rows).
    """

    time_utc: datetime
    right_ascension_rad: float
    declination_rad: float
    range_au: float
    direction: Vector3
    position_km: Vector3 = ZERO_VECTOR
    velocity_km_s: Vector3 = ZERO_VECTOR

    @property
    def has_time(self) -> bool:
        """True unless the sample carries the unparsed-date sentinel."""
        return self.time_utc != SENTINEL_TIME


@dataclass(frozen=True)
class ParseDiagnostics:
    """Counts of non-fatal conditions met while parsing rows.

    Attributes:
        rows_considered: Candidate rows (angular) or record start lines (state vectors).
        rows_skipped: Candidates that matched no known row layout.
        date_failures: Samples kept with SENTINEL_TIME because no date parsed.
        corrected_entries: Angular samples moved from topocentric to geocentric.
    """

    rows_considered: int = 0
    rows_skipped: int = 0
    date_failures: int = 0
    corrected_entries: int = 0


@dataclass(frozen=True)
class EphemerisDocument:
    """Immutable result of parsing one Horizons file.

    Entries keep file order; they are not re-sorted.
    """

    target_name: str
    center_name: str
    target_radii_km: Vector3 = DEFAULT_RADII_KM
    center_radii_km: Vector3 = DEFAULT_RADII_KM
    is_topocentric: bool = False
    observer_site: ObserverSite | None = None
    format_kind: FormatKind = FormatKind.ANGULAR_ASTROMETRIC
    entries: tuple[Entry, ...] = ()
    diagnostics: ParseDiagnostics = field(default_factory=ParseDiagnostics)
    source: str = '<memory>'

    def __len__(self) -> int:
        return len(self.entries)
