"""Direction vectors and topocentric-to-geocentric correction of angular samples.

Angular rows use a fixed axis convention with Y as the polar axis:
direction = (cos(dec)*cos(ra), sin(dec), cos(dec)*sin(ra)). The observer
site vector is built in the center body's usual Z-polar form and rotated
into the inertial frame by Greenwich mean sidereal time before it is added.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace

import cspyce

from horizons_track.constants import FALLBACK_DIRECTION, KM_PER_AU
from horizons_track.models import ZERO_VECTOR, CylindricalCoords, Entry, Vector3
from horizons_track.time_utils import gmst_radians

logger = logging.getLogger(__name__)


def _vector3(values) -> Vector3:  # type: ignore[no-untyped-def]
    """Return the first three components of a sequence as a tuple of floats."""
    return (float(values[0]), float(values[1]), float(values[2]))


def _scale(vec: Vector3, factor: float) -> Vector3:
    return (vec[0] * factor, vec[1] * factor, vec[2] * factor)


def direction_from_radec(ra_rad: float, dec_rad: float) -> Vector3:
    """Return the Y-polar unit direction for right ascension and declination (radians).

    cspyce.radrec gives the Z-polar vector (cos d cos a, cos d sin a, sin d);
    its last two components are swapped into (x, sin d, cos d sin a).
    """
    x, y, z = _vector3(cspyce.radrec(1.0, ra_rad, dec_rad))
    return (x, z, y)


def site_vector_km(site: CylindricalCoords) -> Vector3:
    """Return the body-fixed site vector (dxy*cos(lon), dxy*sin(lon), dz) in km."""
    lon = math.radians(site.lon_deg)
    return (site.dxy_km * math.cos(lon), site.dxy_km * math.sin(lon), site.dz_km)


def inertial_site_vector_km(site: CylindricalCoords, gmst: float) -> Vector3:
    """Rotate the body-fixed site vector by -gmst about Z into the inertial frame.

    cspyce.rotvec rotates the coordinate frame by +angle, which turns the
    vector itself by -angle.
    """
    return _vector3(cspyce.rotvec(site_vector_km(site), gmst, 3))


def approximate_position(entry: Entry) -> Entry:
    """Return entry with position = direction * range (km) and zero velocity."""
    return replace(
        entry,
        position_km=_scale(entry.direction, entry.range_au * KM_PER_AU),
        velocity_km_s=ZERO_VECTOR,
    )


def correct_topocentric(entry: Entry, site: CylindricalCoords) -> Entry:
    """Move an angular sample from the observing site to the center body's center.

    The inertial site vector is added to direction * range; range and
    direction are recomputed from the sum. RA and DEC keep their observed
    (topocentric) values. The entry must carry a parsed time.

    Parameters:
        entry: Topocentric sample with a valid time_utc.
        site: Cylindrical site coordinates.

    Returns:
        Geocentric sample with zero velocity.
    """
    site_inertial = inertial_site_vector_km(site, gmst_radians(entry.time_utc))
    topo_km = _scale(entry.direction, entry.range_au * KM_PER_AU)
    geo_km = _vector3(cspyce.vadd(site_inertial, topo_km))
    mag_km = float(cspyce.vnorm(geo_km))
    direction = _vector3(cspyce.vhat(geo_km)) if mag_km > 0.0 else entry.direction
    return replace(
        entry,
        range_au=mag_km / KM_PER_AU,
        direction=direction,
        position_km=geo_km,
        velocity_km_s=ZERO_VECTOR,
    )


def radec_from_position(position_km: Vector3) -> tuple[float, float, float, Vector3]:
    """Derive range, RA, DEC and unit direction from a Cartesian position.

    RA = atan2(y, x) in [0, 2*pi); DEC = asin(z / |r|). A zero-length vector
    gives RA = DEC = 0 and the fixed fallback direction.

    Returns:
        (range_km, ra_rad, dec_rad, direction).
    """
    range_km, ra_rad, dec_rad = cspyce.recrad(position_km)
    range_km = float(range_km)
    if range_km > 0.0:
        direction = _vector3(cspyce.vhat(position_km))
    else:
        direction = FALLBACK_DIRECTION
        ra_rad = dec_rad = 0.0
    return range_km, float(ra_rad), float(dec_rad), direction
