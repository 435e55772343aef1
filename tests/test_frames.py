"""Tests for direction vectors, site rotation and the topocentric correction."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from horizons_track.constants import KM_PER_AU
from horizons_track.frames import (
    approximate_position,
    correct_topocentric,
    direction_from_radec,
    inertial_site_vector_km,
    radec_from_position,
    site_vector_km,
)
from horizons_track.models import CylindricalCoords, Entry
from horizons_track.time_utils import gmst_radians


def _entry(ra_deg: float, dec_deg: float, range_au: float) -> Entry:
    ra = math.radians(ra_deg)
    dec = math.radians(dec_deg)
    return Entry(
        time_utc=datetime(2024, 3, 20, 6, tzinfo=timezone.utc),
        right_ascension_rad=ra,
        declination_rad=dec,
        range_au=range_au,
        direction=direction_from_radec(ra, dec),
    )


@pytest.mark.parametrize(
    ('ra_deg', 'dec_deg', 'expected'),
    [
        (0.0, 0.0, (1.0, 0.0, 0.0)),
        (0.0, 90.0, (0.0, 1.0, 0.0)),
        (90.0, 0.0, (0.0, 0.0, 1.0)),
        (180.0, -90.0, (0.0, -1.0, 0.0)),
    ],
)
def test_direction_from_radec(ra_deg: float, dec_deg: float, expected: tuple[float, float, float]) -> None:
    """Y is the polar axis; RA turns from +X toward +Z."""
    direction = direction_from_radec(math.radians(ra_deg), math.radians(dec_deg))
    assert direction == pytest.approx(expected, abs=1e-12)


def test_site_vector_and_rotation() -> None:
    """The site vector turns by -gmst about Z."""
    site = CylindricalCoords(lon_deg=0.0, dxy_km=1.0, dz_km=2.0)
    assert site_vector_km(site) == pytest.approx((1.0, 0.0, 2.0))
    assert inertial_site_vector_km(site, math.pi / 2) == pytest.approx((0.0, -1.0, 2.0), abs=1e-12)


def test_correct_topocentric_matches_direct_computation() -> None:
    """geocentric = rotated site + direction * range, recomputed by hand."""
    site = CylindricalCoords(lon_deg=90.0, dxy_km=5500.0, dz_km=3200.0)
    entry = _entry(90.0, 30.0, 0.5)
    gmst = gmst_radians(entry.time_utc)

    lon = math.radians(site.lon_deg)
    sx, sy, sz = site.dxy_km * math.cos(lon), site.dxy_km * math.sin(lon), site.dz_km
    c, s = math.cos(gmst), math.sin(gmst)
    site_inertial = (c * sx + s * sy, -s * sx + c * sy, sz)
    topo = [d * 0.5 * KM_PER_AU for d in entry.direction]
    geo = [a + b for a, b in zip(site_inertial, topo)]
    mag = math.sqrt(sum(v * v for v in geo))

    corrected = correct_topocentric(entry, site)
    assert corrected.position_km == pytest.approx(geo, rel=1e-12)
    assert corrected.range_au == pytest.approx(mag / KM_PER_AU, rel=1e-12)
    assert corrected.direction == pytest.approx([v / mag for v in geo], rel=1e-12)
    assert corrected.right_ascension_rad == entry.right_ascension_rad
    assert corrected.declination_rad == entry.declination_rad
    assert corrected.velocity_km_s == (0.0, 0.0, 0.0)


def test_approximate_position() -> None:
    """Without correction the position is direction * range in km."""
    entry = approximate_position(_entry(0.0, 0.0, 2.0))
    assert entry.position_km == pytest.approx((2.0 * KM_PER_AU, 0.0, 0.0))
    assert entry.range_au == 2.0


def test_radec_from_position() -> None:
    """RA is in [0, 2*pi) and DEC comes from z / |r|."""
    range_km, ra, dec, direction = radec_from_position((0.0, -2.0, 0.0))
    assert range_km == pytest.approx(2.0)
    assert ra == pytest.approx(1.5 * math.pi)
    assert dec == pytest.approx(0.0)
    assert direction == pytest.approx((0.0, -1.0, 0.0))

    _, _, dec, direction = radec_from_position((0.0, 0.0, 5.0))
    assert dec == pytest.approx(math.pi / 2)
    assert direction == pytest.approx((0.0, 0.0, 1.0))


def test_radec_from_zero_position() -> None:
    """A zero vector gives zero angles and the +X fallback direction."""
    assert radec_from_position((0.0, 0.0, 0.0)) == (0.0, 0.0, 0.0, (1.0, 0.0, 0.0))
