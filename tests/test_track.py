"""Tests for EphemerisTrack interpolation and boundary behavior."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from conftest import ANGULAR_REPORT
from horizons_track.constants import SENTINEL_TIME
from horizons_track.models import EphemerisDocument, Entry
from horizons_track.parser import parse_lines
from horizons_track.track import EphemerisTrack

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
HOUR = timedelta(hours=1)


def _turning_track() -> EphemerisTrack:
    """Three samples turning from +X to +Y to -X with ranges 1, 2, 3 AU."""
    return EphemerisTrack(
        [T0, T0 + HOUR, T0 + 2 * HOUR],
        [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (-1.0, 0.0, 0.0)],
        [1.0, 2.0, 3.0],
    )


def test_constant_report_midpoint() -> None:
    """Three constant +X rows at 1 AU give (100, 0, 0) at 00:30 with scale 100."""
    track = EphemerisTrack.from_document(parse_lines(ANGULAR_REPORT.splitlines()))
    position = track.evaluate_position(T0 + HOUR / 2, 100.0)
    np.testing.assert_allclose(position, [100.0, 0.0, 0.0], atol=1e-9)
    assert track.evaluate_distance_au(T0 + HOUR / 2) == pytest.approx(1.0)


def test_linear_interpolation_between_samples() -> None:
    """Positions interpolate linearly in scaled Cartesian space."""
    track = _turning_track()
    np.testing.assert_allclose(track.evaluate_position(T0 + HOUR / 2, 10.0), [5.0, 10.0, 0.0])
    np.testing.assert_allclose(track.evaluate_position(T0 + HOUR * 1.25, 1.0), [-0.75, 1.5, 0.0])
    assert track.evaluate_distance_au(T0 + HOUR * 1.5) == pytest.approx(2.5)


def test_exact_sample_times() -> None:
    """Querying a sample time returns that sample's position."""
    track = _turning_track()
    for i, t in enumerate(track.times):
        np.testing.assert_allclose(track.evaluate_position(t, 7.0), track.position_at_index(i, 7.0))
        assert track.evaluate_distance_au(t) == pytest.approx(track.ranges_au[i])


def test_no_extrapolation() -> None:
    """Times outside the samples clamp to the first or last sample."""
    track = _turning_track()
    np.testing.assert_allclose(track.evaluate_position(T0 - 5 * HOUR, 1.0), [1.0, 0.0, 0.0])
    np.testing.assert_allclose(track.evaluate_position(T0 + 50 * HOUR, 1.0), [-3.0, 0.0, 0.0])
    assert track.evaluate_distance_au(T0 - HOUR) == 1.0
    assert track.evaluate_distance_au(T0 + 9 * HOUR) == 3.0


def test_result_lies_on_segment() -> None:
    """Any query inside a segment lies between the segment's end points."""
    track = _turning_track()
    p0 = track.position_at_index(0, 1.0)
    p1 = track.position_at_index(1, 1.0)
    for minutes in range(1, 60, 7):
        p = track.evaluate_position(T0 + timedelta(minutes=minutes), 1.0)
        alpha = minutes / 60.0
        np.testing.assert_allclose(p, p0 + (p1 - p0) * alpha, atol=1e-12)


def test_naive_query_time_is_utc() -> None:
    """A naive datetime is read as UTC."""
    track = _turning_track()
    naive = datetime(2024, 1, 1, 0, 30)
    np.testing.assert_allclose(track.evaluate_position(naive, 1.0), track.evaluate_position(T0 + HOUR / 2, 1.0))


def test_empty_track() -> None:
    """An empty track answers zero vectors and zero distances."""
    track = EphemerisTrack([], [], [])
    assert track.count == 0
    assert len(track) == 0
    np.testing.assert_array_equal(track.evaluate_position(T0, 100.0), np.zeros(3))
    assert track.evaluate_distance_au(T0) == 0.0
    assert track.start_time is None
    assert track.end_time is None
    assert track.nominal_step == timedelta(0)
    assert track.positions(1.0).shape == (0, 3)


def test_single_sample_track() -> None:
    """One sample answers every query with itself."""
    track = EphemerisTrack([T0], [(0.0, 0.0, 1.0)], [2.0])
    np.testing.assert_allclose(track.evaluate_position(T0 + HOUR, 3.0), [0.0, 0.0, 6.0])
    assert track.nominal_step == timedelta(0)


def test_duplicate_timestamps_stay_finite() -> None:
    """Repeated times do not divide by zero."""
    track = EphemerisTrack(
        [T0, T0 + HOUR, T0 + HOUR, T0 + 2 * HOUR],
        [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0), (-1.0, 0.0, 0.0)],
        [1.0, 1.0, 1.0, 1.0],
    )
    for minutes in (0, 30, 60, 90, 120):
        position = track.evaluate_position(T0 + timedelta(minutes=minutes), 1.0)
        assert np.all(np.isfinite(position))
    np.testing.assert_allclose(track.evaluate_position(T0 + HOUR * 1.5, 1.0), [-0.5, 0.0, 0.5])


def test_arrays_are_read_only() -> None:
    """Exposed arrays cannot be modified."""
    track = _turning_track()
    with pytest.raises(ValueError):
        track.directions[0, 0] = 5.0
    with pytest.raises(ValueError):
        track.ranges_au[0] = 5.0


def test_length_mismatch() -> None:
    """Sequences of different length are rejected."""
    with pytest.raises(ValueError, match='differ in length'):
        EphemerisTrack([T0, T0 + HOUR], [(1.0, 0.0, 0.0)], [1.0, 1.0])


def test_span_and_positions() -> None:
    """Start, end, step and the full position array."""
    track = _turning_track()
    assert track.start_time == T0
    assert track.end_time == T0 + 2 * HOUR
    assert track.nominal_step == HOUR
    np.testing.assert_allclose(
        track.positions(2.0), [[2.0, 0.0, 0.0], [0.0, 4.0, 0.0], [-6.0, 0.0, 0.0]]
    )


def test_from_document_drops_sentinel_entries(caplog: pytest.LogCaptureFixture) -> None:
    """Entries without a parsed time are left out with a warning."""
    timed = Entry(T0, 0.0, 0.0, 1.0, (1.0, 0.0, 0.0))
    untimed = Entry(SENTINEL_TIME, 0.0, 0.0, 1.0, (1.0, 0.0, 0.0))
    document = EphemerisDocument('Venus', 'Earth', entries=(timed, untimed), source='venus.txt')
    with caplog.at_level(logging.WARNING, logger='horizons_track.track'):
        track = EphemerisTrack.from_document(document)
    assert track.count == 1
    assert 'venus.txt' in caplog.text
