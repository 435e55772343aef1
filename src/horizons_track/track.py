"""Time-indexed track of an ephemeris: interpolated position and distance queries."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timedelta

import numpy as np

from horizons_track.constants import MIN_INTERPOLATION_SECONDS
from horizons_track.models import EphemerisDocument, Vector3
from horizons_track.time_utils import as_utc

logger = logging.getLogger(__name__)


def _readonly(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class EphemerisTrack:
    """Parallel sequences of time, unit direction and range (AU), in sample order.

    Built once and never modified; the arrays it exposes are read-only, so one
    track can be queried from several threads. A track with no samples is
    valid: position queries return the zero vector and distance queries 0.0.
    """

    def __init__(
        self,
        times: Sequence[datetime],
        directions: Sequence[Vector3] | np.ndarray,
        ranges_au: Sequence[float] | np.ndarray,
    ) -> None:
        """Store samples; times must be non-decreasing for queries to be meaningful.

        Raises:
            ValueError: If the three sequences differ in length.
        """
        self._times = tuple(as_utc(t) for t in times)
        self._directions = _readonly(np.array(directions, dtype=np.float64).reshape(-1, 3))
        self._ranges_au = _readonly(np.array(ranges_au, dtype=np.float64).reshape(-1))
        n = len(self._times)
        if self._directions.shape[0] != n or self._ranges_au.shape[0] != n:
            raise ValueError(
                f'Track sequences differ in length: {n} times, '
                f'{self._directions.shape[0]} directions, {self._ranges_au.shape[0]} ranges'
            )
        # Seconds since the first sample, for searching and interpolation.
        if n:
            origin = self._times[0]
            offsets = [(t - origin).total_seconds() for t in self._times]
        else:
            offsets = []
        self._offsets = _readonly(np.array(offsets, dtype=np.float64))

    @classmethod
    def from_document(cls, document: EphemerisDocument) -> EphemerisTrack:
        """Project a document's timed entries into a track.

        Entries carrying the unparsed-date sentinel are left out so the
        track's times stay ordered.
        """
        timed = [e for e in document.entries if e.has_time]
        dropped = len(document.entries) - len(timed)
        if dropped:
            logger.warning(
                '%s: %d entries without a parseable time left out of the track',
                document.source,
                dropped,
            )
        return cls(
            [e.time_utc for e in timed],
            [e.direction for e in timed],
            [e.range_au for e in timed],
        )

    @property
    def times(self) -> tuple[datetime, ...]:
        return self._times

    @property
    def directions(self) -> np.ndarray:
        return self._directions

    @property
    def ranges_au(self) -> np.ndarray:
        return self._ranges_au

    @property
    def count(self) -> int:
        return len(self._times)

    def __len__(self) -> int:
        return len(self._times)

    @property
    def start_time(self) -> datetime | None:
        """First sample time, or None for an empty track."""
        return self._times[0] if self._times else None

    @property
    def end_time(self) -> datetime | None:
        """Last sample time, or None for an empty track."""
        return self._times[-1] if self._times else None

    @property
    def nominal_step(self) -> timedelta:
        """Difference between the first two sample times (zero with fewer than two)."""
        if len(self._times) < 2:
            return timedelta(0)
        return self._times[1] - self._times[0]

    def position_at_index(self, index: int, scale: float) -> np.ndarray:
        """Return sample index's position as direction * range_au * scale."""
        return self._directions[index] * (self._ranges_au[index] * scale)

    def positions(self, scale: float) -> np.ndarray:
        """Return every sample position (N x 3), e.g. for drawing the orbit polyline."""
        return self._directions * (self._ranges_au * scale)[:, np.newaxis]

    def _bracket(self, t: datetime) -> tuple[int, int, float]:
        """Locate t among the samples.

        Returns:
            (lo, hi, alpha) with lo == hi when t is at or outside either end,
            otherwise the bracketing pair found by binary search and the
            clamped interpolation parameter.
        """
        last = len(self._times) - 1
        seconds = (as_utc(t) - self._times[0]).total_seconds()
        if seconds <= self._offsets[0]:
            return 0, 0, 0.0
        if seconds >= self._offsets[last]:
            return last, last, 0.0
        hi = int(np.searchsorted(self._offsets, seconds, side='right'))
        lo = hi - 1
        denom = max(float(self._offsets[hi] - self._offsets[lo]), MIN_INTERPOLATION_SECONDS)
        alpha = min(max((seconds - float(self._offsets[lo])) / denom, 0.0), 1.0)
        return lo, hi, alpha

    def evaluate_position(self, t: datetime, scale: float) -> np.ndarray:
        """Return the position at time t, linearly interpolated between samples.

        Times at or before the first sample return the first position; at or
        after the last, the last position. No extrapolation is done.

        Parameters:
            t: Query time (UTC; naive values are taken as UTC).
            scale: Output units per AU.

        Returns:
            Length-3 array; zeros for an empty track.
        """
        if not self._times:
            return np.zeros(3)
        lo, hi, alpha = self._bracket(t)
        p0 = self.position_at_index(lo, scale)
        if lo == hi:
            return p0
        p1 = self.position_at_index(hi, scale)
        return p0 + (p1 - p0) * alpha

    def evaluate_distance_au(self, t: datetime) -> float:
        """Return the range (AU) at time t, interpolated like evaluate_position.

        Returns:
            Distance in AU; 0.0 for an empty track.
        """
        if not self._times:
            return 0.0
        lo, hi, alpha = self._bracket(t)
        d0 = float(self._ranges_au[lo])
        if lo == hi:
            return d0
        d1 = float(self._ranges_au[hi])
        return d0 + (d1 - d0) * alpha
