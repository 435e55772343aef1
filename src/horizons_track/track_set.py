"""Several tracks around one center body, sharing one time range and step."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import numpy as np

from horizons_track.config import get_step_tolerance_seconds
from horizons_track.errors import (
    CenterMismatchError,
    EmptyTrackError,
    StepMismatchError,
    TimeRangeMismatchError,
)
from horizons_track.models import EphemerisDocument
from horizons_track.time_utils import as_utc
from horizons_track.track import EphemerisTrack

logger = logging.getLogger(__name__)

_TIME_FMT = '%Y-%m-%d %H:%M:%S'


class TrackSet:
    """Tracks keyed by target name, accepted only if they fit the first one added.

    The first accepted track fixes the center body, the start and end times
    and the nominal step. Later documents must name the same center
    (case-insensitive), cover exactly the same time range and have a step
    within the configured tolerance.
    """

    def __init__(self, step_tolerance_seconds: float | None = None) -> None:
        self._tracks: dict[str, EphemerisTrack] = {}
        self._documents: dict[str, EphemerisDocument] = {}
        self._step_tolerance = (
            get_step_tolerance_seconds() if step_tolerance_seconds is None else step_tolerance_seconds
        )
        self.center_name: str | None = None
        self.start_time: datetime | None = None
        self.end_time: datetime | None = None
        self.step: timedelta | None = None

    def __len__(self) -> int:
        return len(self._tracks)

    def __contains__(self, name: object) -> bool:
        return name in self._tracks

    @property
    def names(self) -> list[str]:
        """Target names in the order they were added."""
        return list(self._tracks)

    def track(self, name: str) -> EphemerisTrack:
        return self._tracks[name]

    def document(self, name: str) -> EphemerisDocument:
        return self._documents[name]

    def add(self, document: EphemerisDocument, track: EphemerisTrack | None = None) -> EphemerisTrack:
        """Validate and add a document's track; nothing is added if it is rejected.

        Tracks are keyed by target name: a document whose target is already in
        the set replaces that target's track and document.

        Parameters:
            document: Parsed report.
            track: Track built from document (built here when omitted).

        Returns:
            The accepted track.

        Raises:
            EmptyTrackError: The document has no timed samples.
            CenterMismatchError: Center body differs from the set's.
            TimeRangeMismatchError: First or last time differs from the set's.
            StepMismatchError: Step differs from the set's beyond tolerance.
        """
        if track is None:
            track = EphemerisTrack.from_document(document)
        if track.count == 0:
            raise EmptyTrackError(f'No ephemeris rows found in {document.source}')

        if self.center_name is not None and document.center_name.lower() != self.center_name.lower():
            raise CenterMismatchError(
                f"Center mismatch: set center is '{self.center_name}' "
                f"but {document.source} center is '{document.center_name}'"
            )
        if self.step is None:
            self.start_time = track.start_time
            self.end_time = track.end_time
            self.step = track.nominal_step
        else:
            if track.start_time != self.start_time or track.end_time != self.end_time:
                raise TimeRangeMismatchError(
                    f'Date range mismatch. Set [{self.start_time:{_TIME_FMT}} .. {self.end_time:{_TIME_FMT}}], '
                    f'file [{track.start_time:{_TIME_FMT}} .. {track.end_time:{_TIME_FMT}}]'
                )
            if abs((track.nominal_step - self.step).total_seconds()) > self._step_tolerance:
                raise StepMismatchError(
                    f'Step mismatch. Set step={self.step}, file step={track.nominal_step}'
                )
        if self.center_name is None:
            self.center_name = document.center_name

        if document.target_name in self._tracks:
            logger.info('Replacing track for %s', document.target_name)
        self._tracks[document.target_name] = track
        self._documents[document.target_name] = document
        logger.debug('Added %s (%d samples) to track set', document.target_name, track.count)
        return track

    def remove(self, name: str) -> None:
        """Remove a track by target name; the set's center and time range are kept."""
        del self._tracks[name]
        del self._documents[name]

    def clamp_time(self, t: datetime) -> datetime:
        """Clamp t into [start_time, end_time]; unchanged while the set is empty."""
        t = as_utc(t)
        if self.start_time is None or self.end_time is None:
            return t
        return min(max(t, self.start_time), self.end_time)

    def step_time(self, t: datetime, steps: float = 1.0) -> datetime:
        """Move t by a number of set steps (negative goes back), clamped to the range."""
        if self.step is None:
            return self.clamp_time(t)
        return self.clamp_time(as_utc(t) + self.step * steps)

    def positions_at(self, t: datetime, scale: float) -> dict[str, np.ndarray]:
        """Interpolated position of every track at time t."""
        return {name: tr.evaluate_position(t, scale) for name, tr in self._tracks.items()}

    def distances_at(self, t: datetime) -> dict[str, float]:
        """Interpolated distance (AU) of every track at time t."""
        return {name: tr.evaluate_distance_au(t) for name, tr in self._tracks.items()}
