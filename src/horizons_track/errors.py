"""Exceptions raised while importing ephemeris files and assembling track sets."""

from __future__ import annotations


class EphemerisError(Exception):
    """Base class for every fatal import or track-set error."""


class MissingHeaderFieldError(EphemerisError, ValueError):
    """A required header field (target or center name) was never found."""

    def __init__(self, field_name: str, source: str = '<memory>') -> None:
        self.field_name = field_name
        self.source = source
        super().__init__(f'{field_name} not found in header of {source}')


class FileUnreadableError(EphemerisError, OSError):
    """The ephemeris file could not be read; the cause is chained."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f'Cannot read {path}: {reason}')


class TrackMismatchError(EphemerisError, ValueError):
    """A track does not fit the set it is being added to."""


class EmptyTrackError(TrackMismatchError):
    """The document produced no timed samples."""


class CenterMismatchError(TrackMismatchError):
    """The document's center body differs from the set's center."""


class TimeRangeMismatchError(TrackMismatchError):
    """The track's first or last time differs from the set's time range."""


class StepMismatchError(TrackMismatchError):
    """The track's sampling step differs from the set's step beyond tolerance."""
