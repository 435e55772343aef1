"""Configuration: scene scale, step tolerance and file encoding from environment."""

from __future__ import annotations

import codecs
import logging
import os

from horizons_track.constants import (
    DEFAULT_FILE_ENCODING,
    DEFAULT_STEP_TOLERANCE_SECONDS,
    DEFAULT_UNITS_PER_AU,
)

logger = logging.getLogger(__name__)


def _float_from_env(name: str, default: float) -> float:
    """Return a positive float from environment variable name, or default.

    Unset, empty, non-numeric or non-positive values fall back to default.
    """
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r (not a number); using %s', name, raw, default)
        return default
    if value <= 0.0:
        logger.warning('Ignoring %s=%r (must be positive); using %s', name, raw, default)
        return default
    return value


def get_units_per_au() -> float:
    """Return scene units per astronomical unit (HORIZONS_UNITS_PER_AU env var or default).

    Returns:
        Scale factor used when a caller does not give one explicitly.
    """
    return _float_from_env('HORIZONS_UNITS_PER_AU', DEFAULT_UNITS_PER_AU)


def get_step_tolerance_seconds() -> float:
    """Return the largest step difference (seconds) tolerated between tracks of one set.

    Reads HORIZONS_STEP_TOLERANCE.
    """
    return _float_from_env('HORIZONS_STEP_TOLERANCE', DEFAULT_STEP_TOLERANCE_SECONDS)


def get_file_encoding() -> str:
    """Return text encoding for ephemeris files (HORIZONS_FILE_ENCODING env var or default).

    Encodings unknown to Python fall back to the default.
    """
    raw = os.environ.get('HORIZONS_FILE_ENCODING', '').strip()
    if not raw:
        return DEFAULT_FILE_ENCODING
    try:
        codecs.lookup(raw)
    except LookupError:
        logger.warning(
            'Ignoring HORIZONS_FILE_ENCODING=%r (unknown encoding); using %s', raw, DEFAULT_FILE_ENCODING
        )
        return DEFAULT_FILE_ENCODING
    return raw
