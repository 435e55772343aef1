"""Row parsers, one per declared row format."""

from horizons_track.rows.angular import parse_angular_row, parse_angular_rows
from horizons_track.rows.state_vectors import parse_state_vector_record, parse_state_vectors

__all__ = [
    'parse_angular_row',
    'parse_angular_rows',
    'parse_state_vector_record',
    'parse_state_vectors',
]
