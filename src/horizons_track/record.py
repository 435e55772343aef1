"""Fixed-width text rows for sample tables printed by the CLI."""

from __future__ import annotations

from typing import TextIO


class Record:
    """Row buffer: fields are right-aligned to a width and joined by single blanks."""

    def __init__(self, max_length: int = 4096) -> None:
        self._parts: list[str] = []
        self._max_length = max_length

    def clear(self) -> None:
        """Drop every field appended so far."""
        self._parts = []

    def append(self, value: str, width: int = 0) -> None:
        """Append a field, right-aligned to width; text past max_length is dropped."""
        used = sum(len(p) for p in self._parts) + len(self._parts)
        remaining = self._max_length - used
        if remaining <= 0:
            return
        self._parts.append(value.rjust(width)[:remaining])

    def append_float(self, value: float, width: int, decimals: int) -> None:
        """Append a float in fixed notation."""
        self.append(f'{value:.{decimals}f}', width)

    def append_exp(self, value: float, width: int, decimals: int) -> None:
        """Append a float in exponent notation (for km-scale positions)."""
        self.append(f'{value:.{decimals}E}', width)

    def get_line(self) -> str:
        """Return the current row without writing or clearing it."""
        return ' '.join(self._parts).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the current row (if non-empty) followed by a newline, then clear."""
        line = self.get_line()
        if line:
            stream.write(line + '\n')
        self.clear()
