"""Base-coordinate to byte-offset arithmetic for line-wrapped sequence files."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import InvalidRegion, RegionOutOfBounds
from .index import IndexRecord


@dataclass(frozen=True)
class ByteRange:
    """Raw byte span ``[raw_start, raw_end)`` holding the bases of one region.

    ``column`` is the in-line column of the byte at ``raw_start``; together with
    ``line_bases``/``line_bytes`` it tells which raw bytes are line terminators.
    """

    raw_start: int
    raw_end: int
    bases: int
    column: int
    line_bases: int
    line_bytes: int

    @property
    def size(self) -> int:
        return self.raw_end - self.raw_start

    @property
    def terminator_width(self) -> int:
        return self.line_bytes - self.line_bases

    def dewrap(self, raw: bytes) -> bytes:
        """Drop every terminator byte from ``raw`` (which must start at ``raw_start``)."""
        if not self.terminator_width:
            return raw
        buf = np.frombuffer(raw, dtype=np.uint8)
        columns = (np.arange(buf.size, dtype=np.int64) + self.column) % self.line_bytes
        return buf[columns < self.line_bases].tobytes()


def check_region(name: str, start: int, end: int, length: int) -> None:
    if start > end:
        raise InvalidRegion(name, start, end)
    if start < 0 or end > length:
        raise RegionOutOfBounds(name, start, end, length)


def base_position(record: IndexRecord, i: int) -> int:
    return record.offset + (i // record.line_bases) * record.line_bytes + (i % record.line_bases)


def compute_range(record: IndexRecord, start: int, end: int) -> ByteRange:
    check_region(record.name, start, end, record.length)
    column = start % record.line_bases
    if start == end:
        pos = base_position(record, start)
        return ByteRange(pos, pos, 0, column, record.line_bases, record.line_bytes)
    # stop right after the last base: never include the terminator that may follow it
    return ByteRange(
        raw_start=base_position(record, start),
        raw_end=base_position(record, end - 1) + 1,
        bases=end - start,
        column=column,
        line_bases=record.line_bases,
        line_bytes=record.line_bytes,
    )
