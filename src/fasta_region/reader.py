"""Asynchronous region reads against an open sequence file.

Reads suspend only while the blocking primitive runs on an executor thread.
Three primitives exist:

* ``PositionedSource`` uses ``os.pread`` and never touches the shared file
  cursor, so any number of reads may be in flight at once.
* ``SeekingSource`` uses ``lseek`` + ``read``, and ``StreamSource`` does the
  same through a seekable file object. Every seek/read pair runs as one
  unit under a ``threading.Lock`` on the worker thread, which serializes reads
  on the file. A cancelled coroutine only stops waiting; its worker still
  completes the locked unit, so the next caller never sees a half-moved cursor.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from concurrent.futures import Executor
from typing import BinaryIO, Union

from .errors import IoFailure
from .index import IndexRecord
from .offsets import ByteRange, compute_range

READ_MODES = ("auto", "pread", "seek")


class PositionedSource:
    def __init__(self, fd: int) -> None:
        self.fd = fd

    def read_at(self, offset: int, size: int) -> bytes:
        chunks: list[bytes] = []
        remaining = size
        while remaining > 0:
            chunk = os.pread(self.fd, remaining, offset)
            if not chunk:
                break
            chunks.append(chunk)
            offset += len(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)


class SeekingSource:
    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._lock = threading.Lock()

    def read_at(self, offset: int, size: int) -> bytes:
        chunks: list[bytes] = []
        remaining = size
        with self._lock:
            os.lseek(self.fd, offset, os.SEEK_SET)
            while remaining > 0:
                chunk = os.read(self.fd, remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        return b"".join(chunks)


class StreamSource:
    """Seekable binary file object (an open file, ``io.BytesIO``, ...); seek+read under one lock."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self._lock = threading.Lock()

    def read_at(self, offset: int, size: int) -> bytes:
        chunks: list[bytes] = []
        remaining = size
        with self._lock:
            self.stream.seek(offset)
            while remaining > 0:
                chunk = self.stream.read(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        return b"".join(chunks)


ReadSource = Union[PositionedSource, SeekingSource, StreamSource]


def make_source(fd: int, read_mode: str = "auto") -> PositionedSource | SeekingSource:
    if read_mode not in READ_MODES:
        raise ValueError(f"Unknown io.read_mode {read_mode!r}; expected one of {', '.join(READ_MODES)}")
    if read_mode == "seek" or (read_mode == "auto" and not hasattr(os, "pread")):
        return SeekingSource(fd)
    if not hasattr(os, "pread"):
        raise ValueError("io.read_mode 'pread' is not supported on this platform")
    return PositionedSource(fd)


class RegionReader:
    def __init__(
        self,
        source: ReadSource,
        executor: Executor | None = None,
        path: str = "<fasta>",
        logger: logging.Logger | None = None,
    ) -> None:
        self.source = source
        self.executor = executor
        self.path = path
        self.logger = logger or logging.getLogger("fasta_region")

    async def read_range(self, rng: ByteRange) -> bytes:
        """Fetch ``rng`` from disk and return its bases with terminators removed."""
        if rng.bases == 0:
            return b""
        loop = asyncio.get_running_loop()
        try:
            raw = await loop.run_in_executor(self.executor, self.source.read_at, rng.raw_start, rng.size)
        except OSError as exc:
            raise IoFailure(f"{self.path}: read of {rng.size} bytes at offset {rng.raw_start} failed: {exc}") from exc
        if len(raw) != rng.size:
            raise IoFailure(
                f"{self.path}: short read at offset {rng.raw_start} (wanted {rng.size} bytes, got {len(raw)})"
            )
        seq = rng.dewrap(raw)
        if len(seq) != rng.bases:
            raise IoFailure(
                f"{self.path}: de-wrapped {len(seq)} bases at offset {rng.raw_start}, expected {rng.bases}"
            )
        return seq

    async def read(self, record: IndexRecord, start: int, end: int) -> str:
        rng = compute_range(record, start, end)
        self.logger.debug(
            "read %s:%d-%d -> bytes [%d, %d)", record.name, start, end, rng.raw_start, rng.raw_end
        )
        seq = await self.read_range(rng)
        try:
            return seq.decode("ascii")
        except UnicodeDecodeError as exc:
            raise IoFailure(f"{self.path}: non-ASCII byte in {record.name}:{start}-{end}") from exc
