from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import os
from functools import partial
from pathlib import Path
from typing import Any, BinaryIO, Callable

from .config import merge_config
from .contig import Contig, ContigView
from .errors import IndexParseError, IndexUnavailable, IoFailure
from .index import IndexTable, load_index, parse_index, resolve_index_path
from .reader import ReadSource, RegionReader, StreamSource, make_source

IndexResolver = Callable[[str | Path], "str | Path | None"]


class FastaHandle:
    """An open sequence file together with its parsed index.

    Use :func:`open_fasta` or :func:`open_fasta_stream` to build one. The
    handle owns a thread pool used for blocking reads and, when opened from a
    path, the file descriptor; release both with :meth:`close` or
    ``async with``. Streams passed in by the caller are not closed.
    """

    def __init__(
        self,
        path: str | Path,
        index: IndexTable,
        source: ReadSource,
        max_workers: int = 4,
        logger: logging.Logger | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.path = str(path)
        self.index = index
        self.logger = logger or logging.getLogger("fasta_region")
        self.source = source
        self._on_close = on_close
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="fasta_region"
        )
        self.reader = RegionReader(self.source, self._executor, self.path, self.logger)
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise IoFailure(f"{self.path}: handle is closed")

    def lengths(self) -> dict[str, int]:
        return self.index.lengths()

    async def read_region(self, name: str, start: int, end: int) -> str:
        self._check_open()
        return await self.reader.read(self.index.lookup(name), start, end)

    async def read_contig(self, name: str) -> Contig:
        self._check_open()
        record = self.index.lookup(name)
        return Contig(name, await self.reader.read(record, 0, record.length))

    async def read_all_contigs(self) -> dict[str, Contig]:
        names = list(self.index)
        contigs = await asyncio.gather(*(self.read_contig(n) for n in names))
        return dict(zip(names, contigs))

    def contig_view(self, name: str) -> ContigView:
        self._check_open()
        return ContigView(self, name)

    def contig_views(self) -> dict[str, ContigView]:
        self._check_open()
        return {name: ContigView(self, name) for name in self.index}

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        # wait for in-flight workers before the descriptor goes away
        self._executor.shutdown(wait=True)
        if self._on_close is not None:
            self._on_close()
        self.logger.info("Closed %s", self.path)

    async def __aenter__(self) -> FastaHandle:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()


async def open_fasta(
    sequence_path: str | Path,
    index_path: str | Path | None = None,
    *,
    config: dict[str, Any] | None = None,
    resolver: IndexResolver | None = None,
    logger: logging.Logger | None = None,
) -> FastaHandle:
    cfg = merge_config(config)
    logger = logger or logging.getLogger("fasta_region")

    if index_path is None:
        resolver = resolver or partial(resolve_index_path, suffix=cfg["index"]["suffix"])
        index_path = resolver(sequence_path)
        if index_path is None:
            raise IndexUnavailable(None, f"no index found for {sequence_path}")

    try:
        index = await asyncio.to_thread(load_index, index_path)
    except (OSError, IndexParseError) as exc:
        raise IndexUnavailable(str(index_path), str(exc)) from exc
    logger.info("Loaded index %s (%d sequences)", index_path, len(index))

    try:
        fd = os.open(sequence_path, os.O_RDONLY | getattr(os, "O_BINARY", 0))
    except OSError as exc:
        raise IoFailure(f"cannot open {sequence_path}: {exc}") from exc

    try:
        source = make_source(fd, cfg["io"]["read_mode"])
        handle = FastaHandle(
            sequence_path,
            index,
            source,
            max_workers=int(cfg["io"]["max_workers"]),
            logger=logger,
            on_close=partial(os.close, fd),
        )
    except BaseException:
        os.close(fd)
        raise
    logger.info("Opened %s (source=%s)", sequence_path, type(source).__name__)
    return handle


async def open_fasta_stream(
    stream: BinaryIO,
    index_stream: BinaryIO,
    *,
    name: str = "<stream>",
    config: dict[str, Any] | None = None,
    logger: logging.Logger | None = None,
) -> FastaHandle:
    """Open from a seekable binary stream plus a stream holding the index text."""
    cfg = merge_config(config)
    logger = logger or logging.getLogger("fasta_region")
    try:
        index = parse_index(await asyncio.to_thread(index_stream.read))
    except (OSError, IndexParseError) as exc:
        raise IndexUnavailable(name, str(exc)) from exc
    logger.info("Loaded index for %s (%d sequences)", name, len(index))
    return FastaHandle(
        name,
        index,
        StreamSource(stream),
        max_workers=int(cfg["io"]["max_workers"]),
        logger=logger,
    )
