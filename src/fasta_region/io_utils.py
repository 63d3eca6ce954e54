from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, TextIO


@dataclass(frozen=True)
class FastaRecord:
    id: str
    seq: str


def _write_records(handle: TextIO, records: Iterable[FastaRecord], line_width: int) -> None:
    for rec in records:
        handle.write(f">{rec.id}\n")
        if line_width <= 0:
            handle.write(f"{rec.seq}\n")
            continue
        for i in range(0, len(rec.seq), line_width):
            handle.write(rec.seq[i : i + line_width] + "\n")


def write_fasta(path: str | Path, records: Iterable[FastaRecord], line_width: int = 60) -> None:
    """Write records as FASTA; ``path`` of ``"-"`` means stdout. ``line_width <= 0`` disables wrapping."""
    if str(path) == "-":
        _write_records(sys.stdout, records, line_width)
        return
    with Path(path).open("w") as handle:
        _write_records(handle, records, line_width)
