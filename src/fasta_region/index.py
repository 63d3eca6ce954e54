"""FAI-style index parsing.

An index line is ``name length offset line_bases line_bytes`` separated by
tabs or spaces. Extra trailing columns (the FASTQ quality offset written by
``samtools fqidx``) are accepted and ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterator

import pandas as pd

from .errors import DuplicateSequenceName, MalformedIndexLine, SequenceNotFound

FAI_COLUMNS = ["name", "length", "offset", "line_bases", "line_bytes"]


@dataclass(frozen=True)
class IndexRecord:
    name: str
    length: int
    offset: int
    line_bases: int
    line_bytes: int

    @property
    def terminator_width(self) -> int:
        return self.line_bytes - self.line_bases


class IndexTable:
    """Immutable name -> IndexRecord mapping, kept in file order."""

    def __init__(self, records: dict[str, IndexRecord]) -> None:
        self._records = MappingProxyType(dict(records))

    def lookup(self, name: str) -> IndexRecord:
        try:
            return self._records[name]
        except KeyError:
            raise SequenceNotFound(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def records(self) -> list[IndexRecord]:
        return list(self._records.values())

    def lengths(self) -> dict[str, int]:
        return {name: rec.length for name, rec in self._records.items()}

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [[getattr(rec, col) for col in FAI_COLUMNS] for rec in self._records.values()],
            columns=FAI_COLUMNS,
        )


def _parse_uint(token: str, field: str, line_number: int) -> int:
    # plain ASCII digits only
    if not token.isascii() or not token.isdigit():
        raise MalformedIndexLine(line_number, f"{field} is not a non-negative integer: {token!r}")
    return int(token)


def parse_index_line(line: str, line_number: int) -> IndexRecord:
    fields = line.split()
    if len(fields) < 5:
        raise MalformedIndexLine(line_number, f"expected at least 5 fields, found {len(fields)}")
    name = fields[0]
    length, offset, line_bases, line_bytes = (
        _parse_uint(tok, field, line_number) for tok, field in zip(fields[1:5], FAI_COLUMNS[1:])
    )
    if line_bases < 1:
        raise MalformedIndexLine(line_number, "line_bases must be at least 1")
    if line_bytes < line_bases:
        raise MalformedIndexLine(
            line_number, f"line_bytes ({line_bytes}) is smaller than line_bases ({line_bases})"
        )
    return IndexRecord(name, length, offset, line_bases, line_bytes)


def parse_index(content: str | bytes) -> IndexTable:
    records: dict[str, IndexRecord] = {}
    for line_number, raw in enumerate(content.splitlines(), start=1):
        if isinstance(raw, bytes):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                raise MalformedIndexLine(line_number, "line is not valid UTF-8") from None
        else:
            line = raw
        if not line.strip():
            continue
        rec = parse_index_line(line, line_number)
        if rec.name in records:
            raise DuplicateSequenceName(rec.name, line_number)
        records[rec.name] = rec
    return IndexTable(records)


def load_index(path: str | Path) -> IndexTable:
    return parse_index(Path(path).read_bytes())


def resolve_index_path(sequence_path: str | Path, suffix: str = ".fai") -> Path | None:
    """Return the conventional sibling index (``ref.fa`` -> ``ref.fa.fai``) if it exists."""
    p = Path(sequence_path)
    candidate = p.with_name(p.name + suffix)
    if candidate.exists():
        return candidate
    return None
