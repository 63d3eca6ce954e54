from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .offsets import check_region

if TYPE_CHECKING:
    from .fasta import FastaHandle


@dataclass(frozen=True)
class Contig:
    """Fully de-wrapped, in-memory copy of one sequence."""

    name: str
    sequence: str

    @property
    def length(self) -> int:
        return len(self.sequence)

    def read_region(self, start: int, end: int) -> str:
        check_region(self.name, start, end, self.length)
        return self.sequence[start:end]


class ContigView:
    """File-backed contig: every read goes back to the handle."""

    def __init__(self, handle: FastaHandle, name: str) -> None:
        self.handle = handle
        self.name = name
        self.length = handle.index.lookup(name).length

    async def read_region(self, start: int, end: int) -> str:
        return await self.handle.read_region(self.name, start, end)

    async def sequence(self) -> str:
        return await self.handle.read_region(self.name, 0, self.length)
