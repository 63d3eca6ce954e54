"""Reverse complement of nucleotide sequences.

Supported symbols are ``ACGTN`` in either case; case is preserved and ``N``
maps to itself. Any other character raises ``UnsupportedSymbol``.
"""

from __future__ import annotations

import numpy as np

from .errors import UnsupportedSymbol

_COMPLEMENT_PAIRS = {"A": "T", "T": "A", "C": "G", "G": "C", "N": "N"}

# -1 marks bytes with no complement
_COMPLEMENT = np.full(256, -1, dtype=np.int16)
for _base, _comp in _COMPLEMENT_PAIRS.items():
    _COMPLEMENT[ord(_base)] = ord(_comp)
    _COMPLEMENT[ord(_base.lower())] = ord(_comp.lower())


def reverse_complement(sequence: str) -> str:
    if not sequence.isascii():
        pos = next(i for i, ch in enumerate(sequence) if not ch.isascii())
        raise UnsupportedSymbol(sequence[pos], pos)
    codes = np.frombuffer(sequence.encode("ascii"), dtype=np.uint8)
    comp = _COMPLEMENT[codes]
    bad = np.flatnonzero(comp < 0)
    if bad.size:
        pos = int(bad[0])
        raise UnsupportedSymbol(sequence[pos], pos)
    return comp[::-1].astype(np.uint8).tobytes().decode("ascii")
