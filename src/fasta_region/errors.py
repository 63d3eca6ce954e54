from __future__ import annotations


class FastaRegionError(Exception):
    """Base class for every failure raised by fasta_region."""


class IndexParseError(FastaRegionError):
    pass


class MalformedIndexLine(IndexParseError):
    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"Malformed index line {line_number}: {reason}")


class DuplicateSequenceName(IndexParseError):
    def __init__(self, name: str, line_number: int | None = None) -> None:
        self.name = name
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Duplicate sequence name in index: {name!r}{where}")


class SequenceNotFound(FastaRegionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Sequence not found in index: {name!r}")


class RegionError(FastaRegionError):
    pass


class InvalidRegion(RegionError):
    def __init__(self, name: str, start: int, end: int) -> None:
        self.name = name
        self.start = start
        self.end = end
        super().__init__(f"Invalid region {name}:{start}-{end} (start > end)")


class RegionOutOfBounds(RegionError):
    def __init__(self, name: str, start: int, end: int, length: int) -> None:
        self.name = name
        self.start = start
        self.end = end
        self.length = length
        super().__init__(f"Region {name}:{start}-{end} out of bounds (len={length})")


class IoFailure(FastaRegionError):
    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"I/O failure: {detail}")


class IndexUnavailable(FastaRegionError):
    def __init__(self, path: str | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Index unavailable ({path or 'unresolved'}): {reason}")


class UnsupportedSymbol(FastaRegionError):
    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"Unsupported symbol {char!r} at position {position}")
