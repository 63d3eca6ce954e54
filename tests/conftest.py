from pathlib import Path

import pytest


def write_wrapped_fasta(
    path: Path,
    seqs: dict[str, str],
    line_bases: int,
    terminator: bytes = b"\n",
    final_terminator: bool = True,
) -> Path:
    """Write a wrapped FASTA plus a matching .fai; return the index path."""
    data = bytearray()
    fai_lines = []
    names = list(seqs)
    for i, name in enumerate(names):
        seq = seqs[name].encode("ascii")
        data += b">" + name.encode() + terminator
        offset = len(data)
        lines = [seq[j : j + line_bases] for j in range(0, len(seq), line_bases)]
        for k, line in enumerate(lines):
            data += line
            last = i == len(names) - 1 and k == len(lines) - 1
            if not last or final_terminator:
                data += terminator
        fai_lines.append(f"{name}\t{len(seq)}\t{offset}\t{line_bases}\t{line_bases + len(terminator)}\n")
    path.write_bytes(bytes(data))
    fai = path.with_name(path.name + ".fai")
    fai.write_text("".join(fai_lines))
    return fai


@pytest.fixture
def toy_seqs() -> dict[str, str]:
    return {
        "chr1": "ACGTACGTAC" "GGCCTTAAGG" "TTTTAAAACC" "acgtn",
        "chr2": "NNNNACGTAC" "GT",
        "chrM": "ACGTACGTAC",
    }


@pytest.fixture
def toy_fasta(tmp_path: Path, toy_seqs) -> Path:
    fasta = tmp_path / "toy.fa"
    write_wrapped_fasta(fasta, toy_seqs, line_bases=10)
    return fasta


@pytest.fixture
def make_fasta(tmp_path: Path):
    def _make(seqs, line_bases, terminator=b"\n", final_terminator=True, name="ref.fa"):
        fasta = tmp_path / name
        write_wrapped_fasta(fasta, seqs, line_bases, terminator, final_terminator)
        return fasta

    return _make
