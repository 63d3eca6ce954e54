from pathlib import Path

import pandas as pd
import pytest

from fasta_region.cli import main, parse_region_string
from fasta_region.config import load_config, merge_config


def test_load_config_merges_user_yaml(tmp_path: Path):
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("io:\n  read_mode: seek\noutput:\n  line_width: 4\n")
    cfg = load_config(str(cfg_path))
    assert cfg["io"] == {"read_mode": "seek", "max_workers": 4}
    assert cfg["output"]["line_width"] == 4
    assert cfg["index"]["suffix"] == ".fai"
    assert load_config(None)["io"]["read_mode"] == "auto"


def test_parse_region_string():
    assert parse_region_string("chr1:80-82") == ("chr1", 79, 82)
    assert parse_region_string("chr1:1,001-2,000") == ("chr1", 1000, 2000)
    assert parse_region_string("HLA-A*01:01") == ("HLA-A*01:01", None, None)
    with pytest.raises(ValueError):
        parse_region_string("chr1:0-5")


def test_fetch_writes_fasta(toy_fasta: Path, toy_seqs, tmp_path: Path):
    out = tmp_path / "out.fa"
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text("output:\n  line_width: 4\n")
    rc = main(["fetch", str(toy_fasta), "chr1:10-12", "chrM", "--out", str(out), "--config", str(cfg_path)])
    assert rc == 0
    assert out.read_text() == ">chr1:10-12\nCGG\n>chrM\nACGT\nACGT\nAC\n"


def test_fetch_reverse_complement_to_stdout(toy_fasta: Path, capsys):
    rc = main(["fetch", str(toy_fasta), "chr2:5-8", "--reverse_complement"])
    assert rc == 0
    assert capsys.readouterr().out == ">chr2:5-8/rc\nACGT\n"


def test_fetch_reports_errors(toy_fasta: Path, tmp_path: Path, capsys):
    rc = main(["fetch", str(toy_fasta), "chr1:30-99", "--log_dir", str(tmp_path / "logs")])
    assert rc == 1
    assert "out of bounds" in capsys.readouterr().err
    assert "out of bounds" in (tmp_path / "logs" / "fasta_region.log").read_text()


def test_lengths_tsv(toy_fasta: Path, toy_seqs, tmp_path: Path):
    out_tsv = tmp_path / "lengths" / "lengths.tsv"
    assert main(["lengths", str(toy_fasta), "--out_tsv", str(out_tsv)]) == 0
    df = pd.read_csv(out_tsv, sep="\t")
    assert df["name"].tolist() == list(toy_seqs)
    assert df["length"].tolist() == [len(s) for s in toy_seqs.values()]


def test_missing_config_file_exits_with_error(toy_fasta: Path, tmp_path: Path, capsys):
    rc = main(["fetch", str(toy_fasta), "chrM", "--config", str(tmp_path / "nope.yaml")])
    assert rc == 1
    assert "Cannot load config" in capsys.readouterr().err


def test_merge_config_fills_partial_config():
    cfg = merge_config({"io": {"read_mode": "seek"}})
    assert cfg["io"] == {"read_mode": "seek", "max_workers": 4}
    assert cfg["index"]["suffix"] == ".fai"
    assert merge_config(None) == load_config(None)
