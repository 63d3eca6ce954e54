from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path

import yaml

from .config import load_config
from .errors import FastaRegionError
from .fasta import FastaHandle, open_fasta
from .io_utils import FastaRecord, write_fasta
from .runtime import setup_logging
from .transform import reverse_complement

_REGION_RE = re.compile(r"^(?P<name>.+?):(?P<start>[0-9,]+)-(?P<end>[0-9,]+)$")


def parse_region_string(region: str) -> tuple[str, int | None, int | None]:
    """Parse ``name`` or ``name:start-end`` (1-based, inclusive) into 0-based half-open coordinates."""
    m = _REGION_RE.match(region)
    if not m:
        return region, None, None
    start = int(m.group("start").replace(",", ""))
    end = int(m.group("end").replace(",", ""))
    if start < 1:
        raise ValueError(f"Region start must be >= 1: {region}")
    return m.group("name"), start - 1, end


def add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None)
    p.add_argument("--log_dir", default=None)
    p.add_argument("--fai", default=None, help="Index path (default: <fasta>.fai)")
    p.add_argument("fasta")


async def _fetch(handle: FastaHandle, regions: list[str], revcomp: bool) -> list[FastaRecord]:
    records = []
    for region in regions:
        # sequence names may themselves look like "chr:1-2"
        if region in handle.index:
            name, start, end = region, None, None
        else:
            name, start, end = parse_region_string(region)
        if start is None:
            start, end = 0, handle.index.lookup(name).length
        seq = await handle.read_region(name, start, end)
        label = region
        if revcomp:
            seq = reverse_complement(seq)
            label = f"{region}/rc"
        records.append(FastaRecord(label, seq))
    return records


async def _run(args: argparse.Namespace, cfg: dict, logger: logging.Logger) -> None:
    async with await open_fasta(args.fasta, args.fai, config=cfg, logger=logger) as handle:
        if args.cmd == "fetch":
            records = await _fetch(handle, args.regions, args.reverse_complement)
            write_fasta(args.out, records, int(cfg["output"]["line_width"]))
        elif args.cmd == "lengths":
            df = handle.index.to_frame()[["name", "length"]]
            if args.out_tsv == "-":
                df.to_csv(sys.stdout, sep="\t", index=False)
            else:
                Path(args.out_tsv).parent.mkdir(parents=True, exist_ok=True)
                df.to_csv(args.out_tsv, sep="\t", index=False)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="fasta-region")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("fetch")
    add_common(p)
    p.add_argument("regions", nargs="+", help="name or name:start-end (1-based, inclusive)")
    p.add_argument("--reverse_complement", action="store_true")
    p.add_argument("--out", default="-")

    p = sub.add_parser("lengths")
    add_common(p)
    p.add_argument("--out_tsv", default="-")

    args = ap.parse_args(argv)
    logger = setup_logging(args.log_dir, "fasta_region")

    try:
        cfg = load_config(args.config)
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Cannot load config %s: %s", args.config, exc)
        return 1

    try:
        asyncio.run(_run(args, cfg, logger))
    except (FastaRegionError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
