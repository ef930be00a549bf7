"""
Command-line interface for pybedgraph.

Usage:
  pybedgraph filter track.bedgraph chr1 0 50000 -o out.bedgraph
  pybedgraph roll track.bedgraph -w 5 --circular --stat median
  pybedgraph robust-z track.bedgraph
  pybedgraph cpm track.bedgraph
  pybedgraph merge intervals.bed -o merged.bed
  cat track.bedgraph | pybedgraph summary -

SRC and OUT default to "-" (standard input / standard output).
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from ._errors import BedGraphError
from ._shared import CONFIG
from .merge import merge_stream
from .normalize import cpm_track
from .stats import robust_z_track, summarize
from .tracks import read_bedgraph, write_bedgraph
from .window import roll

logger = logging.getLogger("pybedgraph")

_COUNT_FIELDS = ("Records", "Contigs")


# -------------------------------------------------------------------
# Subcommands
# -------------------------------------------------------------------

def _cmd_filter(args: argparse.Namespace) -> int:
    bgd = read_bedgraph(args.src)
    write_bedgraph(bgd.filter(args.seqname, args.lo, args.hi), args.output)
    return 0


def _cmd_contigs(args: argparse.Namespace) -> int:
    bgd = read_bedgraph(args.src)
    for contig, length in bgd.contig_lengths().items():
        sys.stdout.write(f"{contig}\t{length}\n")
    return 0


def _cmd_roll(args: argparse.Namespace) -> int:
    bgd = read_bedgraph(args.src)
    result = roll(
        bgd,
        args.window,
        circular=args.circular,
        stat=args.stat,
        recompute_every=args.recompute_every,
    )
    write_bedgraph(result, args.output)
    return 0


def _cmd_robust_z(args: argparse.Namespace) -> int:
    bgd = read_bedgraph(args.src)
    write_bedgraph(robust_z_track(bgd), args.output)
    return 0


def _cmd_cpm(args: argparse.Namespace) -> int:
    bgd = read_bedgraph(args.src)
    write_bedgraph(cpm_track(bgd), args.output)
    return 0


def _cmd_merge(args: argparse.Namespace) -> int:
    n = merge_stream(args.src, args.output)
    logger.info("wrote %d merged regions", n)
    return 0


def _cmd_summary(args: argparse.Namespace) -> int:
    bgd = read_bedgraph(args.src)
    for key, value in summarize(bgd).items():
        text = str(int(value)) if key in _COUNT_FIELDS else repr(float(value))
        sys.stdout.write(f"{key}\t{text}\n")
    return 0


# -------------------------------------------------------------------
# Parser
# -------------------------------------------------------------------

def _add_src(p: argparse.ArgumentParser, optional: bool = False) -> None:
    if optional:
        p.add_argument("src", nargs="?", default="-", help="Input file, '-' for stdin (default)")
    else:
        p.add_argument("src", help="Input BedGraph file, '-' for stdin")


def _add_output(p: argparse.ArgumentParser) -> None:
    p.add_argument("-o", "--output", default="-", help="Output file, '-' for stdout (default)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pybedgraph",
        description="Rolling statistics, robust normalization and merging of BedGraph tracks.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--degenerate",
        choices=["raise", "propagate"],
        default=None,
        help="On zero score sum or zero MAD: fail (raise, default) or emit nan/inf (propagate)",
    )
    parser.add_argument(
        "--no-order-check",
        action="store_true",
        help="Accept tracks whose contigs are interleaved",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("filter", help="Keep records of one contig within [lo, hi]")
    _add_src(p)
    p.add_argument("seqname")
    p.add_argument("lo", type=int)
    p.add_argument("hi", type=int)
    _add_output(p)
    p.set_defaults(func=_cmd_filter)

    p = sub.add_parser("contigs", help="List contigs and their lengths")
    _add_src(p)
    p.set_defaults(func=_cmd_contigs)

    p = sub.add_parser("roll", help="Rolling mean or median per contig")
    _add_src(p)
    p.add_argument("-w", "--window", type=int, required=True, help="Odd window size")
    p.add_argument("--circular", action="store_true", help="Wrap windows around each contig")
    p.add_argument("--stat", choices=["mean", "median"], default="mean")
    p.add_argument(
        "--recompute-every",
        type=int,
        default=None,
        help="Recompute the rolling sum from scratch every K positions",
    )
    _add_output(p)
    p.set_defaults(func=_cmd_roll)

    p = sub.add_parser("robust-z", help="Robust z-score over the whole track")
    _add_src(p)
    _add_output(p)
    p.set_defaults(func=_cmd_robust_z)

    p = sub.add_parser("cpm", help="Counts-per-million over the whole track")
    _add_src(p)
    _add_output(p)
    p.set_defaults(func=_cmd_cpm)

    p = sub.add_parser("merge", help="Merge touching intervals into contiguous regions")
    _add_src(p, optional=True)
    _add_output(p)
    p.set_defaults(func=_cmd_merge)

    p = sub.add_parser("summary", help="Summary statistics of a track")
    _add_src(p)
    p.set_defaults(func=_cmd_summary)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose or CONFIG.get("debug") else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.degenerate is not None:
        CONFIG["degenerate"] = args.degenerate
    if args.no_order_check:
        CONFIG["check_contig_order"] = False

    try:
        return args.func(args)
    except (BedGraphError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
