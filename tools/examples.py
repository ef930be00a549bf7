"""
Run a few pybedgraph examples against the bundled test tracks.

Usage:
    python tools/examples.py
"""

import io
from pathlib import Path

import pybedgraph as pbg

DATA = Path(__file__).resolve().parent.parent / "tests" / "data"


def main():
    bgd = pbg.read_bedgraph(DATA / "small.bedgraph")

    print("Contigs:", bgd.contig_lengths())
    print("Resolution:", bgd.resolution())

    print("Rolling mean (w=3, circular):")
    pbg.write_bedgraph(pbg.roll_mean(bgd, 3, circular=True))
    print("Rolling median (w=3, edge):")
    pbg.write_bedgraph(pbg.roll_median(bgd, 3))

    print("Robust z-scores:")
    pbg.write_bedgraph(pbg.robust_z_track(bgd))

    print("CPM:")
    cov = pbg.read_bedgraph(DATA / "cov.bedgraph")
    print(pbg.get_cpm(cov))

    print("Merged intervals:")
    pbg.merge_stream(io.StringIO("chr1\t0\t5\nchr1\t5\t10\nchr1\t20\t25\nchr2\t0\t5\n"))


if __name__ == "__main__":
    main()
