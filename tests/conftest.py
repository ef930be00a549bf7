from pathlib import Path

import numpy as np
import pandas as pd
import pytest

import pybedgraph as pbg

DATA_DIR = Path(__file__).resolve().parent / "data"
SMALL = DATA_DIR / "small.bedgraph"
COV = DATA_DIR / "cov.bedgraph"


@pytest.fixture(autouse=True)
def _restore_config():
    saved = dict(pbg.CONFIG)
    yield
    pbg.CONFIG.clear()
    pbg.CONFIG.update(saved)


@pytest.fixture
def small_bgd():
    return pbg.read_bedgraph(SMALL)


@pytest.fixture
def cov_bgd():
    return pbg.read_bedgraph(COV)


@pytest.fixture
def random_bgd():
    """Three contigs of uneven length with 10bp bins and normal scores."""
    rng = np.random.default_rng(17)
    frames = []
    for name, n in (("chr1", 250), ("chr2", 97), ("plasmid", 31)):
        starts = np.arange(n) * 10
        frames.append(pd.DataFrame({
            "seqname": name,
            "start": starts,
            "end": starts + 10,
            "score": rng.normal(size=n),
        }))
    return pbg.BedGraphData(pd.concat(frames, ignore_index=True))