"""
pybedgraph - rolling statistics, robust normalization and merging of BedGraph tracks
"""

__version__ = '0.1.0'

from ._errors import (
    BedGraphError,
    DegenerateTrackError,
    EmptyContigError,
    EmptyStoreError,
    FormatError,
    InvalidWindowError,
)
from ._shared import CONFIG
from .merge import StreamMerger, merge_intervals, merge_stream
from .normalize import cpm_track, get_cpm, to_cpm
from .records import BedGraphData, BedGraphRecord, Interval
from .stats import mad, mean, median, robust_z, robust_z_track, summarize
from .tracks import read_bedgraph, read_intervals, write_bedgraph, write_intervals
from .window import (
    get_padded_scores,
    roll,
    roll_mean,
    roll_median,
    rolling_mean_values,
    rolling_median_values,
)

__all__ = [
    # Configuration
    'CONFIG',

    # Errors
    'BedGraphError',
    'FormatError',
    'InvalidWindowError',
    'EmptyStoreError',
    'EmptyContigError',
    'DegenerateTrackError',

    # Records
    'BedGraphRecord',
    'BedGraphData',
    'Interval',

    # Text I/O
    'read_bedgraph',
    'write_bedgraph',
    'read_intervals',
    'write_intervals',

    # Rolling statistics
    'get_padded_scores',
    'rolling_mean_values',
    'rolling_median_values',
    'roll',
    'roll_mean',
    'roll_median',

    # Robust statistics
    'median',
    'mean',
    'mad',
    'robust_z',
    'robust_z_track',
    'summarize',

    # Normalization
    'get_cpm',
    'to_cpm',
    'cpm_track',

    # Merging
    'StreamMerger',
    'merge_intervals',
    'merge_stream',
]
