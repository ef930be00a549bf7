"""Whole-track robust statistics: median, mean, MAD and robust z-scores."""

import logging as _logging

from ._errors import EmptyStoreError
from ._shared import _as_float_array, _handle_degenerate, _numpy, _pandas
from .records import BedGraphData

_logger = _logging.getLogger(__name__)

# Scales the MAD-based z-score to the standard normal.
ROBUST_Z_CONSTANT = 0.6745


def _values(values):
    if isinstance(values, BedGraphData):
        return values.scores()
    return _as_float_array(values)


def median(values):
    """
    Median of a sequence of values.

    Odd-length input yields the middle value after sorting; even-length
    input yields the average of the two middle values.

    Raises
    ------
    EmptyStoreError
        If *values* is empty.

    Examples
    --------
    >>> median([3.0, 1.0, 2.0])
    2.0
    >>> median([4.0, 1.0, 3.0, 2.0])
    2.5
    """
    arr = _values(values)
    n = len(arr)
    if n == 0:
        raise EmptyStoreError("Cannot take the median of no values")
    arr = _numpy.sort(arr)
    mid = n // 2
    if n % 2 == 1:
        return float(arr[mid])
    return float((arr[mid - 1] + arr[mid]) / 2.0)


def mean(values):
    """Arithmetic mean of *values*; raises ``EmptyStoreError`` when empty."""
    arr = _values(values)
    if len(arr) == 0:
        raise EmptyStoreError("Cannot take the mean of no values")
    return float(arr.sum() / len(arr))


def mad(values):
    """
    Median absolute deviation from the mean.

    This is ``median(|x - mean(x)|)``: deviations are centered on the mean,
    not on the median.

    Examples
    --------
    >>> mad([1.0, 2.0, 3.0, 4.0, 100.0])
    20.0
    """
    arr = _values(values)
    return median(_numpy.abs(arr - mean(arr)))


def robust_z(x, median, mad, degenerate=None):
    """
    Robust z-score ``0.6745 * (x - median) / mad``.

    Parameters
    ----------
    x : float or array-like
        Value(s) to standardize.
    median : float
        Center of the distribution.
    mad : float
        Spread of the distribution, see :func:`mad`.
    degenerate : {"raise", "propagate"} or None
        Behaviour when *mad* is zero. Defaults to ``CONFIG['degenerate']``.

    Returns
    -------
    float or numpy.ndarray

    Raises
    ------
    DegenerateTrackError
        If *mad* is zero and the policy is ``"raise"``.
    """
    if mad == 0:
        _handle_degenerate("MAD is zero, robust z-score is undefined", degenerate)
    scalar = _numpy.ndim(x) == 0
    with _numpy.errstate(divide="ignore", invalid="ignore"):
        z = ROBUST_Z_CONSTANT * (_numpy.asarray(x, dtype=float) - median) / mad
    return float(z) if scalar else z


def robust_z_track(bgd, degenerate=None):
    """
    Replace every score of a track by its robust z-score.

    One median and one MAD are computed over all scores of the track, across
    contigs, and every record is standardized against them.

    Parameters
    ----------
    bgd : BedGraphData
        Input track.
    degenerate : {"raise", "propagate"} or None
        Behaviour when the MAD is zero (for example a constant track).

    Returns
    -------
    BedGraphData
        New store; *bgd* is not modified.

    Raises
    ------
    EmptyStoreError
        If the track has no records.
    DegenerateTrackError
        If the MAD is zero and the policy is ``"raise"``.

    See Also
    --------
    median, mad, robust_z
    """
    scores = bgd.scores()
    center = median(scores)
    spread = mad(scores)
    _logger.debug("robust z: median=%r mad=%r over %d records", center, spread, len(scores))
    return bgd.with_scores(robust_z(scores, center, spread, degenerate=degenerate))


def summarize(bgd):
    """
    Summary statistics of a track's scores.

    Returns
    -------
    pandas.Series
        Series with index
        ``["Records", "Contigs", "Min", "Max", "Sum", "Mean", "Median", "MAD"]``.
        Statistics are NaN for an empty track.
    """
    index = ["Records", "Contigs", "Min", "Max", "Sum", "Mean", "Median", "MAD"]
    scores = bgd.scores()
    if len(scores) == 0:
        return _pandas.Series([0.0, 0.0] + [_numpy.nan] * 6, index=index)
    return _pandas.Series(
        [
            float(len(scores)),
            float(len(bgd.contigs())),
            float(scores.min()),
            float(scores.max()),
            float(scores.sum()),
            mean(scores),
            median(scores),
            mad(scores),
        ],
        index=index,
    )
