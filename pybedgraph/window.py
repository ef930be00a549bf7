"""Rolling statistics over contigs with circular or edge padding."""

import logging as _logging
import numbers

from numpy.lib.stride_tricks import sliding_window_view

from ._errors import EmptyStoreError, InvalidWindowError
from ._shared import CONFIG, _as_float_array, _numpy, _pandas
from .records import BedGraphData

_logger = _logging.getLogger(__name__)

_STATS = ("mean", "median")


def _validate_window(window_size):
    if isinstance(window_size, bool) or not isinstance(window_size, numbers.Integral):
        raise InvalidWindowError(f"Window size must be an integer, got {window_size!r}")
    if window_size < 1 or window_size % 2 == 0:
        raise InvalidWindowError(
            f"Window size must be an odd positive number, got {window_size}"
        )
    return int(window_size)


def _validate_recompute_every(recompute_every):
    if recompute_every is None:
        return None
    if (isinstance(recompute_every, bool)
            or not isinstance(recompute_every, numbers.Integral)
            or recompute_every < 1):
        raise InvalidWindowError(
            f"recompute_every must be a positive integer, got {recompute_every!r}"
        )
    return int(recompute_every)


def get_padded_scores(scores, pad, circular):
    """
    Extend a score sequence by *pad* values on each side.

    With ``circular=True`` the sequence wraps around: the last *pad* scores
    are prepended and the first *pad* scores appended. Otherwise the first
    and last scores are replicated *pad* times.

    Parameters
    ----------
    scores : BedGraphData or array-like of float
        Scores of a single contig, in position order.
    pad : int
        Number of values added on each side.
    circular : bool
        Wrap around the contig instead of replicating its edges.

    Returns
    -------
    numpy.ndarray
        Array of length ``len(scores) + 2 * pad``.

    Raises
    ------
    EmptyStoreError
        If *scores* is empty.

    Examples
    --------
    >>> get_padded_scores([1.0, 2.0, 3.0], 1, circular=True)
    array([3., 1., 2., 3., 1.])
    >>> get_padded_scores([1.0, 2.0, 3.0], 1, circular=False)
    array([1., 1., 2., 3., 3.])
    """
    if isinstance(scores, BedGraphData):
        scores = scores.scores()
    else:
        scores = _as_float_array(scores)
    if pad < 0:
        raise ValueError(f"pad must be non-negative, got {pad}")
    n = len(scores)
    if n == 0:
        raise EmptyStoreError("Cannot pad an empty score sequence")
    if pad == 0:
        return scores.copy()
    if circular:
        # Modular indices reproduce scores[n-pad:] ++ scores ++ scores[:pad]
        # and keep wrapping when the pad exceeds the contig.
        idx = _numpy.arange(-pad, n + pad)
        return _numpy.take(scores, idx, mode="wrap")
    return _numpy.pad(scores, pad, mode="edge")


def rolling_mean_values(scores, window_size, circular, recompute_every=None):
    """
    Rolling mean of one contig's scores using an incremental update.

    The first window is averaged directly. Every later window reuses the
    previous mean: ``mean + (incoming - outgoing) / window_size``, where
    *outgoing* is the first value of the previous window and *incoming* the
    last value of the current one. This costs O(1) per position regardless
    of the window size.

    Floating-point error accumulates along the recurrence. Passing
    *recompute_every* restarts it from a freshly summed window every that
    many positions.

    Parameters
    ----------
    scores : array-like of float
        Scores of a single contig.
    window_size : int
        Odd window width.
    circular : bool
        Padding policy, see :func:`get_padded_scores`.
    recompute_every : int or None
        Drift-correction period. ``None`` keeps the pure recurrence.

    Returns
    -------
    numpy.ndarray
        One mean per input position.
    """
    window_size = _validate_window(window_size)
    recompute_every = _validate_recompute_every(recompute_every)
    pad = (window_size - 1) // 2
    padded = get_padded_scores(scores, pad, circular).tolist()
    n = len(padded) - 2 * pad
    win_f = float(window_size)

    out = _numpy.empty(n, dtype=float)
    mean = None
    prev_first = 0.0
    for i in range(n):
        if mean is None or (recompute_every and i % recompute_every == 0):
            mean = sum(padded[i:i + window_size]) / win_f
        else:
            mean = mean + (padded[i + window_size - 1] - prev_first) / win_f
        prev_first = padded[i]
        out[i] = mean
    return out


def rolling_median_values(scores, window_size, circular):
    """
    Rolling median of one contig's scores.

    Each window is sorted independently and its middle element taken. The
    window size is odd, so no averaging is needed.

    Returns
    -------
    numpy.ndarray
        One median per input position.
    """
    window_size = _validate_window(window_size)
    pad = (window_size - 1) // 2
    padded = get_padded_scores(scores, pad, circular)
    windows = sliding_window_view(padded, window_size)
    return _numpy.sort(windows, axis=1)[:, window_size // 2]


def roll(bgd, window_size, circular=False, stat="mean", recompute_every=None):
    """
    Compute a rolling statistic for every contig of a track.

    Contigs are processed independently, in the order returned by
    :meth:`BedGraphData.contigs`, so windows never span two contigs. Output
    records reuse each contig's ``(start, end)`` pairs with the statistic as
    the new score, and the per-contig results are concatenated into one
    store.

    Parameters
    ----------
    bgd : BedGraphData
        Input track.
    window_size : int
        Number of positions per window. Must be odd so the window has an
        unambiguous center.
    circular : bool, default False
        Wrap windows around each contig (circular genomes, plasmids) instead
        of replicating the first and last score.
    stat : {"mean", "median"}, default "mean"
        Statistic to compute.
    recompute_every : int or None, optional
        Drift-correction period for ``stat="mean"``. Defaults to
        ``CONFIG['mean_recompute_every']``.

    Returns
    -------
    BedGraphData
        New store with one record per input record.

    Raises
    ------
    InvalidWindowError
        If *window_size* is even or not positive, or *recompute_every* is
        not a positive integer. Raised before any contig is processed.
    ValueError
        If *stat* is not supported.

    See Also
    --------
    roll_mean, roll_median, get_padded_scores

    Examples
    --------
    >>> import pybedgraph as pbg
    >>> bgd = pbg.read_bedgraph("tests/data/small.bedgraph")  # doctest: +SKIP
    >>> pbg.roll(bgd, 3, circular=True).scores()  # doctest: +SKIP
    """
    window_size = _validate_window(window_size)
    if stat not in _STATS:
        raise ValueError(f"Invalid statistic '{stat}'. Use 'mean' or 'median'.")
    if recompute_every is None:
        recompute_every = CONFIG.get("mean_recompute_every")
    recompute_every = _validate_recompute_every(recompute_every)

    parts = []
    for contig in bgd.contigs():
        contig_bgd = bgd.filter(contig, 0, None)
        scores = contig_bgd.scores()
        if stat == "mean":
            values = rolling_mean_values(scores, window_size, circular, recompute_every)
        else:
            values = rolling_median_values(scores, window_size, circular)
        _logger.debug(
            "rolling %s over %s: %d records, window %d, circular=%s",
            stat, contig, len(scores), window_size, circular,
        )
        df = contig_bgd.data.copy()
        df["score"] = values
        parts.append(df)

    if not parts:
        return BedGraphData()
    return BedGraphData._wrap(_pandas.concat(parts, ignore_index=True))


def roll_mean(bgd, window_size, circular=False, recompute_every=None):
    """Rolling mean per contig; see :func:`roll`."""
    return roll(bgd, window_size, circular=circular, stat="mean",
                recompute_every=recompute_every)


def roll_median(bgd, window_size, circular=False):
    """Rolling median per contig; see :func:`roll`."""
    return roll(bgd, window_size, circular=circular, stat="median")
