"""Counts-per-million normalization."""

from ._shared import _handle_degenerate, _numpy

CPM_SCALE = 1_000_000.0


def get_cpm(bgd, degenerate=None):
    """
    Counts-per-million values of a track, without modifying it.

    Each score is divided by the sum of all scores of the track (across
    contigs) and multiplied by one million.

    Parameters
    ----------
    bgd : BedGraphData
        Input track.
    degenerate : {"raise", "propagate"} or None
        Behaviour when the scores sum to zero. Defaults to
        ``CONFIG['degenerate']``.

    Returns
    -------
    numpy.ndarray
        One CPM value per record, in store order.

    Raises
    ------
    DegenerateTrackError
        If the scores sum to zero (or the track is empty) and the policy is
        ``"raise"``.

    See Also
    --------
    to_cpm : Rewrite the scores of a track in place.
    cpm_track : Return a new track holding CPM scores.
    """
    scores = bgd.scores()
    total = scores.sum()
    if total == 0:
        _handle_degenerate("Scores sum to zero, CPM is undefined", degenerate)
    with _numpy.errstate(divide="ignore", invalid="ignore"):
        return scores / total * CPM_SCALE


def to_cpm(bgd, degenerate=None):
    """
    Rescale the scores of *bgd* to counts-per-million, in place.

    Unlike every other transform this mutates its argument. The same store
    is returned to allow chaining.

    Examples
    --------
    >>> import pybedgraph as pbg
    >>> bgd = pbg.BedGraphData.from_records([("c", 0, 5, 1.0), ("c", 5, 10, 3.0)])
    >>> _ = pbg.to_cpm(bgd)
    >>> bgd.scores().tolist()
    [250000.0, 750000.0]
    """
    bgd.data["score"] = get_cpm(bgd, degenerate=degenerate)
    return bgd


def cpm_track(bgd, degenerate=None):
    """Return a new track with CPM scores, leaving *bgd* untouched."""
    return bgd.with_scores(get_cpm(bgd, degenerate=degenerate))
