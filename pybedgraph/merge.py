"""Single-pass merge of touching intervals into contiguous regions."""

import logging as _logging

from .records import Interval
from .tracks import _iter_intervals, _text_sink, _text_source

_logger = _logging.getLogger(__name__)


class StreamMerger:
    """
    Merge a stream of intervals into contiguous regions in O(1) memory.

    The merger holds at most one open region. For each incoming interval:

    - with no open region, the interval opens one;
    - on a different contig, the open region is emitted and the interval
      opens a new one;
    - when the interval starts exactly at the open region's end, the region
      is extended to the interval's end;
    - otherwise (a gap, or an overlap) the open region is emitted and the
      interval opens a new one.

    Regions are passed to *emit* as soon as they are closed. Call
    :meth:`close` at the end of the stream to flush the last region.

    Parameters
    ----------
    emit : callable
        Called with one :class:`Interval` per merged region.

    Examples
    --------
    >>> out = []
    >>> merger = StreamMerger(out.append)
    >>> for iv in [("chr1", 0, 5), ("chr1", 5, 10), ("chr1", 20, 25)]:
    ...     merger.feed(iv)
    >>> merger.close()
    >>> [tuple(r) for r in out]
    [('chr1', 0, 10), ('chr1', 20, 25)]
    """

    def __init__(self, emit):
        self._emit = emit
        self._open = None
        self.n_emitted = 0

    @property
    def open_region(self):
        """The region currently being extended, or None."""
        if self._open is None:
            return None
        return Interval(*self._open)

    def _flush(self):
        self._emit(Interval(*self._open))
        self.n_emitted += 1
        self._open = None

    def feed(self, interval):
        seqname, start, end = tuple(interval)[:3]
        if self._open is None:
            self._open = [seqname, start, end]
        elif seqname != self._open[0]:
            self._flush()
            self._open = [seqname, start, end]
        elif start == self._open[2]:
            self._open[2] = end
        else:
            self._flush()
            self._open = [seqname, start, end]

    def close(self):
        if self._open is not None:
            self._flush()


def merge_intervals(intervals):
    """
    Generator form of :class:`StreamMerger`.

    Parameters
    ----------
    intervals : iterable
        ``(seqname, start, end)`` tuples, :class:`Interval` objects or
        records with at least those three leading fields.

    Yields
    ------
    Interval
        Merged regions, as soon as each one is closed.

    Examples
    --------
    >>> ivs = [("chr1", 0, 5), ("chr1", 5, 10), ("chr1", 20, 25), ("chr2", 0, 5)]
    >>> [tuple(r) for r in merge_intervals(ivs)]
    [('chr1', 0, 10), ('chr1', 20, 25), ('chr2', 0, 5)]
    """
    pending = []
    merger = StreamMerger(pending.append)
    for iv in intervals:
        merger.feed(iv)
        if pending:
            yield from pending
            pending.clear()
    merger.close()
    yield from pending


def merge_stream(source=None, sink=None):
    """
    Merge touching intervals from a text source into a text sink.

    Input lines need at least ``seqname``, ``start`` and ``end`` tab-separated
    fields; further fields are ignored. Each merged region is written as a
    ``seqname\\tstart\\tend`` line as soon as it is closed, so arbitrarily
    large inputs are processed with constant memory.

    Parameters
    ----------
    source : str, Path, file-like or None
        Input path, ``"-"`` or ``None`` for standard input, or a text stream.
    sink : str, Path, file-like or None
        Output path, ``"-"`` or ``None`` for standard output, or a text stream.

    Returns
    -------
    int
        Number of regions written.

    Raises
    ------
    FileNotFoundError
        If *source* is a path that does not exist. The sink is left untouched.
    FormatError
        On a malformed input line. Regions closed before that line have
        already been written.
    """
    with _text_source(source) as (stream, name), _text_sink(sink) as out:
        merger = StreamMerger(lambda region: out.write(f"{region}\n"))
        for iv in _iter_intervals(stream, name):
            merger.feed(iv)
        merger.close()
    _logger.debug("merged stream into %d regions", merger.n_emitted)
    return merger.n_emitted
