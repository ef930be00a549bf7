"""BedGraph records and the in-memory record store."""

from dataclasses import astuple as _astuple
from dataclasses import dataclass as _dataclass
from typing import NamedTuple as _NamedTuple

from ._errors import EmptyContigError, EmptyStoreError, FormatError
from ._shared import COLUMNS, _numpy, _pandas


@_dataclass
class BedGraphRecord:
    """A single ``seqname start end score`` line of a BedGraph track.

    The interval is half-open, ``[start, end)``. ``start < end`` is not
    enforced.

    Examples
    --------
    >>> rec = BedGraphRecord("chr1", 0, 5, 0.25)
    >>> str(rec)
    'chr1\\t0\\t5\\t0.25'
    """

    seqname: str
    start: int
    end: int
    score: float

    def __str__(self):
        return f"{self.seqname}\t{self.start}\t{self.end}\t{self.score!r}"

    def __iter__(self):
        return iter(_astuple(self))


class Interval(_NamedTuple):
    """A score-less half-open interval, as consumed by the stream merger."""

    seqname: str
    start: int
    end: int

    def __str__(self):
        return f"{self.seqname}\t{self.start}\t{self.end}"


def _empty_frame():
    return _pandas.DataFrame({
        "seqname": _pandas.Series([], dtype=object),
        "start": _pandas.Series([], dtype="int64"),
        "end": _pandas.Series([], dtype="int64"),
        "score": _pandas.Series([], dtype="float64"),
    })


def _normalize_frame(df):
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"BedGraph data is missing column(s): {', '.join(missing)}")
    if len(df) == 0:
        return _empty_frame()
    out = df[COLUMNS].reset_index(drop=True)
    out = out.astype({"seqname": str, "start": "int64", "end": "int64", "score": "float64"})
    return out


class BedGraphData:
    """Ordered, in-memory collection of BedGraph records.

    Records keep their insertion (file) order. Contigs are not stored but
    derived from the ``seqname`` column in first-occurrence order, and the
    records of one contig are expected to form a contiguous run.

    Every transform returns a new ``BedGraphData``, with the exception of
    :func:`~pybedgraph.normalize.to_cpm`, which rewrites scores in place.

    Parameters
    ----------
    data : pandas.DataFrame, optional
        Frame with columns ``seqname``, ``start``, ``end``, ``score``. Extra
        columns are dropped. The frame is copied.

    See Also
    --------
    BedGraphData.from_records : Build a store from records or tuples.
    pybedgraph.tracks.read_bedgraph : Read a store from a BedGraph file.

    Examples
    --------
    >>> bgd = BedGraphData.from_records([("chr1", 0, 5, 1.0), ("chr1", 5, 10, 3.0)])
    >>> len(bgd)
    2
    >>> bgd.resolution()
    5
    """

    def __init__(self, data=None):
        if data is None:
            self.data = _empty_frame()
        else:
            self.data = _normalize_frame(data.copy())

    @classmethod
    def from_records(cls, records):
        """
        Build a store from an iterable of records.

        Parameters
        ----------
        records : iterable
            ``BedGraphRecord`` objects, 4-tuples ``(seqname, start, end, score)``
            or dicts with those keys.

        Returns
        -------
        BedGraphData
        """
        rows = []
        for rec in records:
            if isinstance(rec, dict):
                rows.append(tuple(rec[c] for c in COLUMNS))
            else:
                row = tuple(rec)
                if len(row) != 4:
                    raise ValueError("Records must have 4 elements: seqname, start, end, score")
                rows.append(row)
        if not rows:
            return cls()
        return cls(_pandas.DataFrame(rows, columns=COLUMNS))

    @classmethod
    def _wrap(cls, df):
        # Internal constructor for frames already in canonical form.
        obj = cls.__new__(cls)
        obj.data = df
        return obj

    def __len__(self):
        return len(self.data)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._wrap(self.data.iloc[index].reset_index(drop=True))
        n = len(self.data)
        if index < 0:
            index += n
        if index < 0 or index >= n:
            raise IndexError(f"Record index out of range (store has {n} records)")
        seqname, start, end, score = self.data.iloc[index]
        return BedGraphRecord(str(seqname), int(start), int(end), float(score))

    def __iter__(self):
        for seqname, start, end, score in self.data.itertuples(index=False, name=None):
            yield BedGraphRecord(str(seqname), int(start), int(end), float(score))

    def __eq__(self, other):
        if not isinstance(other, BedGraphData):
            return NotImplemented
        return self.data.equals(other.data)

    def __repr__(self):
        return f"BedGraphData({len(self)} records, {len(self.contigs())} contigs)"

    def copy(self):
        return self._wrap(self.data.copy())

    def to_dataframe(self):
        """Return a copy of the backing DataFrame."""
        return self.data.copy()

    def scores(self):
        """Return the score column as a float64 array, in store order."""
        return self.data["score"].to_numpy(dtype=float, copy=True)

    def with_scores(self, scores):
        """Return a new store with the same intervals and replaced scores."""
        scores = _numpy.asarray(scores, dtype=float)
        if scores.shape != (len(self),):
            raise ValueError(
                f"Expected {len(self)} scores, got array of shape {scores.shape}"
            )
        df = self.data.copy()
        df["score"] = scores
        return self._wrap(df)

    def filter(self, seqname, start=0, end=None):
        """
        Keep records of one contig that lie within a range.

        A record is kept when its ``seqname`` equals *seqname*, its start is
        at least *start* and its end is at most *end*. Relative order is
        preserved.

        Parameters
        ----------
        seqname : str
            Contig name, matched exactly.
        start : int, default 0
            Lower bound on record starts.
        end : int or None, default None
            Upper bound on record ends. ``None`` means unbounded.

        Returns
        -------
        BedGraphData
            A new store, possibly empty.

        Examples
        --------
        >>> bgd = BedGraphData.from_records([("chr1", 0, 5, 1.0), ("chr2", 0, 5, 2.0)])
        >>> len(bgd.filter("chr2"))
        1
        """
        df = self.data
        mask = (df["seqname"] == seqname) & (df["start"] >= start)
        if end is not None:
            mask &= df["end"] <= end
        return self._wrap(df.loc[mask].reset_index(drop=True))

    def contigs(self):
        """Return distinct contig names in first-occurrence order."""
        return [str(s) for s in _pandas.unique(self.data["seqname"])]

    def get_max_end(self):
        """Return the greatest end coordinate in the store."""
        if len(self.data) == 0:
            raise EmptyStoreError("Cannot take the maximum end of an empty store")
        return int(self.data["end"].max())

    def contig_length(self, seqname):
        """
        Return the length of a contig as the greatest end of its records.

        Raises
        ------
        EmptyContigError
            If the store has no records for *seqname*.
        """
        contig = self.filter(seqname, 0, None)
        if len(contig) == 0:
            raise EmptyContigError(f"Contig '{seqname}' has no records")
        return contig.get_max_end()

    def contig_lengths(self):
        """Return a dict mapping every contig to its length."""
        return {ctg: self.contig_length(ctg) for ctg in self.contigs()}

    def resolution(self):
        """
        Return the bin width, inferred from the first two records.

        The width is ``record[1].start - record[0].start`` and is assumed to
        be uniform over the whole store.

        Raises
        ------
        EmptyStoreError
            If the store has fewer than 2 records.
        """
        if len(self.data) < 2:
            raise EmptyStoreError(
                f"Resolution needs at least 2 records, store has {len(self.data)}"
            )
        starts = self.data["start"]
        return int(starts.iloc[1]) - int(starts.iloc[0])

    def check_contig_order(self, source=None):
        """
        Verify that the records of every contig form one contiguous run.

        Raises
        ------
        FormatError
            If a contig reappears after another contig's records.
        """
        seqnames = self.data["seqname"].to_numpy()
        if len(seqnames) < 2:
            return
        # Positions where a new run starts; each contig may start exactly one run.
        run_starts = _numpy.flatnonzero(seqnames[1:] != seqnames[:-1]) + 1
        seen = {seqnames[0]}
        for pos in run_starts:
            name = seqnames[pos]
            if name in seen:
                raise FormatError(
                    f"Records of contig '{name}' are not contiguous",
                    source=source,
                    lineno=None,
                )
            seen.add(name)

    def get_padded_scores(self, pad, circular):
        """Scores padded by *pad* on each side; see :func:`pybedgraph.window.get_padded_scores`."""
        from .window import get_padded_scores
        return get_padded_scores(self, pad, circular)

    def roll_mean(self, window_size, circular=False, recompute_every=None):
        from .window import roll_mean
        return roll_mean(self, window_size, circular=circular, recompute_every=recompute_every)

    def roll_median(self, window_size, circular=False):
        from .window import roll_median
        return roll_median(self, window_size, circular=circular)

    def get_cpm(self, degenerate=None):
        from .normalize import get_cpm
        return get_cpm(self, degenerate=degenerate)

    def to_cpm(self, degenerate=None):
        """Rescale scores to counts-per-million in place and return self."""
        from .normalize import to_cpm
        return to_cpm(self, degenerate=degenerate)

    def robust_z(self, degenerate=None):
        from .stats import robust_z_track
        return robust_z_track(self, degenerate=degenerate)
