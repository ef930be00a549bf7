"""Reading and writing BedGraph and interval text files."""

import bz2
import gzip
import io
import logging as _logging
import lzma
import sys
from contextlib import contextmanager
from pathlib import Path

import pandas as pd

from ._errors import FormatError
from ._shared import CONFIG, COLUMNS
from .records import BedGraphData, Interval

_logger = _logging.getLogger(__name__)

_SKIP_PREFIXES = ("#", "track", "browser")


def _is_std_stream(target):
    return target is None or (isinstance(target, str) and target == "-")


def _open_text_auto(path, mode="r"):
    lower = str(path).lower()
    if lower.endswith(".gz"):
        return io.TextIOWrapper(gzip.open(path, mode + "b"), encoding="utf-8")
    if lower.endswith(".bz2"):
        return io.TextIOWrapper(bz2.open(path, mode + "b"), encoding="utf-8")
    if lower.endswith((".xz", ".lzma")):
        return io.TextIOWrapper(lzma.open(path, mode + "b"), encoding="utf-8")
    return open(path, mode, encoding="utf-8")


@contextmanager
def _text_source(source):
    """Yield ``(stream, name)`` for a path, ``"-"``/None (stdin) or an open stream."""
    if _is_std_stream(source):
        yield sys.stdin, "<stdin>"
    elif isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(path)
        stream = _open_text_auto(path)
        try:
            yield stream, str(path)
        finally:
            stream.close()
    else:
        yield source, getattr(source, "name", "<stream>")


@contextmanager
def _text_sink(sink):
    if _is_std_stream(sink):
        yield sys.stdout
        sys.stdout.flush()
    elif isinstance(sink, (str, Path)):
        stream = _open_text_auto(Path(sink), "w")
        try:
            yield stream
        finally:
            stream.close()
    else:
        yield sink


def _parse_coord(text, what, name, lineno):
    try:
        value = int(text)
    except ValueError:
        raise FormatError(f"{what} '{text}' is not an integer", name, lineno) from None
    if value < 0:
        raise FormatError(f"{what} '{text}' is negative", name, lineno)
    return value


def _data_lines(stream):
    for lineno, raw in enumerate(stream, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip() or line.startswith(_SKIP_PREFIXES):
            continue
        yield lineno, line


def read_bedgraph(source=None, check_order=None):
    """
    Read a BedGraph track into memory.

    Each data line must have exactly four tab-separated fields:
    ``seqname``, ``start``, ``end`` and ``score``. Blank lines and lines
    starting with ``#``, ``track`` or ``browser`` are skipped. Compressed
    files (``.gz``, ``.bz2``, ``.xz``) are decompressed transparently.

    Parameters
    ----------
    source : str, Path, file-like or None
        Path to the file, ``"-"`` or ``None`` for standard input, or an open
        text stream.
    check_order : bool or None
        Reject tracks whose contigs are interleaved. Defaults to
        ``CONFIG['check_contig_order']``.

    Returns
    -------
    BedGraphData
        Records in file order.

    Raises
    ------
    FileNotFoundError
        If *source* is a path that does not exist.
    FormatError
        If any line is malformed. No partial store is returned.

    See Also
    --------
    write_bedgraph : Write a store back to text.
    read_intervals : Lazily read 3-column interval files.

    Examples
    --------
    >>> import pybedgraph as pbg
    >>> bgd = pbg.read_bedgraph("tests/data/small.bedgraph")  # doctest: +SKIP
    """
    if check_order is None:
        check_order = CONFIG.get("check_contig_order", True)

    seqnames, starts, ends, scores = [], [], [], []
    with _text_source(source) as (stream, name):
        for lineno, line in _data_lines(stream):
            fields = line.split("\t")
            if len(fields) != 4:
                raise FormatError(
                    f"expected 4 tab-separated fields, found {len(fields)}", name, lineno
                )
            seqname, start, end, score = fields
            if not seqname:
                raise FormatError("empty seqname", name, lineno)
            starts.append(_parse_coord(start, "start", name, lineno))
            ends.append(_parse_coord(end, "end", name, lineno))
            try:
                scores.append(float(score))
            except ValueError:
                raise FormatError(f"score '{score}' is not a number", name, lineno) from None
            seqnames.append(seqname)

    _logger.debug("Read %d records from %s", len(seqnames), name)
    bgd = BedGraphData(pd.DataFrame(
        {"seqname": seqnames, "start": starts, "end": ends, "score": scores},
        columns=COLUMNS,
    ))
    if check_order:
        bgd.check_contig_order(source=name)
    return bgd


def write_bedgraph(bgd, sink=None):
    """
    Write a store as BedGraph text, one record per line, without a header.

    Parameters
    ----------
    bgd : BedGraphData or iterable of BedGraphRecord
        Records to write.
    sink : str, Path, file-like or None
        Output path, ``"-"`` or ``None`` for standard output, or an open text
        stream.

    Returns
    -------
    int
        Number of records written.
    """
    n = 0
    with _text_sink(sink) as out:
        for rec in bgd:
            out.write(f"{rec}\n")
            n += 1
    return n


def read_intervals(source=None):
    """
    Lazily read ``seqname start end`` intervals.

    Lines need at least three tab-separated fields; extra fields (for example
    a BedGraph score) are ignored. Lines are parsed one at a time, so the
    whole input is never held in memory.

    Parameters
    ----------
    source : str, Path, file-like or None
        Path, ``"-"`` or ``None`` for standard input, or an open text stream.

    Yields
    ------
    Interval

    Raises
    ------
    FormatError
        On the first malformed line. Intervals already yielded stay yielded.
    """
    with _text_source(source) as (stream, name):
        yield from _iter_intervals(stream, name)


def _iter_intervals(stream, name):
    for lineno, line in _data_lines(stream):
        fields = line.split("\t")
        if len(fields) < 3:
            raise FormatError(
                f"expected at least 3 tab-separated fields, found {len(fields)}",
                name,
                lineno,
            )
        if not fields[0]:
            raise FormatError("empty seqname", name, lineno)
        yield Interval(
            fields[0],
            _parse_coord(fields[1], "start", name, lineno),
            _parse_coord(fields[2], "end", name, lineno),
        )


def write_intervals(intervals, sink=None):
    """Write ``seqname start end`` lines; return the number written."""
    n = 0
    with _text_sink(sink) as out:
        for iv in intervals:
            seqname, start, end = tuple(iv)[:3]
            out.write(f"{seqname}\t{start}\t{end}\n")
            n += 1
    return n
