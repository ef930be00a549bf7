"""Error types raised by pybedgraph."""


class BedGraphError(Exception):
    """Base class for all pybedgraph errors."""


class FormatError(BedGraphError, ValueError):
    """Raised when a line cannot be parsed into the expected fields.

    Attributes
    ----------
    source : str or None
        Name of the input the line came from.
    lineno : int or None
        1-based line number of the offending line.
    """

    def __init__(self, message, source=None, lineno=None):
        if lineno is not None:
            message = f"{source or '<stream>'}:{lineno}: {message}"
        elif source is not None:
            message = f"{source}: {message}"
        super().__init__(message)
        self.source = source
        self.lineno = lineno


class InvalidWindowError(BedGraphError, ValueError):
    """Raised when a rolling window size is not an odd positive integer."""


class EmptyStoreError(BedGraphError, ValueError):
    """Raised when an operation needs more records than the store holds."""


class EmptyContigError(EmptyStoreError):
    """Raised when a contig has no records in the store."""


class DegenerateTrackError(BedGraphError, ArithmeticError):
    """Raised on a zero score total (CPM) or a zero MAD (robust z-score)."""
