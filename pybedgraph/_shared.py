"""
Shared configuration and helpers for pybedgraph modules.

Thread-safety note:
``CONFIG`` is process-global and not synchronized for concurrent mutation.
Change it from a single controlling thread.
"""

import warnings

import numpy as _numpy
import pandas as _pandas

from ._errors import DegenerateTrackError

CONFIG = {
    'degenerate': 'raise',          # 'raise' or 'propagate' on zero sum / zero MAD
    'check_contig_order': True,     # Reject interleaved contigs when reading
    'mean_recompute_every': None,   # Rolling-mean drift correction period
    'debug': False,                 # CLI logs at DEBUG level, like -v
}

_DEGENERATE_POLICIES = ('raise', 'propagate')

COLUMNS = ['seqname', 'start', 'end', 'score']


def _degenerate_policy(degenerate=None):
    policy = CONFIG.get('degenerate', 'raise') if degenerate is None else degenerate
    if policy not in _DEGENERATE_POLICIES:
        raise ValueError(
            f"Invalid degenerate policy '{policy}'. Use 'raise' or 'propagate'."
        )
    return policy


def _handle_degenerate(message, degenerate=None):
    """Raise or warn about a zero divisor according to the degenerate policy."""
    if _degenerate_policy(degenerate) == 'raise':
        raise DegenerateTrackError(message)
    warnings.warn(f"{message}; result contains nan/inf", RuntimeWarning, stacklevel=3)


def _as_float_array(values):
    if isinstance(values, _pandas.Series):
        return values.to_numpy(dtype=float)
    return _numpy.asarray(values, dtype=float)
