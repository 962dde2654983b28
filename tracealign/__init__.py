"""
TraceAlign: static alignment of multi-channel time-series acquisitions.

This package provides:
- A trace data model (channels of (time, value) samples, ordered in a trace set)
- A normalized windowed correlation engine
- A parallel alignment search that slides a reference window across every trace
  and reports the (trace, shift, score) triples above a threshold
- Helpers to re-align traces from search results, plus config, reporting and a CLI

Acquisitions that were not triggered in perfect synchrony can be lined up by
shifting each trace by its best-scoring shift before display or further analysis.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
