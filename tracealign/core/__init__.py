from .trace import Trace, TraceSet
from .correlation import correlate, correlate_many, Correlator, DirectCorrelator
from .errors import ContractViolation
from .search import (
    ReferenceWindow,
    SearchConfig,
    AlignmentResult,
    AlignmentSearch,
    candidate_centers,
    static_align,
)
from .realign import best_shifts, apply_alignment
from .wave import SinWave

__all__ = [
    "Trace",
    "TraceSet",
    "correlate",
    "correlate_many",
    "Correlator",
    "DirectCorrelator",
    "ContractViolation",
    "ReferenceWindow",
    "SearchConfig",
    "AlignmentResult",
    "AlignmentSearch",
    "candidate_centers",
    "static_align",
    "best_shifts",
    "apply_alignment",
    "SinWave",
]
