from __future__ import annotations
from typing import Dict, Iterable

from tracealign.core.search import AlignmentResult
from tracealign.core.trace import TraceSet


def best_shifts(results: Iterable[AlignmentResult]) -> Dict[int, AlignmentResult]:
    """
    Pick the highest-scoring result for each trace.
    Ties go to the smaller |shift|, then to whichever result came first.
    """
    best: Dict[int, AlignmentResult] = {}
    for r in results:
        cur = best.get(r.trace_index)
        if (
            cur is None
            or r.correlation > cur.correlation
            or (r.correlation == cur.correlation and abs(r.shift) < abs(cur.shift))
        ):
            best[r.trace_index] = r
    return best


def apply_alignment(traces: TraceSet, results: Iterable[AlignmentResult], target_trace_index: int) -> TraceSet:
    """
    Build a new TraceSet with each trace's x-values shifted by its best result.

    The target trace and traces with no result are copied unchanged. The input set
    is not modified.
    """
    chosen = best_shifts(results)
    aligned = TraceSet()
    for i, trace in enumerate(traces):
        r = chosen.get(i)
        if i == target_trace_index or r is None:
            aligned.append(trace[:])
        else:
            aligned.append(trace.shift_x_values(r.shift))
    return aligned
