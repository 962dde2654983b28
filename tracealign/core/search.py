from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging
import math
import time
from typing import List, Optional, Sequence, Tuple

import numpy as np

from tracealign.core.correlation import Correlator, DirectCorrelator
from tracealign.core.errors import ContractViolation
from tracealign.core.trace import Sample, Trace, TraceSet

logger = logging.getLogger(__name__)

SHIFT_MODES = ("sample", "trace_index")


@dataclass(frozen=True)
class ReferenceWindow:
    target_trace_index: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def half(self) -> int:
        return math.ceil(self.length / 2)

    @property
    def center(self) -> int:
        return self.start + self.half

    @classmethod
    def from_range(cls, target_trace_index: int, sample_range: range | Tuple[int, int]) -> "ReferenceWindow":
        if isinstance(sample_range, range):
            if sample_range.step != 1:
                raise ContractViolation("reference_range", "reference range must be contiguous (step 1)")
            return cls(int(target_trace_index), sample_range.start, sample_range.stop)
        start, end = sample_range
        return cls(int(target_trace_index), int(start), int(end))


@dataclass(frozen=True)
class SearchConfig:
    max_distance: int
    correlation_threshold: float
    max_workers: Optional[int] = None
    shift_mode: str = "sample"


@dataclass(frozen=True)
class AlignmentResult:
    trace_index: int
    shift: int
    correlation: float


def candidate_centers(window: ReferenceWindow, max_distance: int, n_samples: int) -> range:
    """
    Inclusive slide range of candidate window centers.

    The centers step from `max_distance` before the reference center to `max_distance`
    after it, clamped so the window [c - half, c - half + length) stays inside the trace.
    """
    half = window.half
    lo = half
    hi = n_samples - window.length + half
    first = min(max(window.center - max_distance, lo), hi)
    last = min(max(window.center + max_distance, lo), hi)
    return range(first, last + 1)


def _check_preconditions(traces: TraceSet, window: ReferenceWindow, config: SearchConfig) -> None:
    if len(traces) == 0:
        raise ContractViolation("empty_trace_set", "trace set contains no traces")
    lengths = {len(t) for t in traces}
    if len(lengths) > 1:
        raise ContractViolation(
            "trace_length",
            f"all traces must share a sample count, got {sorted(lengths)}",
            {"lengths": sorted(lengths)},
        )
    if not 0 <= window.target_trace_index < len(traces):
        raise ContractViolation(
            "target_index",
            f"target trace index {window.target_trace_index} out of range for {len(traces)} traces",
            {"target": window.target_trace_index, "n_traces": len(traces)},
        )
    n_samples = len(traces[window.target_trace_index])
    if window.start < 0 or window.end <= window.start:
        raise ContractViolation(
            "reference_range",
            f"reference range [{window.start}, {window.end}) is empty or negative",
            {"start": window.start, "end": window.end},
        )
    if window.end > n_samples:
        raise ContractViolation(
            "reference_range",
            f"reference range [{window.start}, {window.end}) exceeds trace length {n_samples}",
            {"start": window.start, "end": window.end, "n_samples": n_samples},
        )
    if config.max_distance < 0 or config.max_distance >= n_samples:
        raise ContractViolation(
            "max_distance",
            f"max_distance {config.max_distance} must be in [0, {n_samples})",
            {"max_distance": config.max_distance, "n_samples": n_samples},
        )
    try:
        finite = math.isfinite(config.correlation_threshold)
    except TypeError as e:
        raise ContractViolation(
            "threshold",
            f"correlation threshold must be a number, got {config.correlation_threshold!r}",
        ) from e
    if not finite:
        raise ContractViolation(
            "threshold",
            f"correlation threshold must be finite, got {config.correlation_threshold}",
        )
    if config.shift_mode not in SHIFT_MODES:
        raise ContractViolation(
            "shift_mode",
            f"shift_mode must be one of {SHIFT_MODES}, got {config.shift_mode!r}",
        )
    if config.max_workers is not None and config.max_workers < 1:
        raise ContractViolation("max_workers", f"max_workers must be >= 1, got {config.max_workers}")


def _as_trace_set(traces: Sequence[Trace] | Sequence[Sequence[Sample]]) -> TraceSet:
    """Accept Trace objects or raw (time, value) sample sequences, one per trace."""
    converted: List[Trace] = []
    for i, item in enumerate(traces):
        if isinstance(item, Trace):
            converted.append(item)
            continue
        try:
            converted.append(Trace.from_samples(item))
        except (TypeError, ValueError) as e:
            raise ContractViolation(
                "trace_set",
                f"trace {i} is neither a Trace nor a sequence of (time, value) samples",
                {"trace": i},
            ) from e
    return TraceSet(converted)


class AlignmentSearch:
    """
    Slides a reference window over every other trace and reports each
    (trace, shift, score) whose score clears the configured threshold.

    Candidates are scored in a thread pool; each task returns its own list and the
    lists are concatenated in candidate order once all tasks have joined.
    """

    def __init__(self, config: SearchConfig, correlator: Optional[Correlator] = None) -> None:
        self.config = config
        self.correlator = correlator or DirectCorrelator()

    def search(self, traces: TraceSet | Sequence[Trace] | Sequence[Sequence[Sample]], window: ReferenceWindow) -> List[AlignmentResult]:
        if not isinstance(traces, TraceSet):
            traces = _as_trace_set(traces)
        _check_preconditions(traces, window, self.config)

        started = time.perf_counter()
        matrix = traces.values_matrix()
        target = matrix[window.target_trace_index, window.start:window.end]
        others = np.array(
            [i for i in range(matrix.shape[0]) if i != window.target_trace_index],
            dtype=int,
        )
        centers = candidate_centers(window, self.config.max_distance, matrix.shape[1])

        logger.debug(
            "Scoring %d candidate centers [%d, %d] against %d traces",
            len(centers), centers.start, centers.stop - 1, others.size,
        )

        if others.size == 0:
            chunks: List[List[AlignmentResult]] = []
        else:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as ex:
                futures = [
                    ex.submit(self._score_candidate, matrix, target, others, window, c)
                    for c in centers
                ]
                chunks = [f.result() for f in futures]

        results = [r for chunk in chunks for r in chunk]
        results.sort(key=lambda r: r.trace_index)

        elapsed = time.perf_counter() - started
        logger.info(
            "Static align elapsed %.3fs: %d candidates, %d matches above %.3f",
            elapsed, len(centers), len(results), self.config.correlation_threshold,
        )
        return results

    def _score_candidate(
        self,
        matrix: np.ndarray,
        target: np.ndarray,
        others: np.ndarray,
        window: ReferenceWindow,
        center: int,
    ) -> List[AlignmentResult]:
        lo = center - window.half
        candidates = matrix[others, lo:lo + window.length]
        scores = self.correlator.score_many(target, candidates)

        found: List[AlignmentResult] = []
        for trace_index, score in zip(others, scores):
            if score >= self.config.correlation_threshold:
                found.append(AlignmentResult(
                    trace_index=int(trace_index),
                    shift=self._shift(int(trace_index), center, window),
                    correlation=float(score),
                ))
        return found

    def _shift(self, trace_index: int, center: int, window: ReferenceWindow) -> int:
        if self.config.shift_mode == "trace_index":
            return trace_index - window.target_trace_index
        return center - window.center


def static_align(
    target_trace_index: int,
    traces: TraceSet | Sequence[Trace] | Sequence[Sequence[Sample]],
    reference_range: range | Tuple[int, int],
    max_distance: int,
    correlation_threshold: float,
    *,
    max_workers: Optional[int] = None,
    shift_mode: str = "sample",
    correlator: Optional[Correlator] = None,
) -> List[AlignmentResult]:
    """
    Find every trace/shift whose window correlates with the reference window of
    `traces[target_trace_index]` at or above `correlation_threshold`.

    Returns results sorted by trace index. Raises ContractViolation for bad inputs.
    """
    window = ReferenceWindow.from_range(target_trace_index, reference_range)
    config = SearchConfig(
        max_distance=int(max_distance),
        correlation_threshold=float(correlation_threshold),
        max_workers=max_workers,
        shift_mode=shift_mode,
    )
    return AlignmentSearch(config, correlator=correlator).search(traces, window)
