from __future__ import annotations
from typing import Protocol, Sequence

import numpy as np

ArrayLike = Sequence[float] | np.ndarray


def _is_flat(x: np.ndarray) -> bool:
    return bool(x.size) and bool(np.all(x == x[0]))


def correlate(reference: ArrayLike, candidate: ArrayLike) -> float:
    """
    Normalized cross-correlation of two equal-length windows.

    Both windows are mean-centered; the score is the dot product of the deviations
    divided by the product of their L2 norms. A flat window (zero norm) scores 0.0.
    """
    ref = np.asarray(reference, dtype=float)
    cand = np.asarray(candidate, dtype=float)
    if ref.shape != cand.shape:
        raise ValueError(f"Window lengths differ ({ref.size} != {cand.size})")
    if ref.size == 0:
        return 0.0

    # A constant window has zero norm; rounding in the mean must not turn that into noise.
    if _is_flat(ref) or _is_flat(cand):
        return 0.0
    ref_dev = ref - ref.mean()
    cand_dev = cand - cand.mean()
    ref_mag = float(np.sqrt(np.sum(ref_dev * ref_dev)))
    cand_mag = float(np.sqrt(np.sum(cand_dev * cand_dev)))
    if ref_mag == 0.0 or cand_mag == 0.0:
        return 0.0
    return float(np.sum(ref_dev * cand_dev)) / (ref_mag * cand_mag)


def correlate_many(reference: ArrayLike, candidates: np.ndarray) -> np.ndarray:
    """
    Score `reference` against every row of a 2-D `candidates` array at once.
    Row i of the result equals correlate(reference, candidates[i]).
    """
    ref = np.asarray(reference, dtype=float)
    cands = np.asarray(candidates, dtype=float)
    if cands.ndim != 2:
        raise ValueError("candidates must be a 2-D array (n_windows, window_length)")
    if cands.shape[1] != ref.size:
        raise ValueError(f"Window lengths differ ({ref.size} != {cands.shape[1]})")
    if cands.shape[0] == 0 or ref.size == 0:
        return np.zeros(cands.shape[0], dtype=float)

    ref_dev = ref - ref.mean()
    cand_dev = cands - cands.mean(axis=1, keepdims=True)
    ref_mag = np.sqrt(np.sum(ref_dev * ref_dev))
    cand_mag = np.sqrt(np.sum(cand_dev * cand_dev, axis=1))
    numer = cand_dev @ ref_dev
    denom = ref_mag * cand_mag

    scores = np.zeros(cands.shape[0], dtype=float)
    if _is_flat(ref):
        return scores
    flat_rows = cands.max(axis=1) == cands.min(axis=1)
    ok = (denom != 0.0) & ~flat_rows
    scores[ok] = numer[ok] / denom[ok]
    return scores


class Correlator(Protocol):
    def score(self, reference: ArrayLike, candidate: ArrayLike) -> float: ...
    def score_many(self, reference: ArrayLike, candidates: np.ndarray) -> np.ndarray: ...


class DirectCorrelator:
    """Direct windowed correlation; the reference scorer for the alignment search."""

    @staticmethod
    def score(reference: ArrayLike, candidate: ArrayLike) -> float:
        return correlate(reference, candidate)

    @staticmethod
    def score_many(reference: ArrayLike, candidates: np.ndarray) -> np.ndarray:
        return correlate_many(reference, candidates)
