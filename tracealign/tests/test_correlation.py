import numpy as np
import pytest

from tracealign.core.correlation import correlate, correlate_many, DirectCorrelator


def test_self_correlation_is_one():
    a = [0.3, 1.7, -2.0, 4.1, 0.0, 2.2]
    assert abs(correlate(a, a) - 1.0) < 1e-12

def test_negated_window_is_minus_one():
    a = np.array([0.3, 1.7, -2.0, 4.1, 0.0, 2.2])
    assert abs(correlate(a, -a) + 1.0) < 1e-12

def test_scale_and_offset_invariance():
    a = np.array([1.0, 3.0, 2.0, 5.0, 4.0])
    assert abs(correlate(a, 10.0 * a - 7.0) - 1.0) < 1e-12

def test_constant_window_scores_exactly_zero():
    a = [1.0, 2.0, 3.0]
    assert correlate(a, [5.0, 5.0, 5.0]) == 0.0
    assert correlate([5.0, 5.0, 5.0], a) == 0.0
    # mean of 0.1s is not exactly 0.1 in floating point
    assert correlate(a, [0.1, 0.1, 0.1]) == 0.0

def test_unequal_lengths_fail_fast():
    with pytest.raises(ValueError):
        correlate([1.0, 2.0, 3.0], [1.0, 2.0])

def test_correlate_many_matches_pairwise():
    rng = np.random.default_rng(0)
    ref = rng.normal(size=16)
    cands = rng.normal(size=(5, 16))
    cands[2] = 3.0  # flat row
    scores = correlate_many(ref, cands)
    assert scores.shape == (5,)
    for i in range(5):
        assert abs(scores[i] - correlate(ref, cands[i])) < 1e-12
    assert scores[2] == 0.0

def test_correlate_many_flat_reference():
    scores = correlate_many([2.0, 2.0, 2.0], np.array([[1.0, 2.0, 3.0], [3.0, 1.0, 0.0]]))
    assert np.all(scores == 0.0)

def test_correlate_many_rejects_bad_shapes():
    with pytest.raises(ValueError):
        correlate_many([1.0, 2.0, 3.0], np.array([[1.0, 2.0]]))
    with pytest.raises(ValueError):
        correlate_many([1.0, 2.0, 3.0], np.array([1.0, 2.0, 3.0]))

def test_direct_correlator_delegates():
    c = DirectCorrelator()
    a = [1.0, 0.0, 2.0, 5.0]
    assert c.score(a, a) == correlate(a, a)
    assert np.allclose(c.score_many(a, np.array([a, a[::-1]])), correlate_many(a, np.array([a, a[::-1]])))
