import numpy as np
import pytest

from tracealign.core import Trace, TraceSet, SinWave, AlignmentResult, best_shifts, apply_alignment


def test_trace_from_samples_and_indexing():
    t = Trace.from_samples([(0.0, 1.0), (0.5, 2.0), (1.0, 4.0)])
    assert len(t) == 3
    assert t[1] == (0.5, 2.0)
    assert t.samples() == [(0.0, 1.0), (0.5, 2.0), (1.0, 4.0)]
    assert list(t.window(1, 3)) == [2.0, 4.0]
    sub = t[1:]
    assert isinstance(sub, Trace) and len(sub) == 2

def test_trace_rejects_mismatched_columns():
    with pytest.raises(ValueError):
        Trace([0.0, 1.0], [1.0])

def test_shift_x_values_rotates_times_only():
    t = Trace([0.0, 1.0, 2.0, 3.0], [10.0, 11.0, 12.0, 13.0])
    right = t.shift_x_values(1)
    assert list(right.times) == [3.0, 0.0, 1.0, 2.0]
    assert list(right.values) == [10.0, 11.0, 12.0, 13.0]
    left = t.shift_x_values(-1)
    assert list(left.times) == [1.0, 2.0, 3.0, 0.0]
    assert t.shift_x_values(4) == t
    # original untouched
    assert list(t.times) == [0.0, 1.0, 2.0, 3.0]

def test_trace_dict_roundtrip():
    t = Trace([0.0, 0.1], [1.5, -2.5])
    assert Trace.from_dict(t.to_dict()) == t

def test_trace_set_values_matrix_is_read_only():
    ts = TraceSet.from_values([[1, 2, 3], [4, 5, 6]])
    m = ts.values_matrix()
    assert m.shape == (2, 3)
    assert not m.flags.writeable
    assert ts.sample_count == 3

def test_trace_set_validate_lengths():
    ts = TraceSet([Trace.from_values([1, 2, 3]), Trace.from_values([1, 2])])
    with pytest.raises(ValueError):
        ts.validate()

def test_trace_set_from_samples_keeps_order():
    ts = TraceSet.from_samples([[(0, 1), (1, 2)], [(0, 9), (1, 8)]])
    assert len(ts) == 2
    assert ts[1][0] == (0.0, 9.0)
    assert TraceSet.from_dict(ts.to_dict())[1] == ts[1]


def test_sin_wave_generation():
    t = SinWave(sample_delta=0.5, amplitude=2.0, vertical_shift=1.0, samples=4).generate()
    assert list(t.times) == [0.0, 0.5, 1.0, 1.5]
    assert abs(t.values[0] - 1.0) < 1e-12
    assert abs(t.values[1] - (np.sin(0.5) * 2.0 + 1.0)) < 1e-12

def test_sin_wave_phase_shift_delays_signal():
    a = SinWave(sample_delta=0.1, amplitude=1.0, samples=50).generate()
    b = SinWave(sample_delta=0.1, phase_shift=3, amplitude=1.0, samples=50).generate()
    assert np.allclose(b.values[3:], a.values[:-3])


def test_best_shifts_picks_highest_then_smallest_shift():
    results = [
        AlignmentResult(1, -2, 0.91),
        AlignmentResult(1, 0, 0.97),
        AlignmentResult(1, 3, 0.97),
        AlignmentResult(2, 4, 0.80),
    ]
    best = best_shifts(results)
    assert best[1] == AlignmentResult(1, 0, 0.97)
    assert best[2].shift == 4

def test_apply_alignment_shifts_only_matched_traces():
    ts = TraceSet.from_values([[0, 1, 2, 3]] * 3)
    results = [AlignmentResult(1, 1, 0.99), AlignmentResult(0, 2, 0.99)]
    aligned = apply_alignment(ts, results, target_trace_index=0)
    assert aligned[0] == ts[0]
    assert list(aligned[1].times) == [3.0, 0.0, 1.0, 2.0]
    assert aligned[2] == ts[2]
    assert aligned[1] is not ts[1]
    assert list(ts[1].times) == [0.0, 1.0, 2.0, 3.0]
