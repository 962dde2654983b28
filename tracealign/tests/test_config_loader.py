import json
from pathlib import Path

import pytest

from tracealign.io import load_config, build_from_config
from tracealign.core import ContractViolation, DirectCorrelator, TraceSet


def test_build_from_json_config(tmp_path: Path):
    cfg = {
        "target": 0,
        "range": [2, 6],
        "max_distance": 1,
        "threshold": 0.95,
        "max_workers": 2,
        "shift_mode": "sample",
        "correlator": {"type": "direct"},
    }
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    loaded = load_config(cfg_path)
    search, window = build_from_config(loaded)
    assert (window.target_trace_index, window.start, window.end) == (0, 2, 6)
    assert search.config.max_distance == 1
    assert search.config.correlation_threshold == 0.95
    assert search.config.max_workers == 2

    traces = TraceSet.from_values([list(range(8))] * 3)
    results = search.search(traces, window)
    assert {r.trace_index for r in results} == {1, 2}

def test_config_defaults():
    search, window = build_from_config({"target": 1, "range": [0, 4]})
    assert search.config.max_distance == 0
    assert search.config.correlation_threshold == 0.9
    assert search.config.max_workers is None
    assert search.config.shift_mode == "sample"

def test_config_missing_fields():
    with pytest.raises(ContractViolation):
        build_from_config({"range": [0, 4]})
    with pytest.raises(ContractViolation):
        build_from_config({"target": 0, "range": [4]})
    with pytest.raises(ContractViolation):
        build_from_config({"target": 0, "range": [0, 4], "shift_mode": "seconds"})

def test_empty_json_config_file(tmp_path: Path):
    p = tmp_path / "empty.json"
    p.write_text("", encoding="utf-8")
    assert load_config(p) == {}

def test_build_from_yaml_config(tmp_path: Path):
    pytest.importorskip("yaml")
    p = tmp_path / "config.yaml"
    p.write_text("target: 2\nrange: [10, 20]\nmax_distance: 5\nthreshold: 0.8\nshift_mode: trace_index\n", encoding="utf-8")
    search, window = build_from_config(load_config(p))
    assert window.target_trace_index == 2
    assert search.config.shift_mode == "trace_index"
    assert search.config.correlation_threshold == 0.8

def test_config_correlator_type():
    search, _ = build_from_config({"target": 0, "range": [0, 4], "correlator": {"type": "direct"}})
    assert isinstance(search.correlator, DirectCorrelator)
    with pytest.raises(ContractViolation) as exc:
        build_from_config({"target": 0, "range": [0, 4], "correlator": {"type": "fft"}})
    assert exc.value.precondition == "correlator"
