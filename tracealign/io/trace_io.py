from __future__ import annotations
import json
from typing import Any, Dict, Iterable, List
from pathlib import Path

import numpy as np

from tracealign.core.search import AlignmentResult
from tracealign.core.trace import Trace, TraceSet


def load_csv(path: str | Path, delimiter: str = ",") -> TraceSet:
    """
    Read a header-less CSV where column 0 is the sample time and every further
    column is one trace. Returns one Trace per value column, in column order.
    """
    p = Path(path)
    data = np.loadtxt(p, delimiter=delimiter, dtype=float, ndmin=2)
    if data.size == 0:
        return TraceSet()
    if data.shape[1] < 2:
        raise ValueError(f"{p}: expected a time column and at least one trace column")
    times = data[:, 0]
    return TraceSet(Trace(times.copy(), data[:, col].copy()) for col in range(1, data.shape[1]))


def results_to_list(results: Iterable[AlignmentResult]) -> List[Dict[str, Any]]:
    return [
        {"trace_index": r.trace_index, "shift": r.shift, "correlation": float(r.correlation)}
        for r in results
    ]


def results_from_list(items: Iterable[Dict[str, Any]]) -> List[AlignmentResult]:
    return [
        AlignmentResult(
            trace_index=int(item["trace_index"]),
            shift=int(item["shift"]),
            correlation=float(item["correlation"]),
        )
        for item in items
    ]


def save_results(path: str | Path, results: Iterable[AlignmentResult]) -> None:
    save_json(path, {"schema_version": "1", "results": results_to_list(results)})


def load_results(path: str | Path) -> List[AlignmentResult]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "results" in data:
        return results_from_list(data["results"])
    if isinstance(data, list):
        return results_from_list(data)
    raise ValueError("Unrecognized results JSON format")


def save_json(path: str | Path, obj: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2)
