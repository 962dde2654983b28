from __future__ import annotations
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Tuple, overload

import numpy as np

Sample = Tuple[float, float]


class Trace:
    """
    One channel's ordered samples. Index position is the sample number; times are
    informational and never enter the correlation math.
    """

    def __init__(self, times: Iterable[float] | np.ndarray, values: Iterable[float] | np.ndarray) -> None:
        self.times = np.asarray(times if isinstance(times, np.ndarray) else list(times), dtype=float)
        self.values = np.asarray(values if isinstance(values, np.ndarray) else list(values), dtype=float)
        if self.times.ndim != 1 or self.values.ndim != 1:
            raise ValueError("Trace times and values must be one-dimensional")
        if self.times.shape != self.values.shape:
            raise ValueError(
                f"Trace times and values differ in length ({self.times.size} != {self.values.size})"
            )

    @classmethod
    def from_samples(cls, samples: Iterable[Sample]) -> "Trace":
        pairs = [(float(t), float(v)) for t, v in samples]
        return cls([t for t, _ in pairs], [v for _, v in pairs])

    @classmethod
    def from_values(cls, values: Sequence[float] | np.ndarray, sample_delta: float = 1.0) -> "Trace":
        vals = np.asarray(values, dtype=float)
        return cls(np.arange(vals.size, dtype=float) * sample_delta, vals)

    def __len__(self) -> int:
        return int(self.values.size)

    @overload
    def __getitem__(self, index: int) -> Sample: ...
    @overload
    def __getitem__(self, index: slice) -> "Trace": ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Trace(self.times[index].copy(), self.values[index].copy())
        return float(self.times[index]), float(self.values[index])

    def __iter__(self) -> Iterator[Sample]:
        for t, v in zip(self.times, self.values):
            yield float(t), float(v)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return np.array_equal(self.times, other.times) and np.array_equal(self.values, other.values)

    def __repr__(self) -> str:
        return f"Trace(samples={len(self)})"

    def samples(self) -> List[Sample]:
        return list(self)

    def window(self, start: int, end: int) -> np.ndarray:
        """Values of samples [start, end)."""
        return self.values[start:end]

    def shift_x_values(self, shift: int) -> "Trace":
        """
        Rotate the time column by `shift` positions, leaving values in place.

        The sample at index i takes the time formerly held by index (i - shift) mod n,
        so a positive shift moves every value earlier on the time axis. Feeding a
        search shift in here lines a delayed trace up with the reference.
        """
        n = len(self)
        if n == 0 or shift % n == 0:
            return Trace(self.times.copy(), self.values.copy())
        return Trace(np.roll(self.times, shift), self.values.copy())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "times": [float(t) for t in self.times],
            "values": [float(v) for v in self.values],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Trace":
        return Trace(
            [float(t) for t in d.get("times", [])],
            [float(v) for v in d.get("values", [])],
        )


class TraceSet:
    """Ordered collection of traces; list position is the trace index used in results."""

    def __init__(self, traces: Iterable[Trace] | None = None) -> None:
        self.traces: List[Trace] = list(traces or [])

    @classmethod
    def from_samples(cls, channels: Iterable[Iterable[Sample]]) -> "TraceSet":
        return cls(Trace.from_samples(ch) for ch in channels)

    @classmethod
    def from_values(cls, rows: Iterable[Sequence[float]], sample_delta: float = 1.0) -> "TraceSet":
        return cls(Trace.from_values(r, sample_delta=sample_delta) for r in rows)

    def __len__(self) -> int:
        return len(self.traces)

    def __getitem__(self, index: int) -> Trace:
        return self.traces[index]

    def __iter__(self) -> Iterator[Trace]:
        return iter(self.traces)

    def append(self, trace: Trace) -> None:
        self.traces.append(trace)

    @property
    def sample_count(self) -> int:
        return len(self.traces[0]) if self.traces else 0

    def validate(self) -> None:
        """Raise ValueError unless every trace has the same sample count."""
        lengths = {len(t) for t in self.traces}
        if len(lengths) > 1:
            raise ValueError(f"Traces have differing sample counts: {sorted(lengths)}")

    def values_matrix(self) -> np.ndarray:
        """
        Stack all trace values into a read-only (n_traces, n_samples) array.
        Traces must already share a sample count.
        """
        if not self.traces:
            return np.empty((0, 0), dtype=float)
        self.validate()
        matrix = np.vstack([t.values for t in self.traces]).astype(float, copy=False)
        matrix.flags.writeable = False
        return matrix

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": "1",
            "traces": [t.to_dict() for t in self.traces],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "TraceSet":
        return TraceSet(Trace.from_dict(item) for item in d.get("traces", []))
