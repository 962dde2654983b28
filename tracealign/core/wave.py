from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from tracealign.core.trace import Trace


@dataclass
class SinWave:
    """
    Parameters of a sampled sine wave.

    value[i] = sin((i - phase_shift) * sample_delta) * amplitude + vertical_shift
    time[i]  = i * sample_delta
    """
    sample_delta: float = 0.0
    phase_shift: float = 0.0
    vertical_shift: float = 0.0
    amplitude: float = 0.0
    samples: int = 0

    def generate(self) -> Trace:
        idx = np.arange(max(self.samples, 0), dtype=float)
        times = idx * self.sample_delta
        values = np.sin((idx - self.phase_shift) * self.sample_delta) * self.amplitude + self.vertical_shift
        return Trace(times, values)
