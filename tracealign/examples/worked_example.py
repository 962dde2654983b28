import numpy as np

from tracealign.core import Trace, TraceSet, static_align, apply_alignment, best_shifts
from tracealign.log import setup_logging
from tracealign.reporting import format_text_report


def main():
    setup_logging("INFO")

    # A pulse-like acquisition repeated on 16 channels with random trigger jitter and noise
    rng = np.random.default_rng(7)
    n = 1000
    t = np.arange(n) * 1e-6
    base = np.exp(-((np.arange(n) - 400) / 25.0) ** 2) - 0.6 * np.exp(-((np.arange(n) - 470) / 15.0) ** 2)

    jitter = rng.integers(-20, 21, size=16)
    jitter[0] = 0
    traces = TraceSet(
        Trace(t, np.roll(base, int(j)) + rng.normal(0.0, 0.01, n))
        for j in jitter
    )

    # Reference window around the pulse on channel 0; allow +/- 30 samples of slide
    results = static_align(0, traces, range(350, 500), max_distance=30, correlation_threshold=0.95)
    print(format_text_report(results, best_only=True, title="TraceAlign Worked Example"))

    best = best_shifts(results)
    for i, j in enumerate(jitter[1:], start=1):
        found = best[i].shift if i in best else None
        print(f"trace {i:2d}: injected {int(j):+d}, found {found}")

    aligned = apply_alignment(traces, results, target_trace_index=0)
    print(f"re-aligned {len(aligned)} traces")


if __name__ == "__main__":
    main()
