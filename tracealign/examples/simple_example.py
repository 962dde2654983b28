"""
Simple TraceAlign example: three sine traces, two of them triggered late,
searched against a window of the first and printed as a report.
"""
from tracealign.core import SinWave, TraceSet, AlignmentSearch, SearchConfig, ReferenceWindow
from tracealign.reporting import format_text_report


def main() -> None:
    traces = TraceSet([
        SinWave(sample_delta=0.1, phase_shift=0, amplitude=1.0, samples=200).generate(),
        SinWave(sample_delta=0.1, phase_shift=3, amplitude=1.0, samples=200).generate(),
        SinWave(sample_delta=0.1, phase_shift=7, amplitude=2.5, vertical_shift=0.4, samples=200).generate(),
    ])
    window = ReferenceWindow(target_trace_index=0, start=60, end=100)
    search = AlignmentSearch(SearchConfig(max_distance=10, correlation_threshold=0.999))
    results = search.search(traces, window)

    print(format_text_report(results, search, window, n_samples=traces.sample_count,
                             best_only=True, title="TraceAlign Simple Example"))


if __name__ == "__main__":
    main()
