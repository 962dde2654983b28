from __future__ import annotations
from typing import Any, Dict, List, Optional

from tracealign.core.realign import best_shifts
from tracealign.core.search import AlignmentResult, AlignmentSearch, ReferenceWindow, candidate_centers


def build_result_rows(results: List[AlignmentResult], *, best_only: bool = False) -> List[Dict[str, Any]]:
    """
    Turn search results into display-friendly rows.

    `best` marks the highest-scoring entry for its trace. With best_only=True only
    those entries are returned, still ordered by trace index.
    """
    best = best_shifts(results)
    rows: List[Dict[str, Any]] = []
    for r in results:
        is_best = best.get(r.trace_index) is r
        if best_only and not is_best:
            continue
        rows.append(
            {
                "index": len(rows) + 1,
                "trace_index": r.trace_index,
                "shift": r.shift,
                "correlation": float(r.correlation),
                "best": is_best,
            }
        )
    return rows


def format_results_table(
    rows: List[Dict[str, Any]],
    *,
    max_rows: int = 50,
    col_widths: Optional[Dict[str, int]] = None,
) -> str:
    """
    Pretty-print a text table of result rows.

    Columns:
      IDX | TRACE | SHIFT | CORRELATION | BEST
    """
    widths = {
        "idx": 4,
        "trace": 6,
        "shift": 7,
        "corr": 12,
        "best": 5,
    }
    if col_widths:
        widths.update(col_widths)

    header = (
        f"{'IDX':>{widths['idx']}} | {'TRACE':>{widths['trace']}} | {'SHIFT':>{widths['shift']}} | "
        f"{'CORRELATION':>{widths['corr']}} | {'BEST':^{widths['best']}}"
    )
    sep = "-" * len(header)

    out_lines = [header, sep]
    shown = 0
    for r in rows:
        if shown >= max_rows:
            break
        best_s = "*" if r.get("best") else "·"
        out_lines.append(
            f"{r['index']:>{widths['idx']}} | {r['trace_index']:>{widths['trace']}} | "
            f"{r['shift']:>+{widths['shift']}d} | {r['correlation']:>{widths['corr']}.6f} | "
            f"{best_s:^{widths['best']}}"
        )
        shown += 1

    if shown < len(rows):
        out_lines.append(f"... ({len(rows) - shown} more rows)")
    if not rows:
        out_lines.append("(no traces above threshold)")
    return "\n".join(out_lines)


def _search_parameters(search: AlignmentSearch, window: ReferenceWindow, n_samples: Optional[int]) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "target": window.target_trace_index,
        "range": [window.start, window.end],
        "max_distance": search.config.max_distance,
        "threshold": search.config.correlation_threshold,
        "shift_mode": search.config.shift_mode,
        "max_workers": search.config.max_workers,
    }
    if n_samples is not None:
        centers = candidate_centers(window, search.config.max_distance, n_samples)
        out["candidates"] = len(centers)
        out["shift_span"] = [centers.start - window.center, centers.stop - 1 - window.center]
    return out


def build_json_report(
    results: List[AlignmentResult],
    *,
    search: Optional[AlignmentSearch] = None,
    window: Optional[ReferenceWindow] = None,
    n_samples: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Create a JSON-serializable report: every result, the best entry per trace,
    and the search parameters when the search and window are given.
    """
    best = best_shifts(results)
    report: Dict[str, Any] = {
        "match_count": len(results),
        "traces_matched": len(best),
        "results": [
            {"trace_index": r.trace_index, "shift": r.shift, "correlation": float(r.correlation)}
            for r in results
        ],
        "best": {
            str(i): {"shift": r.shift, "correlation": float(r.correlation)}
            for i, r in sorted(best.items())
        },
    }
    if search is not None and window is not None:
        report["parameters"] = _search_parameters(search, window, n_samples)
    return report


def format_text_report(
    results: List[AlignmentResult],
    search: Optional[AlignmentSearch] = None,
    window: Optional[ReferenceWindow] = None,
    *,
    n_samples: Optional[int] = None,
    best_only: bool = False,
    max_rows: int = 50,
    title: Optional[str] = None,
) -> str:
    """
    Build a human-friendly text report with the search parameters (if given),
    match counts and the result table (first max_rows).
    """
    lines: List[str] = []
    hdr = title or "TraceAlign Report"
    lines.append("=" * 60)
    lines.append(hdr)
    lines.append("=" * 60)

    if search is not None and window is not None:
        params = _search_parameters(search, window, n_samples)
        lines.append(f"Target trace:   {params['target']}")
        lines.append(f"Reference:      [{params['range'][0]}, {params['range'][1]})")
        lines.append(f"Max distance:   {params['max_distance']}")
        lines.append(f"Threshold:      {params['threshold']:.3f}")
        lines.append(f"Shift mode:     {params['shift_mode']}")
        if "candidates" in params:
            lo, hi = params["shift_span"]
            lines.append(f"Candidates:     {params['candidates']} (shifts {lo:+d}..{hi:+d})")
        lines.append("")

    best = best_shifts(results)
    lines.append(f"Matches:        {len(results)}")
    lines.append(f"Traces matched: {len(best)}")
    lines.append("")
    lines.append("Best entries only:" if best_only else "Results:")
    lines.append(format_results_table(build_result_rows(results, best_only=best_only), max_rows=max_rows))
    lines.append("=" * 60)
    return "\n".join(lines)
