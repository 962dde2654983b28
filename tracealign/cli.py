from __future__ import annotations
import argparse
import logging
from typing import Any, Dict, List, Optional

from tracealign.core.errors import ContractViolation
from tracealign.core.search import AlignmentSearch, ReferenceWindow, SearchConfig, SHIFT_MODES
from tracealign.io import load_csv, load_config, build_from_config, save_json
from tracealign.log import setup_logging
from tracealign.reporting import format_text_report, build_json_report
from tracealign import __version__

logger = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_IO = 3
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tracealign", description="TraceAlign CLI")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, choices=LOG_LEVELS,
                        help="Logging level (default: WARNING)")
    parser.add_argument("--log-json", action="store_true", help="Emit log records as JSON lines")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_align = sub.add_parser("align", help="Search for shifted matches of a reference window")
    p_align.add_argument("--traces", required=True, help="Path to trace CSV (time column + one column per trace)")
    p_align.add_argument("--target", type=int, required=True, help="Index of the reference trace")
    p_align.add_argument("--range", type=int, nargs=2, required=True, metavar=("START", "END"),
                         help="Reference sample range [START, END)")
    p_align.add_argument("--max-distance", type=int, default=0, help="Maximum shift in samples")
    p_align.add_argument("--threshold", type=float, default=0.9, help="Minimum correlation to report")
    p_align.add_argument("--workers", type=int, default=None, help="Thread pool size")
    p_align.add_argument("--shift-mode", choices=SHIFT_MODES, default="sample")
    p_align.add_argument("--best-only", action="store_true", help="Show only the best entry per trace")
    p_align.add_argument("--out", required=False, help="Path to write JSON report")

    sub.add_parser("version", help="Show TraceAlign version and exit")

    p_eval = sub.add_parser("evaluate", help="Run a search described by a config file (JSON or YAML)")
    p_eval.add_argument("--traces", required=True, help="Path to trace CSV")
    p_eval.add_argument("--config", required=True, help="Path to configuration file (JSON/YAML)")
    p_eval.add_argument("--best-only", action="store_true", help="Show only the best entry per trace")
    p_eval.add_argument("--out", required=False, help="Path to write JSON report")
    return parser


def _run(search: AlignmentSearch, window: ReferenceWindow, traces_path: str, out: Optional[str], best_only: bool) -> None:
    traces = load_csv(traces_path)
    results = search.search(traces, window)
    n_samples = traces.sample_count

    if out:
        report: Dict[str, Any] = build_json_report(results, search=search, window=window, n_samples=n_samples)
        save_json(out, report)
    else:
        print(format_text_report(results, search, window, n_samples=n_samples, best_only=best_only))


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, json_format=args.log_json)

    if args.cmd == "version":
        print(__version__)
        return 0

    try:
        if args.cmd == "align":
            config = SearchConfig(
                max_distance=args.max_distance,
                correlation_threshold=args.threshold,
                max_workers=args.workers,
                shift_mode=args.shift_mode,
            )
            window = ReferenceWindow(args.target, args.range[0], args.range[1])
            _run(AlignmentSearch(config), window, args.traces, args.out, args.best_only)

        if args.cmd == "evaluate":
            cfg = load_config(args.config)
            search, window = build_from_config(cfg)
            _run(search, window, args.traces, args.out, args.best_only)
    except ContractViolation as e:
        logger.error("Invalid search request: %s", e, extra={"precondition": e.precondition})
        return EXIT_USAGE
    except (OSError, ValueError) as e:
        logger.error("Could not read input: %s", e)
        return EXIT_IO
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
