from __future__ import annotations
from typing import Any, Dict, Optional, Tuple
import json
from pathlib import Path

from tracealign.core.correlation import Correlator, DirectCorrelator
from tracealign.core.errors import ContractViolation
from tracealign.core.search import AlignmentSearch, ReferenceWindow, SearchConfig, SHIFT_MODES

DEFAULT_THRESHOLD = 0.9


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        text = f.read()
    suffix = p.suffix.lower()
    if suffix in (".yaml", ".yml"):
        try:
            import yaml  # type: ignore
        except Exception as e:
            raise ImportError("PyYAML is required to load YAML config files. Install with `pip install pyyaml`.") from e
        return yaml.safe_load(text) or {}
    # default to JSON
    return json.loads(text or "{}")


def _make_window(cfg: Dict[str, Any]) -> ReferenceWindow:
    if "target" not in cfg:
        raise ContractViolation("target_index", "config is missing 'target'")
    rng = cfg.get("range")
    if not isinstance(rng, (list, tuple)) or len(rng) != 2:
        raise ContractViolation("reference_range", "config 'range' must be a [start, end] pair")
    return ReferenceWindow(int(cfg["target"]), int(rng[0]), int(rng[1]))


def _make_correlator(spec: Optional[Dict[str, Any]]) -> Correlator:
    if not spec:
        return DirectCorrelator()
    t = str(spec.get("type", "direct")).lower()
    if t in ("direct", "pearson"):
        return DirectCorrelator()
    raise ContractViolation("correlator", f"unknown correlator type {t!r}")


def _make_search_config(cfg: Dict[str, Any]) -> SearchConfig:
    shift_mode = str(cfg.get("shift_mode", "sample")).lower()
    if shift_mode not in SHIFT_MODES:
        raise ContractViolation("shift_mode", f"unknown shift_mode {shift_mode!r}")
    max_workers = cfg.get("max_workers")
    return SearchConfig(
        max_distance=int(cfg.get("max_distance", 0)),
        correlation_threshold=float(cfg.get("threshold", DEFAULT_THRESHOLD)),
        max_workers=int(max_workers) if max_workers is not None else None,
        shift_mode=shift_mode,
    )


def build_from_config(cfg: Dict[str, Any]) -> Tuple[AlignmentSearch, ReferenceWindow]:
    window = _make_window(cfg)
    config = _make_search_config(cfg)
    correlator = _make_correlator(cfg.get("correlator"))
    return AlignmentSearch(config, correlator=correlator), window
