from .trace_io import load_csv, save_results, load_results, save_json
from .config_loader import load_config, build_from_config

__all__ = ["load_csv", "save_results", "load_results", "save_json", "load_config", "build_from_config"]
