"""Utility subpackage.

Public exports:
- Config dataclasses and validation utilities
- YAML/JSON/CSV IO convenience helpers
- Seed utilities for deterministic sampling
- structlog configuration
"""

from .config import (
    DEFAULT_SEARCH,
    AnnualizationConfig,
    CIMethod,
    NCPType,
    ReportConfig,
    SEMethod,
    SearchConfig,
    SharpeRConfig,
    config_from_dict,
    deep_update,
    load_config,
    validate_config,
)
from .io import ensure_dir, load_returns_csv, load_yaml, save_json, save_yaml
from .log import configure_logging, get_logger
from .seed import as_generator, set_global_seed

__all__ = [
    # config
    "SharpeRConfig",
    "SearchConfig",
    "AnnualizationConfig",
    "ReportConfig",
    "DEFAULT_SEARCH",
    # literals
    "CIMethod",
    "SEMethod",
    "NCPType",
    # utils
    "deep_update",
    "validate_config",
    "config_from_dict",
    "load_config",
    # io
    "ensure_dir",
    "load_yaml",
    "save_yaml",
    "save_json",
    "load_returns_csv",
    # logging
    "configure_logging",
    "get_logger",
    # seed
    "set_global_seed",
    "as_generator",
]
