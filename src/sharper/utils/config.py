"""Configuration utilities.

Numerical searches in this package (bracket expansion, root finding, MLE
maximisation) are all bounded. Their caps and tolerances live here as frozen
dataclasses so a run can be reproduced from a single YAML snapshot.

Conventions:
- ``ope`` is "observations per epoch"; statistics are quoted in per-sqrt-epoch
  units (annualized when the epoch is a year).
- ``epoch`` is a free-form label used for presentation only.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Literal, Union

CIMethod = Literal["exact", "t", "Z", "F"]
SEMethod = Literal["t", "Lo", "exact"]
NCPType = Literal["KRS", "MLE", "unbiased"]


@dataclass(frozen=True)
class SearchConfig:
    """Caps and tolerances for bounded searches."""

    # brentq tolerances
    xtol: float = 1e-12
    rtol: float = 1e-12
    maxiter: int = 200

    # Bracket expansion: the step doubles each time, this many times at most
    max_doublings: int = 64

    # Bounded MLE maximisation
    mle_xatol: float = 1e-8
    mle_maxiter: int = 500


@dataclass(frozen=True)
class AnnualizationConfig:
    ope: float = 1.0
    epoch: str = "yr"


@dataclass(frozen=True)
class ReportConfig:
    level: float = 0.95
    ci_method: CIMethod = "exact"
    se_method: SEMethod = "t"
    inference_type: NCPType = "KRS"


@dataclass(frozen=True)
class SharpeRConfig:
    """Top-level configuration container."""

    search: SearchConfig = field(default_factory=SearchConfig)
    annualization: AnnualizationConfig = field(default_factory=AnnualizationConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    run_name: str = "base"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def deep_update(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively update nested dictionaries."""

    out = dict(base)
    for k, v in updates.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_update(out[k], v)
        else:
            out[k] = v
    return out


def validate_config(cfg: SharpeRConfig) -> None:
    """Basic sanity checks on caps, tolerances and report settings."""

    s = cfg.search
    if s.xtol <= 0 or s.rtol <= 0 or s.mle_xatol <= 0:
        raise ValueError("search tolerances must be positive")
    if s.maxiter <= 0 or s.mle_maxiter <= 0:
        raise ValueError("search iteration caps must be positive")
    if s.max_doublings <= 0:
        raise ValueError("max_doublings must be positive")
    if cfg.annualization.ope <= 0:
        raise ValueError("annualization.ope must be positive")
    if not (0.0 < cfg.report.level < 1.0):
        raise ValueError("report.level must be in (0,1)")
    if cfg.report.ci_method not in ("exact", "t", "Z", "F"):
        raise ValueError("report.ci_method must be one of exact, t, Z, F")
    if cfg.report.se_method not in ("t", "Lo", "exact"):
        raise ValueError("report.se_method must be one of t, Lo, exact")
    if cfg.report.inference_type not in ("KRS", "MLE", "unbiased"):
        raise ValueError("report.inference_type must be one of KRS, MLE, unbiased")


def config_from_dict(d: Dict[str, Any]) -> SharpeRConfig:
    cfg = SharpeRConfig(
        search=SearchConfig(**d.get("search", {})),
        annualization=AnnualizationConfig(**d.get("annualization", {})),
        report=ReportConfig(**d.get("report", {})),
        run_name=str(d.get("run_name", "base")),
    )
    validate_config(cfg)
    return cfg


def load_config(path: Union[str, Path], *, overrides: Dict[str, Any] | None = None) -> SharpeRConfig:
    """Load a YAML config, apply optional nested overrides and validate."""

    # Late import keeps the config module free of IO at import time.
    from sharper.utils.io import load_yaml

    d = load_yaml(path)
    if overrides:
        d = deep_update(d, overrides)
    return config_from_dict(d)


DEFAULT_SEARCH = SearchConfig()


__all__ = [
    "CIMethod",
    "SEMethod",
    "NCPType",
    "SearchConfig",
    "AnnualizationConfig",
    "ReportConfig",
    "SharpeRConfig",
    "DEFAULT_SEARCH",
    "deep_update",
    "validate_config",
    "config_from_dict",
    "load_config",
]
