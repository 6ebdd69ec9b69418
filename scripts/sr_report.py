"""Sharpe ratio report for a CSV of returns.

- Loads a CSV of returns (one column per asset, optional date column)
- Loads configuration YAML (configs/default.yaml)
- Computes the Sharpe ratio of every column with standard errors and
  confidence intervals
- Computes the maximal Sharpe ratio over all columns with a confidence
  interval and a non-centrality based point estimate
- Saves tables (CSV), a JSON summary and the config snapshot to --out

Example
-------
python scripts/sr_report.py \
  --returns data/returns.csv \
  --date-col date \
  --out reports/sr
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from sharper.estimators import as_sr, sropt_from_returns, sropt_test
from sharper.reporting import sr_table, sropt_table
from sharper.units import infer_ope
from sharper.utils import (
    configure_logging,
    ensure_dir,
    get_logger,
    load_config,
    load_returns_csv,
    save_json,
    save_yaml,
    set_global_seed,
)

logger = get_logger("sr_report")


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Sharpe ratio and maximal Sharpe ratio report")

    p.add_argument(
        "--returns",
        type=str,
        required=True,
        help="Path to CSV of returns, one column per asset",
    )
    p.add_argument(
        "--date-col",
        type=str,
        default=None,
        help="Name of the date column; becomes a DatetimeIndex",
    )
    p.add_argument(
        "--config",
        type=str,
        default=str(Path(__file__).resolve().parents[1] / "configs" / "default.yaml"),
        help="Path to configuration YAML",
    )
    p.add_argument(
        "--out",
        type=str,
        default=str(Path(__file__).resolve().parents[1] / "reports" / "sr"),
        help="Output directory for tables",
    )
    p.add_argument(
        "--ope",
        type=float,
        default=None,
        help="Override annualization.ope (observations per epoch)",
    )
    p.add_argument(
        "--infer-ope",
        action="store_true",
        help="Infer observations per year from the date column",
    )
    p.add_argument(
        "--level",
        type=float,
        default=None,
        help="Override report.level (confidence level)",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for random draws, recorded in summary.json",
    )
    p.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level",
    )
    p.add_argument(
        "--log-json",
        action="store_true",
        help="Emit JSON log lines",
    )

    return p.parse_args()


def main() -> None:
    args = _parse_args()
    configure_logging(level=args.log_level, format_json=args.log_json)
    out_dir = ensure_dir(args.out)

    overrides: Dict[str, Any] = {}
    if args.ope is not None:
        overrides.setdefault("annualization", {})["ope"] = float(args.ope)
    if args.level is not None:
        overrides.setdefault("report", {})["level"] = float(args.level)
    cfg = load_config(args.config, overrides=overrides)

    if args.seed is not None:
        set_global_seed(int(args.seed))

    returns = load_returns_csv(args.returns, date_col=args.date_col)
    if args.infer_ope:
        if not isinstance(returns.index, pd.DatetimeIndex):
            raise SystemExit("--infer-ope needs --date-col")
        ope = infer_ope(returns.index)
    else:
        ope = cfg.annualization.ope
    epoch = cfg.annualization.epoch
    rep = cfg.report
    logger.info("loaded", path=args.returns, rows=len(returns), columns=list(returns.columns), ope=ope)

    srs = {str(col): as_sr(returns[col].to_numpy(dtype=float), ope=ope, na_rm=True, epoch=epoch) for col in returns}
    sr_tab = sr_table(srs, se_method=rep.se_method, level=rep.level, ci_method=rep.ci_method, search=cfg.search)

    summary: Dict[str, Any] = {"ope": ope, "epoch": epoch, "n_rows": int(len(returns))}
    if args.seed is not None:
        summary["seed"] = int(args.seed)
    zs = sropt_from_returns(returns.to_numpy(dtype=float), ope=ope, epoch=epoch)
    sropt_tab = sropt_table({"all": zs}, level=rep.level, inference_type=rep.inference_type, search=cfg.search)
    summary["sropt"] = {
        "value": zs.value,
        "df1": zs.df1,
        "df2": zs.df2,
        "T2": zs.to_T2(),
        "p_value": sropt_test(zs).p_value,
        "inference": zs.inference(rep.inference_type, search=cfg.search),
    }

    # -----------------
    # Persist artifacts
    # -----------------
    save_yaml(cfg.to_dict(), out_dir / "config_snapshot.yaml")
    sr_tab.to_csv(out_dir / "sr_table.csv")
    sropt_tab.to_csv(out_dir / "sropt_table.csv")
    summary["sr"] = {name: {"value": s.value, "df": s.df, "se": s.se(rep.se_method)} for name, s in srs.items()}
    save_json(summary, out_dir / "summary.json")

    logger.info("wrote", out_dir=str(out_dir))
    print(sr_tab.to_string())


if __name__ == "__main__":
    main()
