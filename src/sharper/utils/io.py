"""sharper.utils.io

File helpers for the report script: return panels in, tables and summaries
out. Config snapshots are YAML, summaries JSON. Writers create the parent
directory of their target.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np
import pandas as pd
import yaml

PathLike = Union[str, Path]


def ensure_dir(path: PathLike) -> Path:
    """Create and return the directory ``path``, or its parent when it names a file."""

    target = Path(path)
    out = target.parent if target.suffix else target
    out.mkdir(parents=True, exist_ok=True)
    return out


def load_yaml(path: PathLike) -> Dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as fh:
        doc = yaml.safe_load(fh)
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ValueError(f"expected a mapping at the top of {path}, got {type(doc).__name__}")
    return doc


def save_yaml(obj: Any, path: PathLike) -> None:
    target = Path(path)
    ensure_dir(target)
    with target.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(obj, fh, sort_keys=False)


def _to_builtin(x: Any) -> Any:
    # statistics come back as numpy scalars and arrays
    if isinstance(x, np.generic):
        return x.item()
    if isinstance(x, np.ndarray):
        return x.tolist()
    raise TypeError(f"cannot serialise {type(x).__name__} to JSON")


def save_json(obj: Any, path: PathLike, *, indent: int = 2) -> None:
    target = Path(path)
    ensure_dir(target)
    with target.open("w", encoding="utf-8") as fh:
        json.dump(obj, fh, indent=indent, sort_keys=False, default=_to_builtin)


def load_returns_csv(path: PathLike, *, date_col: str | None = None) -> pd.DataFrame:
    """Read a return panel; when ``date_col`` is given it becomes a DatetimeIndex."""

    p = Path(path)
    df = pd.read_csv(p)
    if date_col is not None:
        if date_col not in df.columns:
            raise KeyError(f"date column {date_col!r} not found in {p}")
        df[date_col] = pd.to_datetime(df[date_col])
        df = df.set_index(date_col).sort_index()
    return df


__all__ = [
    "PathLike",
    "ensure_dir",
    "load_yaml",
    "save_yaml",
    "save_json",
    "load_returns_csv",
]
