from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest

from sharper.distributions.rescaled_t import rrt
from sharper.utils.config import (
    SearchConfig,
    SharpeRConfig,
    config_from_dict,
    deep_update,
    load_config,
    validate_config,
)
from sharper.utils.io import load_yaml, save_json, save_yaml
from sharper.utils.seed import as_generator, set_global_seed

DEFAULT_YAML = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"


def test_default_yaml_loads() -> None:
    cfg = load_config(DEFAULT_YAML)
    assert cfg.annualization.ope == 252
    assert cfg.report.ci_method == "exact"
    assert cfg.search == SearchConfig()


def test_overrides_are_nested() -> None:
    cfg = load_config(DEFAULT_YAML, overrides={"report": {"level": 0.9}})
    assert cfg.report.level == 0.9
    assert cfg.report.inference_type == "KRS"


def test_deep_update_does_not_mutate() -> None:
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    out = deep_update(base, {"a": {"b": 10}})
    assert out == {"a": {"b": 10, "c": 2}, "d": 3}
    assert base["a"]["b"] == 1


def test_empty_dict_gives_defaults() -> None:
    assert config_from_dict({}) == SharpeRConfig()


@pytest.mark.parametrize(
    "d",
    [
        {"report": {"level": 1.5}},
        {"report": {"ci_method": "bayes"}},
        {"report": {"inference_type": "median"}},
        {"search": {"max_doublings": 0}},
        {"search": {"xtol": -1.0}},
        {"annualization": {"ope": 0.0}},
    ],
)
def test_validation(d) -> None:
    with pytest.raises(ValueError):
        config_from_dict(d)


def test_snapshot_round_trip(tmp_path: Path) -> None:
    cfg = config_from_dict({"run_name": "snap", "annualization": {"ope": 12.0, "epoch": "yr"}})
    save_yaml(cfg.to_dict(), tmp_path / "snap" / "config.yaml")
    back = config_from_dict(load_yaml(tmp_path / "snap" / "config.yaml"))
    assert back == cfg
    validate_config(back)


def test_env_seed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHARPER_SEED", "42")
    a = as_generator().standard_normal(3)
    b = as_generator(42).standard_normal(3)
    assert (a == b).all()
    with pytest.raises(TypeError):
        as_generator("seed")


def test_global_seed_reaches_samplers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SHARPER_SEED", "")
    monkeypatch.setenv("PYTHONHASHSEED", "0")
    set_global_seed(1)
    a = rrt(3, 10, 0.5, 0.0)
    b = rrt(3, 10, 0.5, 0.0)
    assert np.array_equal(a, b)
    set_global_seed(2)
    assert not np.array_equal(rrt(3, 10, 0.5, 0.0), a)


def test_save_json_accepts_numpy_values(tmp_path: Path) -> None:
    out = tmp_path / "run" / "summary.json"
    save_json({"df": np.int64(99), "value": np.float64(0.5), "w": np.array([1.0, 2.0])}, out)
    assert json.loads(out.read_text(encoding="utf-8")) == {"df": 99, "value": 0.5, "w": [1.0, 2.0]}
