"""sharper.utils.seed

Reproducibility helpers.

Random variate generators in :mod:`sharper.distributions` accept an optional
``numpy.random.Generator``. Scripts and tests seed through this module so a
run can be reproduced from a single integer.
"""

from __future__ import annotations

import os
import random
from typing import Optional, Union

import numpy as np

__all__ = ["set_global_seed", "as_generator"]

SeedLike = Union[None, int, np.integer, np.random.Generator]


def set_global_seed(seed: int, *, deterministic_hash: bool = True) -> None:
    """Seed ``random``, the legacy NumPy RNG and unseeded Generators.

    Samplers called without ``rng`` build their Generator through
    :func:`as_generator`, which reads ``SHARPER_SEED``; this sets it.

    Parameters
    ----------
    seed:
        Integer seed.
    deterministic_hash:
        If True, sets ``PYTHONHASHSEED`` for subprocesses.
    """

    if not isinstance(seed, (int, np.integer)):
        raise TypeError("seed must be an int")

    seed_int = int(seed)

    if deterministic_hash:
        os.environ.setdefault("PYTHONHASHSEED", str(seed_int))

    os.environ["SHARPER_SEED"] = str(seed_int)
    random.seed(seed_int)
    np.random.seed(seed_int)


def as_generator(rng: SeedLike = None) -> np.random.Generator:
    """Coerce ``None``, an int seed or a Generator into a Generator."""

    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        return np.random.default_rng(_get_env_seed())
    if isinstance(rng, (int, np.integer)):
        return np.random.default_rng(int(rng))
    raise TypeError("rng must be None, an int seed or a numpy Generator")


def _get_env_seed(name: str = "SHARPER_SEED") -> Optional[int]:
    """Parse an environment seed, if present."""

    s = os.environ.get(name)
    if s is None or str(s).strip() == "":
        return None
    try:
        return int(s)
    except ValueError:
        return None
