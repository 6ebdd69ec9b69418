"""Distribution functions.

Each family follows the d/p/q/r convention (density, CDF, quantile, random
variates), broadcasts over vector arguments and returns floats for scalar
inputs:
- rescaled non-central t (the Sharpe ratio), with `sr` wrappers
- lambda-prime, the confidence distribution of a t non-centrality
- Hotelling T2 via its non-central F relation
- maximal Sharpe ratio, plus its confidence quantile and interval
"""

from .hotelling import check_hotelling_df, dT2, pT2, qT2, rT2
from .lambdap import plambdap, qlambdap, rlambdap
from .rescaled_t import LambdaPrimeParams, drt, dsr, prt, psr, qrt, qsr, rrt, rsr, sr_rescale
from .sropt import dsropt, psropt, qco_sropt, qsropt, rsropt, sropt_confint, sropt_ncp

__all__ = [
    # rescaled t
    "LambdaPrimeParams",
    "drt",
    "prt",
    "qrt",
    "rrt",
    "sr_rescale",
    "dsr",
    "psr",
    "qsr",
    "rsr",
    # lambda-prime
    "plambdap",
    "qlambdap",
    "rlambdap",
    # Hotelling
    "check_hotelling_df",
    "dT2",
    "pT2",
    "qT2",
    "rT2",
    # sropt
    "sropt_ncp",
    "dsropt",
    "psropt",
    "qsropt",
    "rsropt",
    "qco_sropt",
    "sropt_confint",
]
