"""Statistical inference on non-centrality parameters.

- t-statistic bias, standard errors and confidence intervals
- unbiased / MLE / KRS estimators of F, T2 and sropt non-centrality
"""

from .ncp import f_inference, f_ncp_krs, f_ncp_mle, f_ncp_unbiased, sropt_inference, t2_inference
from .tstat import t_bias, t_confint, t_se

__all__ = [
    # tstat
    "t_bias",
    "t_se",
    "t_confint",
    # ncp
    "f_ncp_unbiased",
    "f_ncp_mle",
    "f_ncp_krs",
    "f_inference",
    "t2_inference",
    "sropt_inference",
]
