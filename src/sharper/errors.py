"""sharper.errors

Error taxonomy shared by the distribution, inversion and estimation code.

- DomainError: invalid distribution parameters (non-positive df, non-positive
  rescaling, too few degrees of freedom for a moment).
- ConvergenceError: a bounded search (bracket expansion, root finding, MLE
  maximisation) hit its iteration cap or produced a non-finite value.
- InvalidArgumentError: unknown method/type names, a confidence level outside
  (0, 1), mismatched dimensions.

The value errors also derive from :class:`ValueError` so callers that only
catch the builtin keep working.
"""

from __future__ import annotations

__all__ = [
    "SharpeRError",
    "DomainError",
    "ConvergenceError",
    "InvalidArgumentError",
]


class SharpeRError(Exception):
    """Base class for all errors raised by this package."""


class DomainError(SharpeRError, ValueError):
    """Distribution parameters outside their domain."""


class InvalidArgumentError(SharpeRError, ValueError):
    """Unrecognised option, malformed level or mismatched dimensions."""


class ConvergenceError(SharpeRError, RuntimeError):
    """A bounded numerical search did not converge."""
