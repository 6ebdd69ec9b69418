"""Reporting helpers.

Thin wrappers that turn statistics into CSV-friendly pandas tables.
"""

from .tables import dict_table, sr_table, sropt_table

__all__ = [
    "dict_table",
    "sr_table",
    "sropt_table",
]
