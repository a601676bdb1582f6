"""
Table filters.
"""

from .columns import ColumnAccumulator
from .pivot import STRATEGY_FETCH, STRATEGY_SUBTABLE, PivotByDimension

__all__ = [
    "ColumnAccumulator",
    "PivotByDimension",
    "STRATEGY_FETCH",
    "STRATEGY_SUBTABLE",
]
