"""
In-memory report tables.

A ``DataTable`` is an ordered list of ``Row`` objects; each row may own one
subtable breaking it down by a secondary dimension.
"""

from .row import ABSENT, LABEL_COLUMN, Row
from .table import DataTable

__all__ = ["ABSENT", "LABEL_COLUMN", "DataTable", "Row"]
