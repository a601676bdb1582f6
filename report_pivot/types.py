"""
Exception types for the pivot module.

Every failure raised by the library derives from ``PivotError`` so callers can
catch the whole family at once. Messages are part of the public contract:
downstream tooling matches on them.
"""

from __future__ import annotations


class PivotError(Exception):
    """Raised when a pivot request cannot be executed."""


class InvalidDimensionError(PivotError):
    """The requested pivot dimension is not declared by any loaded plugin."""


class UnknownReportError(PivotError):
    """The source report is not declared by any loaded plugin."""


class UnsupportedPivotError(PivotError):
    """The report/dimension combination cannot be pivoted with the current settings."""


class FetchError(PivotError):
    """A breakdown table could not be fetched for a row."""


__all__ = [
    "PivotError",
    "InvalidDimensionError",
    "UnknownReportError",
    "UnsupportedPivotError",
    "FetchError",
]
