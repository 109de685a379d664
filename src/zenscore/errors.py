"""Exceptions raised when input data breaks the engine's contract.

The analytics functions themselves never fail on odd numbers (zeros,
empty windows); they only reject data that would silently corrupt
averages further down the line.
"""


class ZenScoreError(Exception):
    """Base class for all zenscore errors."""


class SnapshotValidationError(ZenScoreError, ValueError):
    """A daily metric is negative or not a finite number."""


class SnapshotOrderError(ZenScoreError, ValueError):
    """Snapshots are not in strictly ascending date order (or repeat a day)."""
