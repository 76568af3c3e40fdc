"""
Errors raised by the AHP calculations.
"""


class AHPError(ValueError):
    """Base class for invalid AHP input."""


class StructuralError(AHPError):
    """The hierarchy is missing required parts."""


class MalformedMatrixError(AHPError):
    """A comparison matrix is not a square array of numbers."""


class DimensionMismatchError(AHPError):
    """A comparison matrix does not fit its place in the hierarchy."""

    def __init__(self, what, expected, actual, level=None, parent=None):
        self.what = what
        self.expected = expected
        self.actual = actual
        self.level = level
        self.parent = parent

        location = ''
        if level is not None:
            location += f' at level {level}'
        if parent is not None:
            location += f' for parent {parent}'
        super().__init__(f"Size mismatch for {what}{location}: expected {expected}, got {actual}")
