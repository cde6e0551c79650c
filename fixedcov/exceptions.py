"""
Exception hierarchy.

Every error raised by the library derives from FixedCovError so callers
can catch the whole family, while still matching the builtin category
(ValueError for bad inputs, ArithmeticError for fixed-point faults).
"""


class FixedCovError(Exception):
    """Base class for all library errors."""


class ShapeError(FixedCovError, ValueError):
    """A tensor has the wrong rank or an inconsistent shape."""


class DimensionMismatchError(FixedCovError, ValueError):
    """Two operands disagree on a shared dimension."""


class InvalidWindowError(FixedCovError, ValueError):
    """Window width is non-positive or exceeds the available rows."""


EmptyOrInvalidWindowError = InvalidWindowError


class ConfigError(FixedCovError, ValueError):
    """A configuration value is missing or invalid."""


class FixedPointError(FixedCovError, ArithmeticError):
    """Base class for fixed-point arithmetic faults."""


class FixedPointOverflowError(FixedPointError, OverflowError):
    """Result magnitude does not fit in the fixed-point format."""


class FixedPointZeroDivisionError(FixedPointError, ZeroDivisionError):
    """Division by a fixed-point zero."""


class PrecisionMismatchError(FixedPointError):
    """Operands carry different fixed-point formats."""
