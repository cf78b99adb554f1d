"""
Error taxonomy for the comparison engine.
Calculations raise these; the aggregator turns them into result states.
"""


class ComparisonError(Exception):
    """Base error for comparison calculations."""
    pass


class InsufficientDataError(ComparisonError):
    """Raised when fewer data points are available than an operation needs."""
    pass


class DegenerateInputError(ComparisonError):
    """Raised when well-formed data makes a calculation undefined (zero price, zero variance)."""
    pass


class InvalidParameterError(ComparisonError, ValueError):
    """Raised when a calculation parameter is outside its accepted range."""
    pass
