from __future__ import annotations

"""Domain error taxonomy for the dataset processor.

Every error carries an UPPER_SNAKE ``error_type`` which is written to the
JSON Lines error log when the orchestrator records a rejected record.
"""

__all__ = [
    "DatasetError",
    "EmptyInputError",
    "DivisionByZeroError",
    "InvalidDiscountError",
    "LookupNotFoundError",
    "DuplicateNameError",
    "InvalidValueError",
]


class DatasetError(Exception):
    """Base class for all reducer / dataset errors."""

    error_type = "DATASET_ERROR"


class EmptyInputError(DatasetError):
    """Raised when a reducer is called on an empty collection."""

    error_type = "EMPTY_INPUT"


class DivisionByZeroError(DatasetError):
    error_type = "DIVISION_BY_ZERO"


class InvalidDiscountError(DatasetError):
    """Raised when a discount percentage is outside [0, 100]."""

    error_type = "INVALID_DISCOUNT"


class LookupNotFoundError(DatasetError):
    """Raised when a status / price lookup is made for an unknown name."""

    error_type = "LOOKUP_NOT_FOUND"


class DuplicateNameError(DatasetError):
    error_type = "DUPLICATE_NAME"


class InvalidValueError(DatasetError):
    """Raised when an input value cannot be parsed (number, IP format, flag)."""

    error_type = "INVALID_VALUE"
