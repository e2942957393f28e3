"""Dataset processor: small in-memory datasets, pure reducers, text reports."""

__version__ = "0.1.0"
