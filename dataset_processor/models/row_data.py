from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""RowData model: one parsed input row before it becomes a Record."""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single input row.

    ``row_number`` is the 1-based data row (header excluded) for file input, or
    the prompt sequence number for interactive input. It is carried into the
    error log as ``position``.
    """
    row_number: int
    values: dict[str, Any]  # column name -> raw value (str)
    invalid: bool = False
