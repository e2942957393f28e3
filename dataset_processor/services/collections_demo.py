from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ..errors import InvalidValueError, LookupNotFoundError
from ..models.row_data import RowData

"""Collections demo: split a mapping into single-entry mappings.

Iteration order is always explicit: insertion order of the mapping, or the
order of a caller supplied key list.
"""

__all__ = [
    "split_entries",
    "split_entries_by_keys",
    "entry_from_row",
]


def split_entries(mapping: Mapping[str, Any]) -> list[dict[str, Any]]:
    """``{"a": 1, "b": 2}`` -> ``[{"a": 1}, {"b": 2}]`` in insertion order."""
    return [{key: value} for key, value in mapping.items()]


def split_entries_by_keys(mapping: Mapping[str, Any], keys: Iterable[str]) -> list[dict[str, Any]]:
    """Same as :func:`split_entries` but ordered by ``keys``.

    Raises:
        LookupNotFoundError: If a key is not in the mapping
    """
    entries = []
    for key in keys:
        if key not in mapping:
            raise LookupNotFoundError(f"key {key} not found")
        entries.append({key: mapping[key]})
    return entries


def entry_from_row(row: RowData) -> tuple[str, int]:
    """One ``name`` / ``value`` input row -> mapping entry."""
    name = str(row.values.get("name") or "").strip()
    if not name:
        raise InvalidValueError("entry name is empty")
    raw = str(row.values.get("value") or "").strip()
    try:
        return name, int(raw)
    except ValueError:
        raise InvalidValueError(f"value is not an integer: {raw!r}") from None
