from __future__ import annotations

from dataclasses import dataclass, field

"""Record model for the dataset processor.

A Record is one named entity (student, store item, device) holding either a
tuple of numeric values or a boolean ``active`` flag. Extra string attributes
such as a device IP live in ``fields``.
"""

__all__ = [
    "Record",
]


@dataclass(frozen=True)
class Record:
    """Immutable named record.

    Attributes:
        name: Unique key within one Dataset
        values: Numeric values (scores, prices). Empty for flag-only records
        active: Boolean status flag, None when the record carries no flag
        fields: Additional string attributes (e.g. ``{"ip": "10.0.0.1"}``)
    """
    name: str
    values: tuple[float, ...] = ()
    active: bool | None = None
    fields: dict[str, str] = field(default_factory=dict, compare=False)

    def get_field(self, key: str, default: str = "") -> str:
        return self.fields.get(key, default)
