from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..errors import DuplicateNameError, LookupNotFoundError
from .record import Record

"""Dataset model: ordered Record names paired with a name -> Record lookup.

Invariant: every name in the ordered list has exactly one lookup entry and
names are unique within one Dataset. Iteration always follows insertion order.
"""

__all__ = [
    "Dataset",
    "DUPLICATE_REJECT",
    "DUPLICATE_OVERWRITE",
]

DUPLICATE_REJECT = "reject"
DUPLICATE_OVERWRITE = "overwrite"


class Dataset:
    """Ordered, name-keyed collection of Records.

    Duplicate handling follows ``duplicate_policy``:
    - ``reject`` (default): ``add_record`` raises DuplicateNameError
    - ``overwrite``: the stored Record is replaced, the name keeps its first position
    """

    def __init__(self, records: Iterable[Record] = (), *, duplicate_policy: str = DUPLICATE_REJECT) -> None:
        if duplicate_policy not in (DUPLICATE_REJECT, DUPLICATE_OVERWRITE):
            raise ValueError(f"unknown duplicate policy: {duplicate_policy}")
        self.duplicate_policy = duplicate_policy
        self._names: list[str] = []
        self._lookup: dict[str, Record] = {}
        for record in records:
            self.add_record(record)

    def add_record(self, record: Record) -> None:
        if record.name in self._lookup:
            if self.duplicate_policy == DUPLICATE_REJECT:
                raise DuplicateNameError(f"record {record.name} already present")
            self._lookup[record.name] = record
            return
        self._names.append(record.name)
        self._lookup[record.name] = record

    def get(self, name: str) -> Record:
        try:
            return self._lookup[name]
        except KeyError:
            raise LookupNotFoundError(f"record {name} not found") from None

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def status_map(self) -> dict[str, bool]:
        """Name -> active flag, in insertion order. Records without a flag count as inactive."""
        return {name: bool(self._lookup[name].active) for name in self._names}

    def value_map(self) -> dict[str, tuple[float, ...]]:
        return {name: self._lookup[name].values for name in self._names}

    def __contains__(self, name: object) -> bool:
        return name in self._lookup

    def __iter__(self) -> Iterator[Record]:
        for name in self._names:
            yield self._lookup[name]

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:  # pragma: no cover (trivial)
        return f"Dataset(names={self._names!r}, duplicate_policy={self.duplicate_policy!r})"
