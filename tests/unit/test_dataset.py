from __future__ import annotations

import pytest

from dataset_processor.errors import DuplicateNameError, LookupNotFoundError
from dataset_processor.models import Dataset, Record

"""Unit tests for the Dataset model (ordering, lookup, duplicate policy)."""


def test_add_record_keeps_insertion_order():
    """Names and iteration follow insertion order."""
    ds = Dataset()
    for name in ["Zed", "Alice", "Mia"]:
        ds.add_record(Record(name=name, values=(1,)))
    assert ds.names == ["Zed", "Alice", "Mia"]
    assert [r.name for r in ds] == ["Zed", "Alice", "Mia"]
    assert len(ds) == 3
    assert "Alice" in ds


def test_duplicate_rejected_by_default():
    """The default policy raises DuplicateNameError."""
    ds = Dataset([Record(name="Alice", values=(85,))])
    with pytest.raises(DuplicateNameError):
        ds.add_record(Record(name="Alice", values=(99,)))
    # 元のレコードは保持される
    assert ds.get("Alice").values == (85,)
    assert len(ds) == 1


def test_duplicate_overwrite_keeps_first_position():
    """overwrite replaces the record but not its position."""
    ds = Dataset(duplicate_policy="overwrite")
    ds.add_record(Record(name="Alice", values=(85,)))
    ds.add_record(Record(name="Bob", values=(70,)))
    ds.add_record(Record(name="Alice", values=(99,)))
    assert ds.names == ["Alice", "Bob"]
    assert ds.get("Alice").values == (99,)


def test_unknown_policy_rejected():
    """An unknown duplicate policy is a ValueError."""
    with pytest.raises(ValueError):
        Dataset(duplicate_policy="merge")


def test_get_unknown_name():
    """get() on an unknown name raises LookupNotFoundError."""
    with pytest.raises(LookupNotFoundError):
        Dataset().get("nobody")


def test_status_and_value_maps_follow_insertion_order():
    """status_map and value_map keep insertion order."""
    ds = Dataset(
        [
            Record(name="b", active=False),
            Record(name="a", active=True),
            Record(name="c"),
        ]
    )
    assert list(ds.status_map().items()) == [("b", False), ("a", True), ("c", False)]
    assert list(ds.value_map()) == ["b", "a", "c"]


def test_names_is_a_copy():
    """Mutating the returned names does not change the dataset."""
    ds = Dataset([Record(name="x")])
    ds.names.append("y")
    assert ds.names == ["x"]


def test_record_is_immutable():
    rec = Record(name="Router1", active=True, fields={"ip": "10.0.0.1"})
    with pytest.raises(AttributeError):
        rec.name = "other"  # type: ignore[misc]
    assert rec.get_field("ip") == "10.0.0.1"
    assert rec.get_field("mask", "n/a") == "n/a"
