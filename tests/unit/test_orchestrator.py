from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

import pytest

from dataset_processor.config.loader import CartConfig, ProcessorConfig
from dataset_processor.logging.error_log import ErrorLogBuffer
from dataset_processor.models import RowData
from dataset_processor.services.orchestrator import ProcessingError, process_program

"""Unit tests for process_program() (one run per program)."""


def _rows(*values: dict) -> list[RowData]:
    return [RowData(row_number=i, values=v) for i, v in enumerate(values, start=1)]


@pytest.fixture()
def config(tmp_path: Path) -> ProcessorConfig:
    return ProcessorConfig(error_log_dir=str(tmp_path / "logs"))


def test_grades_success(config) -> None:
    """All students accepted, report and footer rendered."""
    rows = _rows(
        {"name": "Alice", "s1": "85", "s2": "90", "s3": "78"},
        {"name": "Bob", "s1": "70", "s2": "65", "s3": "80"},
    )
    result = process_program("grades", rows, config)
    assert (result.total_records, result.accepted_records, result.failed_records) == (2, 2, 0)
    lines = result.report_lines
    assert lines[0] == "--- Results ---"
    assert "Scores: [85 90 78] | Average: 84.33 | Min: 78 | Max: 90" in lines
    assert "Scores: [70 65 80] | Average: 71.67 | Min: 65 | Max: 80" in lines
    assert [line for line in lines if line.startswith("Grade:")] == ["Grade: B", "Grade: C"]
    assert "Class average (integer): 78" in lines
    assert lines[-1] == "100 / 5 = 20"
    assert result.error_log_path is None
    assert not (Path(config.error_log_dir)).exists()


def test_grades_rejections_are_logged(config) -> None:
    """Duplicate, non-numeric and empty students end up in the error log."""
    rows = _rows(
        {"name": "Alice", "s1": "85"},
        {"name": "Alice", "s1": "99"},
        {"name": "Carol", "s1": ""},
        {"name": "Dave", "s1": "abc"},
    )
    result = process_program("grades", rows, config)
    assert result.total_records == 4
    assert result.accepted_records == 1
    assert result.failed_records == 3
    assert "Student: Carol" in result.report_lines
    assert "Error: cannot average an empty collection" in result.report_lines

    entries = [json.loads(line) for line in Path(result.error_log_path).read_text(encoding="utf-8").splitlines()]
    assert [(e["record"], e["position"], e["error_type"]) for e in entries] == [
        ("Alice", 2, "DUPLICATE_NAME"),
        ("Dave", 4, "INVALID_VALUE"),
        ("Carol", 3, "EMPTY_INPUT"),
    ]
    assert all(e["program"] == "grades" for e in entries)


def test_grades_overwrite_policy(config) -> None:
    """overwrite keeps the last row for a name."""
    cfg = replace(config, duplicate_policy="overwrite")
    rows = _rows({"name": "Alice", "s1": "50"}, {"name": "Alice", "s1": "95"})
    result = process_program("grades", rows, cfg)
    assert result.failed_records == 0
    assert "Grade: A" in result.report_lines
    assert sum(1 for line in result.report_lines if line.startswith("Student:")) == 1


def test_grades_no_students(config) -> None:
    """No students -> class average is n/a, not a failure."""
    result = process_program("grades", [], config)
    assert "Class average: n/a (division by zero is not allowed)" in result.report_lines
    assert result.failed_records == 0


def test_cart_checkout(config) -> None:
    """Unknown items are rejected, the rest are checked out."""
    rows = _rows({"item": "apple"}, {"item": "milk"}, {"item": "chips"})
    error_log = ErrorLogBuffer(Path(config.error_log_dir))
    result = process_program("cart", rows, config, payment_method="upi", error_log=error_log)
    assert (result.accepted_records, result.failed_records) == (2, 1)
    assert result.report_lines == (
        "--- Shopping Cart ---",
        "Items: [apple milk]",
        "Gross total: 55.50",
        "Applying 10.00% discount...",
        "Final payable amount: 49.95",
        "Payment successful with UPI.",
    )
    assert result.error_log_path is not None


def test_cart_empty(config) -> None:
    """An empty cart skips discount and payment."""
    result = process_program("cart", [], config, payment_method="cash")
    assert result.report_lines == ("--- Shopping Cart ---", "Cart is empty!")


def test_cart_invalid_payment(config) -> None:
    """An unknown payment method fails the payment, not the records."""
    result = process_program("cart", _rows({"item": "bread"}), config, payment_method="cheque")
    assert result.report_lines[-1] == "Invalid payment method! Payment failed."
    assert result.failed_records == 0


def test_cart_discount_out_of_range(config) -> None:
    """An out-of-range discount fails every cart row."""
    cfg = replace(config, cart=CartConfig(discount_base=98.0))
    result = process_program("cart", _rows({"item": "apple"}), cfg)
    assert (result.accepted_records, result.failed_records) == (0, 1)
    assert result.report_lines[-1] == "Error: invalid discount: 103.00%"


def test_devices(config) -> None:
    """Valid devices are analyzed, invalid ones are rejected."""
    rows = _rows(
        {"name": "Router1", "ip": "192.168.1.1", "active": "yes"},
        {"name": "Switch01", "ip": "192.168.1.10", "active": "no"},
        {"name": "Bad", "ip": "10.0.0", "active": "yes"},
    )
    result = process_program("devices", rows, config)
    lines = result.report_lines
    assert (result.accepted_records, result.failed_records) == (2, 1)
    assert "Device: Router1 | IP: 192.168.1.1 | Status: Active" in lines
    assert "Total devices: 2 | Active devices: 1" in lines
    assert "Device with longest name: Switch01" in lines
    assert "Status of Router1: true" in lines
    assert lines[-1] == "shutdown"
    assert not any("Bad" in line for line in lines)


def test_devices_empty(config) -> None:
    """No devices -> totals only."""
    result = process_program("devices", [], config)
    assert "Total devices: 0 | Active devices: 0" in result.report_lines
    assert not any(line.startswith("Device with longest name") for line in result.report_lines)


def test_devices_overwrite_counts_every_row(config) -> None:
    """Rows overwritten under the overwrite policy still count as accepted."""
    cfg = replace(config, duplicate_policy="overwrite")
    rows = _rows(
        {"name": "A", "ip": "10.0.0.1", "active": "yes"},
        {"name": "A", "ip": "10.0.0.2", "active": "no"},
    )
    result = process_program("devices", rows, cfg)
    assert (result.total_records, result.accepted_records, result.failed_records) == (2, 2, 0)
    assert "Total devices: 1 | Active devices: 0" in result.report_lines


def test_grades_overwrite_counts_every_row(config) -> None:
    """records = accepted + failed also holds when names are overwritten."""
    cfg = replace(config, duplicate_policy="overwrite")
    rows = _rows({"name": "Alice", "s1": "50"}, {"name": "Alice", "s1": "95"}, {"name": "Bob", "s1": "x"})
    result = process_program("grades", rows, cfg)
    assert result.total_records == result.accepted_records + result.failed_records
    assert (result.accepted_records, result.failed_records) == (2, 1)


def test_collections_from_config(config) -> None:
    """No input source -> the configured mapping."""
    result = process_program("collections", None, config)
    assert (result.total_records, result.accepted_records) == (2, 2)
    assert result.report_lines == (
        "Entries: [map[Alice:25] map[Bob:30]]",
        "keys: [Alice Bob]",
        "Entries by keys: [map[Alice:25] map[Bob:30]]",
    )


def test_collections_without_rows_is_empty(config) -> None:
    """An input source with no rows does not fall back to the configured mapping."""
    result = process_program("collections", [], config)
    assert (result.total_records, result.accepted_records, result.failed_records) == (0, 0, 0)
    assert result.report_lines == ("Entries: []", "keys: []", "Entries by keys: []")


def test_collections_from_rows(config) -> None:
    """File rows replace the configured mapping."""
    rows = _rows({"name": "Eve", "value": "41"}, {"name": "Eve", "value": "42"}, {"name": "Dan", "value": "19"})
    result = process_program("collections", rows, config)
    assert (result.accepted_records, result.failed_records) == (2, 1)
    assert result.report_lines[0] == "Entries: [map[Eve:41] map[Dan:19]]"


def test_unknown_program(config) -> None:
    """An unknown program raises ProcessingError."""
    with pytest.raises(ProcessingError):
        process_program("inventory", [], config)
