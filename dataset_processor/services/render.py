from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from ..models.reports import CartReport, DeviceReport, StudentReport

"""Report body rendering for each program.

Every function returns a list of lines; the CLI prints them. Section headers
follow the console exercises (``--- Results ---`` etc.).
"""

__all__ = [
    "format_values",
    "format_mapping",
    "render_student",
    "render_student_error",
    "render_grades_footer",
    "render_cart",
    "render_device_summary",
    "render_device_analysis",
    "render_device_configs",
    "render_collections",
]


def format_values(values: Sequence[Any]) -> str:
    """``[85, 90, 78]`` -> ``"[85 90 78]"``."""
    return "[" + " ".join(str(v) for v in values) + "]"


def render_student(report: StudentReport) -> list[str]:
    return [
        "",
        f"Student: {report.name}",
        f"Scores: {format_values(report.scores)} | Average: {report.average:.2f} "
        f"| Min: {report.minimum} | Max: {report.maximum}",
        f"Grade: {report.grade}",
    ]


def render_student_error(name: str, error: Exception) -> list[str]:
    return ["", f"Student: {name}", f"Error: {error}"]


def render_grades_footer(class_avg: int | None, reason: str | None, demo: int) -> list[str]:
    lines = ["", "--- Class Average ---"]
    if class_avg is None:
        lines.append(f"Class average: n/a ({reason})")
    else:
        lines.append(f"Class average (integer): {class_avg}")
    lines += ["", "--- Safe Division Demo ---", f"100 / 5 = {demo}"]
    return lines


def render_cart(report: CartReport, payment: str | None = None) -> list[str]:
    lines = ["--- Shopping Cart ---"]
    if report.is_empty:
        lines.append("Cart is empty!")
        return lines
    lines += [
        f"Items: {format_values(report.items)}",
        f"Gross total: {report.gross:.2f}",
        f"Applying {report.discount_percent:.2f}% discount...",
        f"Final payable amount: {report.final:.2f}",
    ]
    if payment is not None:
        lines.append(payment)
    return lines


def render_device_summary(reports: Sequence[DeviceReport]) -> list[str]:
    lines = ["--- Device Configuration Summary ---"]
    for r in reports:
        lines.append(f"Device: {r.name} | IP: {r.ip} | Status: {r.status_label}")
    return lines


def render_device_analysis(total: int, active: int, longest: str | None, lookup: tuple[str, bool] | None) -> list[str]:
    lines = ["", "--- Analysis ---", f"Total devices: {total} | Active devices: {active}"]
    if longest is not None:
        lines.append(f"Device with longest name: {longest}")
    if lookup is not None:
        name, status = lookup
        lines += ["", "--- Safe Lookup Demo ---", f"Status of {name}: {str(status).lower()}"]
    return lines


def render_device_configs(reports: Sequence[DeviceReport]) -> list[str]:
    lines = ["", "--- Generated Device Configurations ---"]
    for r in reports:
        lines += ["", f"Configuration for {r.name}:"]
        lines.extend(r.config_lines)
    return lines


def format_mapping(mapping: Mapping[str, Any]) -> str:
    """``{"Bob": 30, "Alice": 25}`` -> ``"map[Alice:25 Bob:30]"`` (keys sorted)."""
    return "map[" + " ".join(f"{k}:{mapping[k]}" for k in sorted(mapping)) + "]"


def render_collections(
    entries: Sequence[Mapping[str, Any]],
    keys: Sequence[str],
    by_keys: Sequence[Mapping[str, Any]],
) -> list[str]:
    return [
        f"Entries: {format_values([format_mapping(e) for e in entries])}",
        f"keys: {format_values(keys)}",
        f"Entries by keys: {format_values([format_mapping(e) for e in by_keys])}",
    ]
