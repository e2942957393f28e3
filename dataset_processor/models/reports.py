from __future__ import annotations

from dataclasses import dataclass

"""Report models: read-only projections of Records through reducers.

These have no lifecycle of their own; services rebuild them on every render.
"""

__all__ = [
    "StudentReport",
    "CartReport",
    "DeviceReport",
]


@dataclass(frozen=True)
class StudentReport:
    name: str
    scores: tuple[int, ...]
    average: float
    minimum: int
    maximum: int
    grade: str


@dataclass(frozen=True)
class CartReport:
    """Checkout of a shopping cart.

    ``discount_percent`` is the generator value that was applied; ``final`` is
    the gross total after that discount.
    """
    items: tuple[str, ...]
    prices: tuple[float, ...]
    gross: float
    discount_percent: float
    final: float

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class DeviceReport:
    name: str
    ip: str
    active: bool
    config_lines: tuple[str, ...]

    @property
    def status_label(self) -> str:
        return "Active" if self.active else "Inactive"
