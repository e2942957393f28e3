from __future__ import annotations

import logging
from collections.abc import Callable

from ..models.row_data import RowData
from ..services.reducers import validate_ip

"""Interactive prompt adapters.

Sequential console prompts (count first, then per-record fields) producing the
same RowData the tabular reader produces. Re-prompt loops live here, never in
the services.
"""

__all__ = [
    "Ask",
    "ask_int",
    "ask_scores",
    "collect_students",
    "collect_cart",
    "collect_devices",
]

logger = logging.getLogger(__name__)

Ask = Callable[[str], str]


def ask_int(ask: Ask, prompt: str, *, minimum: int = 0) -> int:
    """Prompt until the answer is an integer >= ``minimum``."""
    while True:
        answer = ask(prompt).strip()
        try:
            value = int(answer)
        except ValueError:
            logger.warning(f"not a number: {answer!r}, try again")
            continue
        if value < minimum:
            logger.warning(f"must be at least {minimum}, try again")
            continue
        return value


def ask_scores(ask: Ask, prompt: str, count: int) -> list[int]:
    """Prompt until exactly ``count`` whitespace separated integers are given."""
    while True:
        tokens = ask(prompt).split()
        try:
            scores = [int(t) for t in tokens]
        except ValueError:
            logger.warning("scores must be whole numbers, try again")
            continue
        if len(scores) != count:
            logger.warning(f"expected {count} scores, got {len(scores)}, try again")
            continue
        return scores


def collect_students(ask: Ask) -> list[RowData]:
    rows: list[RowData] = []
    n = ask_int(ask, "Enter number of students: ")
    for i in range(1, n + 1):
        name = ask(f"\nEnter name of student {i}: ").strip()
        m = ask_int(ask, f"Enter number of subjects for {name}: ")
        scores = ask_scores(ask, f"Enter {m} scores separated by space: ", m) if m else []
        values: dict[str, str] = {"name": name}
        values.update({f"score_{j}": str(s) for j, s in enumerate(scores, start=1)})
        rows.append(RowData(row_number=i, values=values))
    return rows


def collect_cart(ask: Ask) -> tuple[list[RowData], str | None]:
    """Items to buy, then the payment method (only asked for a non-empty cart)."""
    rows: list[RowData] = []
    n = ask_int(ask, "Enter number of items to buy: ")
    for i in range(1, n + 1):
        item = ask(f"Enter item {i}: ").strip()
        rows.append(RowData(row_number=i, values={"item": item}))
    if not rows:
        return rows, None
    method = ask("Enter payment method (cash/card/upi): ").strip()
    return rows, method


def collect_devices(ask: Ask) -> list[RowData]:
    rows: list[RowData] = []
    n = ask_int(ask, "Enter number of devices: ")
    for i in range(1, n + 1):
        name = ask(f"\nEnter name of device {i}: ").strip()
        while True:
            ip = ask(f"Enter IP address of {name}: ").strip()
            if validate_ip(ip):
                break
            logger.warning("Invalid IP format, try again!")
        active = ask(f"Is {name} active? (yes/no): ").strip()
        rows.append(RowData(row_number=i, values={"name": name, "ip": ip, "active": active}))
    return rows
