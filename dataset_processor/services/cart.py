from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..errors import InvalidValueError
from ..models.dataset import Dataset
from ..models.record import Record
from ..models.reports import CartReport
from ..models.row_data import RowData
from .discount import DiscountGenerator
from .reducers import apply_discount, lookup_price, total

"""Shopping cart: store catalog lookup, gross total, generated discount, payment."""

__all__ = [
    "build_catalog",
    "catalog_prices",
    "item_from_row",
    "checkout",
    "payment_message",
]

PAYMENT_LABELS = {"cash": "Cash", "card": "Card", "upi": "UPI"}


def build_catalog(catalog: Mapping[str, float], *, duplicate_policy: str = "reject") -> Dataset:
    """Store catalog as a Dataset: one Record per item holding its price."""
    return Dataset(
        (Record(name=item, values=(float(price),)) for item, price in catalog.items()),
        duplicate_policy=duplicate_policy,
    )


def catalog_prices(catalog: Dataset) -> dict[str, float]:
    return {record.name: record.values[0] for record in catalog}


def item_from_row(row: RowData) -> str:
    item = str(row.values.get("item") or "").strip()
    if not item:
        raise InvalidValueError("item name is empty")
    return item


def checkout(items: Sequence[str], catalog: Dataset, generator: DiscountGenerator) -> CartReport:
    """Price the cart and apply the next generated discount.

    The generator is not advanced for an empty cart.

    Raises:
        LookupNotFoundError: If an item is not in the catalog
        InvalidDiscountError: If the generated discount leaves [0, 100]
    """
    prices_by_item = catalog_prices(catalog)
    prices = tuple(lookup_price(item, prices_by_item) for item in items)
    if not prices:
        return CartReport(items=(), prices=(), gross=0.0, discount_percent=0.0, final=0.0)
    gross = total(*prices)
    discount = generator()
    final = apply_discount(gross, discount)
    return CartReport(
        items=tuple(items),
        prices=prices,
        gross=gross,
        discount_percent=discount,
        final=final,
    )


def payment_message(method: str, accepted: Sequence[str]) -> tuple[bool, str]:
    """Return ``(success, message)`` for a payment method."""
    key = method.strip().lower()
    if key in accepted:
        label = PAYMENT_LABELS.get(key, key.title())
        return True, f"Payment successful with {label}."
    return False, "Invalid payment method! Payment failed."
