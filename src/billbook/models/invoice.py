from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

HUNDRED = Decimal(100)


@dataclass(frozen=True)
class InvoiceLine:
    """Snapshot of an item at invoicing time plus the quantity sold.

    Description, price and tax are copied from the item so later catalog
    changes never alter an issued invoice.
    """

    item_id: int
    description: str
    unit_price: Decimal
    tax_percent: Decimal
    quantity: Decimal

    @property
    def amount(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def tax_amount(self) -> Decimal:
        return self.amount * self.tax_percent / HUNDRED


@dataclass(frozen=True)
class Invoice:
    id: int
    customer_id: int
    issue_date: date
    lines: tuple[InvoiceLine, ...] = ()
    discount_percent: Decimal = Decimal(0)
    shipping: Decimal = Decimal(0)
    note: str = ""

    def to_record(self) -> list[str]:
        """Metadata row: id,customer_id,date,discount_percent,shipping."""
        return [
            str(self.id),
            str(self.customer_id),
            self.issue_date.isoformat(),
            f"{self.discount_percent:.2f}",
            f"{self.shipping:.2f}",
        ]


@dataclass(frozen=True)
class InvoiceRecord:
    """Compact metadata kept for listing invoices without reading documents."""

    id: int
    customer_id: int
    date: str  # YYYY-MM-DD, kept as persisted
    discount_percent: Decimal
    shipping: Decimal

    @classmethod
    def from_record(cls, row: list[str]) -> InvoiceRecord:
        if len(row) < 5:
            raise ValueError(f"Invoice record has {len(row)} fields, expected 5")
        try:
            discount = Decimal(row[3])
            shipping = Decimal(row[4])
        except InvalidOperation:
            raise ValueError(f"Invalid number in invoice record: {row!r}") from None
        return cls(
            id=int(row[0]),
            customer_id=int(row[1]),
            date=row[2],
            discount_percent=discount,
            shipping=shipping,
        )


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    tax: Decimal
    discount_amount: Decimal
    shipping: Decimal
    total: Decimal
