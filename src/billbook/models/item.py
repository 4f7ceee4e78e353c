from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class Item:
    """Sellable catalog entry. ``code`` is the SKU and is not enforced unique."""

    id: int
    code: str
    description: str
    unit_price: Decimal
    tax_percent: Decimal

    @classmethod
    def from_record(cls, row: list[str]) -> Item:
        """Create an Item from a persisted row: id,code,description,unit_price,tax_percent.

        Raises ValueError when the id or either number cannot be parsed.
        """
        if len(row) < 5:
            raise ValueError(f"Item record has {len(row)} fields, expected 5")
        try:
            unit_price = Decimal(row[3])
            tax_percent = Decimal(row[4])
        except InvalidOperation:
            raise ValueError(f"Invalid number in item record: {row!r}") from None
        return cls(
            id=int(row[0]),
            code=row[1],
            description=row[2],
            unit_price=unit_price,
            tax_percent=tax_percent,
        )

    def to_record(self) -> list[str]:
        return [
            str(self.id),
            self.code,
            self.description,
            f"{self.unit_price:.2f}",
            f"{self.tax_percent:.2f}",
        ]

    @property
    def search_text(self) -> str:
        return f"{self.code} {self.description}"
