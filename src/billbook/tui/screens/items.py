from __future__ import annotations

from billbook.models.item import Item
from billbook.services.catalog import ItemCatalog
from billbook.tui.screens.catalog import CatalogScreen
from billbook.utils.formatters import format_money, format_percent
from billbook.utils.validators import validate_amount, validate_percent, validate_required


class ItemsScreen(CatalogScreen):
    """List, search, add and remove catalog items."""

    HEADER = "Items"
    COLUMNS = ("ID", "SKU", "Description", "Price", "Tax %")
    INPUT_FIELDS = (
        ("code", "Code (SKU)", "WIDGET"),
        ("description", "Description", "Blue widget, large"),
        ("unit_price", "Unit price", "10.00"),
        ("tax_percent", "Tax percent", "10"),
    )

    def _catalog(self) -> ItemCatalog:
        return self.app.ledger.items  # type: ignore[attr-defined]

    def _row(self, record: Item) -> tuple[str, ...]:
        return (
            str(record.id),
            record.code,
            record.description,
            format_money(record.unit_price),
            format_percent(record.tax_percent),
        )

    def _add(self, values: dict[str, str]) -> Item:
        return self._catalog().add(
            code=validate_required(values["code"], "Code"),
            description=validate_required(values["description"], "Description"),
            unit_price=validate_amount(values["unit_price"], "Unit price"),
            tax_percent=validate_percent(values["tax_percent"], "Tax percent"),
        )
