from __future__ import annotations

from billbook.models.customer import Customer
from billbook.services.catalog import CustomerCatalog
from billbook.tui.screens.catalog import CatalogScreen
from billbook.utils.validators import validate_required


class CustomersScreen(CatalogScreen):
    """List, search, add and remove customers."""

    HEADER = "Customers"
    COLUMNS = ("ID", "Name", "Email", "Phone")
    INPUT_FIELDS = (
        ("name", "Name", "Acme Corp"),
        ("address", "Address", "100 Main St, Springfield"),
        ("email", "Email", "billing@acme.example"),
        ("phone", "Phone", "+1 555 0100"),
    )

    def _catalog(self) -> CustomerCatalog:
        return self.app.ledger.customers  # type: ignore[attr-defined]

    def _row(self, record: Customer) -> tuple[str, ...]:
        return (str(record.id), record.name, record.email, record.phone)

    def _add(self, values: dict[str, str]) -> Customer:
        return self._catalog().add(
            name=validate_required(values["name"], "Name"),
            address=values["address"],
            email=values["email"],
            phone=values["phone"],
        )
