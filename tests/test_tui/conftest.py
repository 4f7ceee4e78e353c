from __future__ import annotations

from datetime import date

import pytest

from billbook.ledger import Ledger


@pytest.fixture
def seeded_ledger(ledger: Ledger, customer, widget) -> Ledger:
    """In-memory ledger with one customer, one item and invoice #9001."""
    ledger.invoices.create_invoice(
        customer.id, [("WIDGET", "2")], "10", "5.00", date=date(2024, 3, 15)
    )
    return ledger
