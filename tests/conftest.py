from __future__ import annotations

from decimal import Decimal

import pytest

from billbook.config import Settings
from billbook.ledger import Ledger
from billbook.models.customer import Customer
from billbook.models.item import Item
from billbook.utils.store import FileStore, MemoryStore


@pytest.fixture
def settings() -> Settings:
    return Settings(company_name="ACME TRADING")


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def file_store(tmp_path) -> FileStore:
    return FileStore(tmp_path)


@pytest.fixture
def ledger(memory_store: MemoryStore, settings: Settings) -> Ledger:
    return Ledger(memory_store, settings)


@pytest.fixture
def file_ledger(file_store: FileStore, settings: Settings) -> Ledger:
    return Ledger(file_store, settings)


# --- Seeded records ---


@pytest.fixture
def customer(ledger: Ledger) -> Customer:
    return ledger.customers.add(
        "Acme Corp",
        address="100 Main St, Springfield",
        email="billing@acme.example",
        phone="+1 555 0100",
    )


@pytest.fixture
def widget(ledger: Ledger) -> Item:
    """Unit price 10.00, tax 10 percent."""
    return ledger.items.add("WIDGET", "Blue widget", Decimal("10.00"), Decimal("10"))
