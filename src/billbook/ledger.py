from __future__ import annotations

from datetime import date
from pathlib import Path

from billbook import config as _config
from billbook.config import CUSTOMERS, INVOICES, ITEMS, Settings
from billbook.services.catalog import CustomerCatalog, ItemCatalog
from billbook.services.invoicing import InvoiceEngine
from billbook.services.reports import SalesReport, sales_report
from billbook.utils.store import FileStore, RecordStore


class Ledger:
    """Application root: owns the record store and every component built on it."""

    def __init__(self, store: RecordStore, settings: Settings | None = None) -> None:
        self.store = store
        self.settings = settings or Settings()
        self.customers = CustomerCatalog(store, self.settings.start_for(CUSTOMERS))
        self.items = ItemCatalog(store, self.settings.start_for(ITEMS))
        self.invoices = InvoiceEngine(
            store,
            self.customers,
            self.items,
            default_start=self.settings.start_for(INVOICES),
            company_name=self.settings.company_name,
        )

    @classmethod
    def open(cls, data_dir: Path | None = None, settings: Settings | None = None) -> Ledger:
        """Open the ledger kept in ``data_dir`` (default: the configured data dir)."""
        root = data_dir or _config.get_data_dir()
        root.mkdir(parents=True, exist_ok=True)
        return cls(FileStore(root), settings or _config.load_settings())

    def sales_report(self, start_date: date | str, end_date: date | str) -> SalesReport:
        return sales_report(self.store, start_date, end_date)
