"""Sales report over a date range.

Totals are recovered from each invoice's rendered document (its ``TOTAL:``
row), the metadata record only tells which invoices fall in the range.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

from billbook.config import INVOICES
from billbook.services.invoicing import TOTAL_LABEL
from billbook.utils.store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalesRow:
    invoice_id: str
    customer_id: str
    date: str
    total: Decimal


@dataclass(frozen=True)
class SalesReport:
    rows: tuple[SalesRow, ...]
    total_sales: Decimal

    def __iter__(self) -> Iterator:
        yield self.rows
        yield self.total_sales


def extract_total(document: str) -> Decimal | None:
    """Return the number at the end of the first ``TOTAL:`` row, or None."""
    for line in document.splitlines():
        if not line.strip().startswith(TOTAL_LABEL):
            continue
        parts = line.split()
        try:
            total = Decimal(parts[-1])
        except InvalidOperation:
            return None
        return total if total.is_finite() else None
    return None


def _as_iso(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else value


def sales_report(store: RecordStore, start_date: date | str, end_date: date | str) -> SalesReport:
    """Sum invoice totals for metadata rows dated within [start_date, end_date].

    Dates compare as plain strings, which is exact for YYYY-MM-DD. Rows
    whose document or TOTAL row is missing are skipped.
    """
    start, end = _as_iso(start_date), _as_iso(end_date)
    rows: list[SalesRow] = []
    total_sales = Decimal(0)

    for record in store.read_all(INVOICES):
        if len(record) < 3:
            continue
        invoice_id, customer_id, issued = record[0], record[1], record[2]
        if issued < start or issued > end:
            continue
        document = store.read_document(invoice_id)
        if document is None:
            logger.info("Sales report: no document for invoice %s, skipped", invoice_id)
            continue
        total = extract_total(document)
        if total is None:
            logger.info("Sales report: no TOTAL row in invoice %s, skipped", invoice_id)
            continue
        rows.append(SalesRow(invoice_id, customer_id, issued, total))
        total_sales += total

    return SalesReport(rows=tuple(rows), total_sales=total_sales)
