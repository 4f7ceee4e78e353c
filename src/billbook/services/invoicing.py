from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from decimal import Decimal

from billbook.config import DEFAULT_COMPANY_NAME, DEFAULT_ID_START, INVOICES
from billbook.models.customer import Customer
from billbook.models.invoice import HUNDRED, Invoice, InvoiceLine, InvoiceRecord, Totals
from billbook.services.catalog import CustomerCatalog, ItemCatalog
from billbook.services.exceptions import (
    BillingError,
    InvoiceNotFound,
    ItemNotFound,
    StorageError,
)
from billbook.utils.formatters import format_money, format_percent, format_quantity
from billbook.utils.sequence import next_id_from_rows
from billbook.utils.store import RecordStore, single_line

logger = logging.getLogger(__name__)

TOTAL_LABEL = "TOTAL:"
RULE = "-" * 90


def compute_totals(invoice: Invoice) -> Totals:
    """Derive the totals block of an invoice.

    Sums are kept at full precision; rounding happens only when rendered.
    The discount applies to the tax-inclusive amount (subtotal + tax).
    """
    subtotal = sum((line.amount for line in invoice.lines), Decimal(0))
    tax = sum((line.tax_amount for line in invoice.lines), Decimal(0))
    discount_amount = invoice.discount_percent / HUNDRED * (subtotal + tax)
    total = subtotal + tax - discount_amount + invoice.shipping
    return Totals(
        subtotal=subtotal,
        tax=tax,
        discount_amount=discount_amount,
        shipping=invoice.shipping,
        total=total,
    )


def _total_row(label: str, value: Decimal) -> str:
    return f"{label:>70}{format_money(value):>14}"


def render_document(
    invoice: Invoice,
    customer: Customer,
    company_name: str = DEFAULT_COMPANY_NAME,
    generated_at: datetime | None = None,
) -> str:
    """Render the fixed-width invoice document.

    The ``TOTAL:`` row is read back by the sales report: its last
    whitespace-separated token must stay the numeric total.
    """
    totals = compute_totals(invoice)
    generated_at = generated_at or datetime.now()

    out = [
        f"{company_name:<40}{'INVOICE #':>30}{invoice.id}",
        f"{'Date: ':<50}{invoice.issue_date.isoformat()}",
        f"{'Customer: ':<50}{customer.name}",
        f"{'Address: ':<50}{customer.address}",
        f"{'Email: ':<50}{customer.email}",
        f"{'Phone: ':<50}{customer.phone}",
        "",
        f"{'No':<6}{'Qty':<8}{'Unit':<10}{'Description':<40}{'Tax%':<10}{'LineTotal':<14}",
        RULE,
    ]
    for n, line in enumerate(invoice.lines, start=1):
        out.append(
            f"{n:<6}"
            f"{format_quantity(line.quantity):<8}"
            f"{format_money(line.unit_price):<10}"
            f"{line.description:<40}"
            f"{format_percent(line.tax_percent):<10}"
            f"{format_money(line.amount):<14}"
        )
    out.append(RULE)
    out.append(_total_row("Subtotal: ", totals.subtotal))
    out.append(_total_row("Tax: ", totals.tax))
    out.append(
        _total_row(
            f"Discount ({format_percent(invoice.discount_percent)}%): ",
            -totals.discount_amount,
        )
    )
    out.append(_total_row("Shipping: ", totals.shipping))
    out.append(_total_row(f"{TOTAL_LABEL} ", totals.total))
    out.append("")
    out.append(f"Note: {invoice.note}")
    out.append(f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}")
    return "\n".join(row.rstrip() for row in out) + "\n"


class InvoiceEngine:
    """Builds invoices from catalog entries and persists document + metadata."""

    def __init__(
        self,
        store: RecordStore,
        customers: CustomerCatalog,
        items: ItemCatalog,
        default_start: int = DEFAULT_ID_START["invoices"],
        company_name: str = DEFAULT_COMPANY_NAME,
    ) -> None:
        self._store = store
        self._customers = customers
        self._items = items
        self._default_start = default_start
        self.company_name = company_name

    def next_invoice_id(self) -> int:
        """Scan the metadata collection for the next invoice number."""
        return next_id_from_rows(self._store.read_all(INVOICES), self._default_start)

    def build_invoice(
        self,
        customer_id: int,
        lines: Iterable[tuple[str, Decimal | str]],
        discount_percent: Decimal | str = Decimal(0),
        shipping: Decimal | str = Decimal(0),
        note: str = "",
        date: date | None = None,
    ) -> Invoice:
        """Resolve customer and line keys into an unsaved Invoice.

        Each line is ``(key, quantity)`` where key is an item id or code.
        Raises CustomerNotFound or ItemNotFound. The invoice number is only
        taken for good when the invoice is saved.
        """
        self._customers.get(customer_id)

        resolved: list[InvoiceLine] = []
        for key, quantity in lines:
            item = self._items.resolve(str(key))
            if item is None:
                raise ItemNotFound(key)
            resolved.append(
                InvoiceLine(
                    item_id=item.id,
                    description=item.description,
                    unit_price=item.unit_price,
                    tax_percent=item.tax_percent,
                    quantity=Decimal(quantity),
                )
            )

        return Invoice(
            id=self.next_invoice_id(),
            customer_id=customer_id,
            issue_date=date or _today(),
            lines=tuple(resolved),
            discount_percent=Decimal(discount_percent),
            shipping=Decimal(shipping),
            note=single_line(note),
        )

    def render(self, invoice: Invoice, generated_at: datetime | None = None) -> str:
        customer = self._customers.get(invoice.customer_id)
        return render_document(invoice, customer, self.company_name, generated_at)

    def save_invoice(self, invoice: Invoice) -> str:
        """Write the document, then append the metadata record.

        If the metadata append fails the document is removed again, so an
        invoice is either fully persisted or not at all. Returns the
        document location.
        """
        if any(r.id == invoice.id for r in self.list_invoices()):
            raise BillingError(f"Invoice {invoice.id} was already saved")

        text = self.render(invoice)
        location = self._store.write_document(invoice.id, text)
        try:
            self._store.append(INVOICES, invoice.to_record())
        except StorageError:
            logger.warning("Metadata append failed, removing document of invoice %d", invoice.id)
            self._store.delete_document(invoice.id)
            raise
        logger.info("Invoice %d saved to %s", invoice.id, location)
        return location

    def create_invoice(
        self,
        customer_id: int,
        lines: Sequence[tuple[str, Decimal | str]],
        discount_percent: Decimal | str = Decimal(0),
        shipping: Decimal | str = Decimal(0),
        note: str = "",
        date: date | None = None,
    ) -> tuple[Invoice, str]:
        invoice = self.build_invoice(customer_id, lines, discount_percent, shipping, note, date)
        return invoice, self.save_invoice(invoice)

    def list_invoices(self) -> list[InvoiceRecord]:
        """Return invoice metadata in file order.

        Malformed rows and repeats of an already listed id are skipped.
        """
        records: list[InvoiceRecord] = []
        seen: set[int] = set()
        for row in self._store.read_all(INVOICES):
            try:
                record = InvoiceRecord.from_record(row)
            except ValueError:
                logger.warning("Skipping malformed invoice record: %r", row)
                continue
            if record.id in seen:
                logger.warning("Skipping duplicate invoice id %d: %r", record.id, row)
                continue
            seen.add(record.id)
            records.append(record)
        return records

    def read_document(self, invoice_id: int | str) -> str:
        text = self._store.read_document(invoice_id)
        if text is None:
            raise InvoiceNotFound(invoice_id)
        return text


def _today() -> date:
    return date.today()
