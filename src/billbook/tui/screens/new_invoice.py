from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Input, Label, MaskedInput, Static

from billbook.services.exceptions import BillingError
from billbook.services.invoicing import compute_totals
from billbook.utils.formatters import format_money, format_percent, format_quantity
from billbook.utils.validators import (
    validate_amount,
    validate_date,
    validate_id,
    validate_percent,
    validate_quantity,
)

if TYPE_CHECKING:
    from billbook.models.invoice import Invoice


class NewInvoiceScreen(ModalScreen):
    """Three-phase screen: form -> preview -> result."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._phase = "form"
        self._lines: list[tuple[str, str]] = []
        self._invoice: Invoice | None = None
        self._saved_id: int | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("New invoice", id="header-bar")
                yield Button("✕", id="btn-modal-close")

            # Phase 1: Form
            with Container(id="form-container"):
                yield Label("Customer ID", classes="form-label")
                yield Input(placeholder="1001", id="customer-id")
                yield Label("Line: item ID or SKU, quantity", classes="form-label")
                with Horizontal(classes="line-entry"):
                    yield Input(placeholder="WIDGET or 5001", id="line-key")
                    yield Input(placeholder="1", id="line-qty")
                    yield Button("+ Add line", id="btn-add-line")
                yield DataTable(id="lines-table", cursor_type="row")
                yield Label("Discount percent", classes="form-label")
                yield Input(placeholder="0", id="discount")
                yield Label("Shipping", classes="form-label")
                yield Input(placeholder="0.00", id="shipping")
                yield Label("Date (YYYY-MM-DD, empty for today)", classes="form-label")
                yield MaskedInput(
                    template="0000-00-00",
                    id="issue-date",
                    tooltip="Issue date (YYYY-MM-DD); leave empty for today",
                )
                yield Label("Note", classes="form-label")
                yield Input(placeholder="Optional note", id="note")
                yield Label("", id="error-label")
                with Horizontal(classes="button-bar"):
                    yield Button("✕ Close", id="btn-form-close")
                    yield Button("▶ Preview", id="btn-preview", variant="primary")

            # Phase 2: Preview
            with Container(id="preview-container"):
                yield DataTable(id="preview-table", show_header=False)
                with Horizontal(classes="button-bar"):
                    yield Button("← Back", id="btn-preview-back")
                    yield Button("⤓ Save invoice", id="btn-save", variant="primary")
                yield Label("", id="status-label")

            # Phase 3: Result
            with Container(id="result-container"):
                yield Label("", id="result-info")
                with Horizontal(classes="button-bar"):
                    yield Button("✕ Close", id="btn-result-close")
                    yield Button("▶ View invoice", id="btn-result-view")

    def on_mount(self) -> None:
        table = self.query_one("#lines-table", DataTable)
        table.add_columns("No", "Item", "Description", "Qty", "Unit", "Tax %")
        self._show_phase("form")
        self.query_one("#customer-id", Input).focus()

    def _show_phase(self, phase: str) -> None:
        self._phase = phase
        self.query_one("#form-container").display = phase == "form"
        self.query_one("#preview-container").display = phase == "preview"
        self.query_one("#result-container").display = phase == "result"

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-add-line":
                self._add_line()
            case "btn-preview":
                self._do_preview()
            case "btn-form-close" | "btn-result-close" | "btn-modal-close":
                self.app.pop_screen()
            case "btn-preview-back":
                self._show_phase("form")
            case "btn-save":
                self._do_save()
            case "btn-result-view":
                self._open_view()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id in ("line-key", "line-qty"):
            self._add_line()

    # --- Lines ---

    def _add_line(self) -> None:
        error_label = self.query_one("#error-label", Label)
        error_label.update("")
        key_input = self.query_one("#line-key", Input)
        qty_input = self.query_one("#line-qty", Input)

        key = key_input.value.strip()
        if not key:
            error_label.update("Enter an item ID or SKU")
            return
        try:
            quantity = validate_quantity(qty_input.value or "1")
        except ValueError as e:
            error_label.update(str(e))
            return

        ledger = self.app.ledger  # type: ignore[attr-defined]
        item = ledger.items.resolve(key)
        if item is None:
            error_label.update(f"Item not found: {key}")
            return

        self._lines.append((key, quantity))
        self.query_one("#lines-table", DataTable).add_row(
            str(len(self._lines)),
            item.code,
            item.description,
            format_quantity(quantity),
            format_money(item.unit_price),
            format_percent(item.tax_percent),
        )
        key_input.value = ""
        qty_input.value = ""
        key_input.focus()

    # --- Preview ---

    def _do_preview(self) -> None:
        error_label = self.query_one("#error-label", Label)
        error_label.update("")

        try:
            customer_id = validate_id(self.query_one("#customer-id", Input).value, "Customer ID")
            discount = validate_percent(self.query_one("#discount", Input).value, "Discount")
            shipping = validate_amount(self.query_one("#shipping", Input).value, "Shipping")
            raw_date = self.query_one("#issue-date", MaskedInput).value.strip()
            issue_date = date.fromisoformat(validate_date(raw_date)) if raw_date else None
        except ValueError as e:
            error_label.update(str(e))
            return

        ledger = self.app.ledger  # type: ignore[attr-defined]
        try:
            invoice = ledger.invoices.build_invoice(
                customer_id,
                self._lines,
                discount_percent=discount,
                shipping=shipping,
                note=self.query_one("#note", Input).value.strip(),
                date=issue_date,
            )
        except BillingError as e:
            error_label.update(str(e))
            return

        self._invoice = invoice
        self._show_preview(invoice)

    def _show_preview(self, invoice: Invoice) -> None:
        ledger = self.app.ledger  # type: ignore[attr-defined]
        customer = ledger.customers.get(invoice.customer_id)
        totals = compute_totals(invoice)

        table = self.query_one("#preview-table", DataTable)
        table.clear(columns=True)
        table.add_columns("Field", "Value")
        table.add_row("Invoice", f"#{invoice.id}")
        table.add_row("Customer", f"{customer.name} (ID {customer.id})")
        table.add_row("Date", invoice.issue_date.isoformat())
        table.add_row("Lines", str(len(invoice.lines)))
        table.add_row("Subtotal", format_money(totals.subtotal))
        table.add_row("Tax", format_money(totals.tax))
        table.add_row(
            f"Discount ({format_percent(invoice.discount_percent)}%)",
            format_money(-totals.discount_amount),
        )
        table.add_row("Shipping", format_money(totals.shipping))
        table.add_row("TOTAL", format_money(totals.total))

        self.query_one("#status-label", Label).update("")
        self._show_phase("preview")

    # --- Save ---

    def _do_save(self) -> None:
        invoice = self._invoice
        if invoice is None:
            return
        ledger = self.app.ledger  # type: ignore[attr-defined]
        try:
            location = ledger.invoices.save_invoice(invoice)
        except BillingError as e:
            self.query_one("#status-label", Label).update(f"Error: {e}")
            self.notify(f"Error saving invoice: {e}", severity="error", timeout=5)
            return

        self._saved_id = invoice.id
        self.query_one("#result-info", Label).update(
            f"Invoice #{invoice.id} created.\n\nSaved as: {location}"
        )
        self._show_phase("result")
        self.notify(f"Invoice #{invoice.id} saved", timeout=3)

    def _open_view(self) -> None:
        if self._saved_id is None:
            return
        from billbook.tui.screens.invoice_view import InvoiceViewScreen

        self.app.push_screen(InvoiceViewScreen(invoice_id=str(self._saved_id)))

    def action_go_back(self) -> None:
        if self._phase == "preview":
            self._show_phase("form")
        else:
            self.app.pop_screen()
