from __future__ import annotations

from datetime import date

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Input, Label, MaskedInput, Static

from billbook.services.reports import SalesReport
from billbook.utils.formatters import format_money
from billbook.utils.validators import validate_date


class ReportScreen(ModalScreen):
    """Sales by inclusive date range, read back from the stored documents."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.report: SalesReport | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Sales report", id="header-bar")
                yield Button("✕", id="btn-modal-close")
            with Horizontal(id="date-bar"):
                yield Label("From:", classes="form-label")
                yield MaskedInput(
                    template="0000-00-00",
                    id="start-date",
                    tooltip="First day of the range (YYYY-MM-DD)",
                )
                yield Label("To:", classes="form-label")
                yield MaskedInput(
                    template="0000-00-00",
                    id="end-date",
                    tooltip="Last day of the range (YYYY-MM-DD)",
                )
            yield Label("", id="error-label")
            yield DataTable(id="report-table", cursor_type="row")
            yield Label("", id="report-total")
            with Horizontal(classes="button-bar"):
                yield Button("✕ Close", id="btn-close", variant="error")
                yield Button("Σ Run", id="btn-run", variant="primary")

    def on_mount(self) -> None:
        table = self.query_one("#report-table", DataTable)
        table.add_columns("Invoice", "Customer", "Date", "Total")
        today = date.today()
        self.query_one("#start-date", MaskedInput).value = today.replace(day=1).isoformat()
        self.query_one("#end-date", MaskedInput).value = today.isoformat()
        self.query_one("#start-date", MaskedInput).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._run_report()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-run":
                self._run_report()
            case "btn-close" | "btn-modal-close":
                self.app.pop_screen()

    def _run_report(self) -> None:
        error_label = self.query_one("#error-label", Label)
        error_label.update("")
        try:
            start = validate_date(self.query_one("#start-date", MaskedInput).value)
            end = validate_date(self.query_one("#end-date", MaskedInput).value)
        except ValueError as e:
            error_label.update(str(e))
            return
        if start > end:
            error_label.update("Start date is after end date")
            return

        ledger = self.app.ledger  # type: ignore[attr-defined]
        report = ledger.sales_report(start, end)
        self.report = report

        table = self.query_one("#report-table", DataTable)
        table.clear()
        for row in report.rows:
            table.add_row(row.invoice_id, row.customer_id, row.date, format_money(row.total))
        self.query_one("#report-total", Label).update(
            f"{len(report.rows)} invoice(s)   Total sales: {format_money(report.total_sales)}"
        )

    def action_go_back(self) -> None:
        self.app.pop_screen()
