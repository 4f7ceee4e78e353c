from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Label, Static

from billbook.utils.formatters import format_money


class DashboardScreen(Screen):
    """Main screen: ledger summary and the list of issued invoices."""

    BINDINGS = [
        Binding("n", "new_invoice", "New invoice"),
        Binding("c", "customers", "Customers"),
        Binding("i", "items", "Items"),
        Binding("v", "view_invoice", "View"),
        Binding("r", "report", "Sales report"),
        Binding("h", "help", "Help"),
        Binding("q", "quit", "Quit"),
    ]

    def compose(self) -> ComposeResult:
        ledger = self.app.ledger  # type: ignore[attr-defined]

        with Horizontal(id="top-bar"):
            yield Static(ledger.settings.company_name, id="app-title")

        with Horizontal(id="info-bar"):
            with Vertical(id="card-customers", classes="info-card"):
                yield Label("Customers", classes="card-title")
                yield Label("…", id="customers-info", classes="card-value")
            with Vertical(id="card-items", classes="info-card"):
                yield Label("Items", classes="card-title")
                yield Label("…", id="items-info", classes="card-value")
            with Vertical(id="card-seq", classes="info-card"):
                yield Label("Invoices", classes="card-title")
                yield Label("…", id="seq-info", classes="card-value")

        with Horizontal(id="action-bar"):
            yield Button("+ New invoice", id="btn-new", variant="primary", tooltip="Create an invoice (n)")
            yield Button("Customers", id="btn-customers", tooltip="Manage customers (c)")
            yield Button("Items", id="btn-items", tooltip="Manage items (i)")
            yield Button("▶ View", id="btn-view", tooltip="Show the selected invoice (v)")
            yield Button("Σ Report", id="btn-report", variant="success", tooltip="Sales by date range (r)")

        yield Static("Invoices", id="section-title")
        yield DataTable(id="recent-table", cursor_type="row")
        yield Static(
            "No invoices yet.\n"
            "Add customers ([bold]c[/bold]) and items ([bold]i[/bold]), "
            "then press [bold]n[/bold] to create an invoice.",
            id="empty-state",
        )
        yield Footer()

    def on_mount(self) -> None:
        self._refresh()
        self.query_one("#recent-table", DataTable).focus()

    def on_screen_resume(self) -> None:
        # Returning from a modal: catalogs or invoices may have changed
        if self.is_mounted:
            self._refresh()

    def on_key(self, event: Key) -> None:
        table = self.query_one("#recent-table", DataTable)
        match event.key:
            case "j":
                table.action_cursor_down()
            case "k":
                table.action_cursor_up()
            case "enter":
                self.action_view_invoice()
            case _:
                return
        event.prevent_default()
        event.stop()

    # --- Data loading ---

    def _refresh(self) -> None:
        self._load_summary()
        self._populate_table()

    def _load_summary(self) -> None:
        ledger = self.app.ledger  # type: ignore[attr-defined]
        self._update_label("customers-info", f"{len(ledger.customers)} registered")
        self._update_label("items-info", f"{len(ledger.items)} in catalog")
        self._update_label("seq-info", f"Next: #{ledger.invoices.next_invoice_id()}")

    def _populate_table(self) -> None:
        ledger = self.app.ledger  # type: ignore[attr-defined]
        table = self.query_one("#recent-table", DataTable)
        table.clear(columns=True)
        table.add_columns("Invoice", "Customer", "Date", "Discount %", "Shipping")

        for record in ledger.invoices.list_invoices():
            customer = ledger.customers.find_by_id(record.customer_id)
            name = customer.name if customer else f"#{record.customer_id} (removed)"
            table.add_row(
                str(record.id),
                name,
                record.date,
                format_money(record.discount_percent),
                format_money(record.shipping),
                key=str(record.id),
            )

        has_rows = table.row_count > 0
        table.display = has_rows
        self.query_one("#empty-state", Static).display = not has_rows

    def _update_label(self, label_id: str, text: str) -> None:
        self.query_one(f"#{label_id}", Label).update(text)

    def _selected_invoice(self) -> str | None:
        """Return the id of the selected invoice row, or None if the table is empty."""
        table = self.query_one("#recent-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return str(row_key.value)

    # --- Event handlers ---

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-new":
                self.action_new_invoice()
            case "btn-customers":
                self.action_customers()
            case "btn-items":
                self.action_items()
            case "btn-view":
                self.action_view_invoice()
            case "btn-report":
                self.action_report()

    # --- Actions ---

    def action_new_invoice(self) -> None:
        from billbook.tui.screens.new_invoice import NewInvoiceScreen

        self.app.push_screen(NewInvoiceScreen())

    def action_customers(self) -> None:
        from billbook.tui.screens.customers import CustomersScreen

        self.app.push_screen(CustomersScreen())

    def action_items(self) -> None:
        from billbook.tui.screens.items import ItemsScreen

        self.app.push_screen(ItemsScreen())

    def action_view_invoice(self) -> None:
        from billbook.tui.screens.invoice_view import InvoiceViewScreen

        self.app.push_screen(InvoiceViewScreen(invoice_id=self._selected_invoice() or ""))

    def action_report(self) -> None:
        from billbook.tui.screens.report import ReportScreen

        self.app.push_screen(ReportScreen())

    def action_help(self) -> None:
        from billbook.tui.screens.help import HelpScreen

        self.app.push_screen(HelpScreen())

    def action_quit(self) -> None:
        self.app.exit()
