from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from billbook.services.exceptions import BillingError
from billbook.utils.validators import validate_id


class InvoiceViewScreen(ModalScreen):
    """Show the stored document of an invoice."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def __init__(self, invoice_id: str = "") -> None:
        super().__init__()
        self._initial_id = invoice_id
        self.document: str | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("View invoice", id="header-bar")
                yield Button("✕", id="btn-modal-close")
            yield Label("Invoice number", classes="form-label")
            yield Input(
                value=self._initial_id,
                placeholder="9001",
                id="invoice-id-input",
            )
            yield Label("", id="error-label")
            with VerticalScroll(id="document-scroll"):
                yield Static("", id="document-text", markup=False)
            with Horizontal(classes="button-bar"):
                yield Button("✕ Close", id="btn-close", variant="error")
                yield Button("▶ Show", id="btn-show", variant="primary")

    def on_mount(self) -> None:
        if self._initial_id:
            self._do_show()
        else:
            self.query_one("#invoice-id-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._do_show()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        match event.button.id:
            case "btn-show":
                self._do_show()
            case "btn-close" | "btn-modal-close":
                self.app.pop_screen()

    def _do_show(self) -> None:
        error_label = self.query_one("#error-label", Label)
        error_label.update("")
        try:
            invoice_id = validate_id(
                self.query_one("#invoice-id-input", Input).value, "Invoice number"
            )
        except ValueError as e:
            self._set_document(None)
            error_label.update(str(e))
            return

        ledger = self.app.ledger  # type: ignore[attr-defined]
        try:
            text = ledger.invoices.read_document(invoice_id)
        except BillingError as e:
            self._set_document(None)
            error_label.update(str(e))
            return
        self._set_document(text)

    def _set_document(self, text: str | None) -> None:
        self.document = text
        self.query_one("#document-text", Static).update(text or "")

    def action_go_back(self) -> None:
        self.app.pop_screen()
