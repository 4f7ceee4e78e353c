from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, RichLog, Static

from billbook.config import get_config_dir, get_data_dir


class HelpScreen(ModalScreen):
    """Help and keyboard shortcuts."""

    BINDINGS = [
        Binding("escape", "go_back", "Back"),
    ]

    def compose(self) -> ComposeResult:
        with Vertical(id="modal-dialog"):
            with Horizontal(id="modal-title-bar"):
                yield Static("Help", id="header-bar")
                yield Button("✕", id="btn-modal-close")
            yield RichLog(id="help-content", wrap=True, markup=True)
            with Horizontal(classes="button-bar"):
                yield Button("✕ Close", id="btn-close")

    def on_mount(self) -> None:
        log = self.query_one("#help-content", RichLog)

        log.write("[bold]billbook[/bold]")
        log.write("")
        log.write(
            "Single-operator billing ledger: customers, items and invoices kept "
            "as flat CSV files, one text document per invoice."
        )
        log.write("")

        log.write("[bold]Keyboard shortcuts[/bold]")
        log.write("")
        log.write("  [bold cyan]n[/bold cyan]  New invoice        Build, preview and save an invoice")
        log.write("  [bold cyan]c[/bold cyan]  Customers          List, search, add and remove")
        log.write("  [bold cyan]i[/bold cyan]  Items              List, search, add and remove")
        log.write("  [bold cyan]v[/bold cyan]  View               Show the selected invoice document")
        log.write("  [bold cyan]r[/bold cyan]  Sales report       Totals over a date range")
        log.write("  [bold cyan]h[/bold cyan]  Help               This screen")
        log.write("  [bold cyan]q[/bold cyan]  Quit               Leave the application")
        log.write("")
        log.write("[bold]Table navigation[/bold]")
        log.write("")
        log.write("  [bold cyan]j / ↓[/bold cyan]  Next row")
        log.write("  [bold cyan]k / ↑[/bold cyan]  Previous row")
        log.write("  [bold cyan]enter[/bold cyan]   Open selected invoice")
        log.write("")

        log.write("[bold]Files[/bold]")
        log.write("")
        log.write(f"  Config: {get_config_dir()}")
        log.write(f"  Data:   {get_data_dir()}")
        log.write("")
        log.write(
            "Invoice documents are never rewritten after saving. Removing a "
            "customer or item does not touch invoices that already reference it."
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id in ("btn-close", "btn-modal-close"):
            self.app.pop_screen()

    def action_go_back(self) -> None:
        self.app.pop_screen()
