from __future__ import annotations

from textual.app import App
from textual.binding import Binding

from billbook.ledger import Ledger


class BillbookApp(App):
    """billbook TUI application."""

    CSS_PATH = "app.tcss"
    TITLE = "billbook"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, ledger: Ledger | None = None):
        super().__init__()
        self.ledger = ledger or Ledger.open()

    def on_mount(self) -> None:
        from billbook.tui.screens.dashboard import DashboardScreen

        self.push_screen(DashboardScreen())
