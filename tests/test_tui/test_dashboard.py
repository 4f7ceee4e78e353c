from __future__ import annotations

import pytest
from textual.widgets import Button, DataTable, Label, Static

from billbook.tui.app import BillbookApp
from billbook.tui.screens.dashboard import DashboardScreen


@pytest.mark.asyncio
async def test_empty_ledger_shows_empty_state(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.pause()
        screen = app.screen
        assert screen.query_one("#recent-table", DataTable).row_count == 0
        assert screen.query_one("#empty-state", Static).display is True
        assert "Next: #9001" in screen.query_one("#seq-info", Label).render().plain


@pytest.mark.asyncio
async def test_invoices_listed(seeded_ledger):
    app = BillbookApp(ledger=seeded_ledger)
    async with app.run_test() as pilot:
        await pilot.pause()
        table = app.screen.query_one("#recent-table", DataTable)
        assert table.row_count == 1
        assert table.get_row("9001")[1] == "Acme Corp"
        assert app.screen.query_one("#empty-state", Static).display is False


@pytest.mark.asyncio
async def test_company_name_in_top_bar(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.pause()
        assert "ACME TRADING" in app.screen.query_one("#app-title", Static).render().plain


@pytest.mark.asyncio
async def test_removed_customer_still_listed(seeded_ledger, customer):
    seeded_ledger.customers.remove(customer.id)
    app = BillbookApp(ledger=seeded_ledger)
    async with app.run_test() as pilot:
        await pilot.pause()
        table = app.screen.query_one("#recent-table", DataTable)
        assert "(removed)" in table.get_row("9001")[1]


@pytest.mark.asyncio
async def test_shortcuts_open_screens(ledger):
    from billbook.tui.screens.customers import CustomersScreen
    from billbook.tui.screens.items import ItemsScreen
    from billbook.tui.screens.report import ReportScreen

    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        for key, screen_cls in (("c", CustomersScreen), ("i", ItemsScreen), ("r", ReportScreen)):
            await pilot.press(key)
            assert isinstance(app.screen, screen_cls)
            await pilot.press("escape")
            assert isinstance(app.screen, DashboardScreen)


@pytest.mark.asyncio
async def test_view_opens_selected_invoice(seeded_ledger):
    from billbook.tui.screens.invoice_view import InvoiceViewScreen

    app = BillbookApp(ledger=seeded_ledger)
    async with app.run_test() as pilot:
        await pilot.pause()
        app.screen.query_one("#btn-view", Button).press()
        await pilot.pause()
        screen = app.screen
        assert isinstance(screen, InvoiceViewScreen)
        assert screen.document is not None
        assert "INVOICE #9001" in screen.document


@pytest.mark.asyncio
async def test_refreshes_after_modal_closes(ledger, customer, widget):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        ledger.invoices.create_invoice(customer.id, [("WIDGET", "1")])
        await pilot.press("escape")
        await pilot.pause()
        assert app.screen.query_one("#recent-table", DataTable).row_count == 1


@pytest.mark.asyncio
async def test_q_quits(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("q")
        await pilot.pause()
    assert app.return_code == 0


@pytest.mark.asyncio
async def test_duplicate_invoice_row_does_not_break_launch(seeded_ledger, customer):
    from billbook.config import INVOICES

    seeded_ledger.store.append(INVOICES, ["9001", str(customer.id), "2024-03-16", "0.00", "0.00"])
    app = BillbookApp(ledger=seeded_ledger)
    async with app.run_test() as pilot:
        await pilot.pause()
        table = app.screen.query_one("#recent-table", DataTable)
        assert table.row_count == 1
        assert table.get_row("9001")[2] == "2024-03-15"
