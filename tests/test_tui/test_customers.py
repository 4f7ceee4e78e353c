from __future__ import annotations

import pytest
from textual.widgets import Button, DataTable, Input, Label

from billbook.tui.app import BillbookApp
from billbook.tui.screens.customers import CustomersScreen
from billbook.tui.screens.dashboard import DashboardScreen


@pytest.mark.asyncio
async def test_customers_screen_opens_on_c(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        screen = app.screen
        assert isinstance(screen, CustomersScreen)
        assert screen.query_one("#list-container").display is True
        assert screen.query_one("#form-container").display is False


@pytest.mark.asyncio
async def test_table_lists_customers(ledger, customer):
    ledger.customers.add("Globex", email="ap@globex.example")
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        await pilot.pause()
        table = app.screen.query_one("#records-table", DataTable)
        assert table.row_count == 2
        assert table.get_row("1001")[1] == "Acme Corp"


@pytest.mark.asyncio
async def test_search_filters(ledger, customer):
    ledger.customers.add("Globex")
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        screen = app.screen
        screen.query_one("#search-input", Input).value = "glob"
        await pilot.pause()
        table = screen.query_one("#records-table", DataTable)
        assert table.row_count == 1
        assert table.get_row("1002")[1] == "Globex"


@pytest.mark.asyncio
async def test_add_customer(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        screen = app.screen
        screen.query_one("#btn-new-record", Button).press()
        await pilot.pause()
        assert screen.query_one("#form-container").display is True

        screen.query_one("#field-name", Input).value = "Initech"
        screen.query_one("#field-email", Input).value = "ap@initech.example"
        screen.query_one("#btn-save-record", Button).press()
        await pilot.pause()

        assert [c.name for c in ledger.customers.list_all()] == ["Initech"]
        assert ledger.customers.list_all()[0].id == 1001
        assert screen.query_one("#list-container").display is True
        assert screen.query_one("#records-table", DataTable).row_count == 1


@pytest.mark.asyncio
async def test_add_without_name_shows_error(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        screen = app.screen
        screen.query_one("#btn-new-record", Button).press()
        await pilot.pause()
        screen.query_one("#btn-save-record", Button).press()
        await pilot.pause()
        error_text = screen.query_one("#form-error-label", Label).render().plain
        assert "Name is required" in error_text
        assert len(ledger.customers) == 0


@pytest.mark.asyncio
async def test_remove_needs_two_presses(ledger, customer):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        await pilot.pause()
        screen = app.screen
        screen.query_one("#btn-remove", Button).press()
        await pilot.pause()
        assert len(ledger.customers) == 1

        screen.query_one("#btn-remove", Button).press()
        await pilot.pause()
        assert len(ledger.customers) == 0
        assert screen.query_one("#records-table", DataTable).row_count == 0


@pytest.mark.asyncio
async def test_escape_from_form_returns_to_list(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("c")
        screen = app.screen
        screen.query_one("#btn-new-record", Button).press()
        await pilot.pause()
        await pilot.press("escape")
        assert screen.query_one("#list-container").display is True
        await pilot.press("escape")
        assert isinstance(app.screen, DashboardScreen)


@pytest.mark.asyncio
async def test_duplicate_customer_row_listed_once(memory_store, settings):
    from billbook.config import CUSTOMERS
    from billbook.ledger import Ledger

    memory_store.append(CUSTOMERS, ["1001", "Acme", "", "", ""])
    memory_store.append(CUSTOMERS, ["1001", "Acme again", "", "", ""])
    app = BillbookApp(ledger=Ledger(memory_store, settings))
    async with app.run_test() as pilot:
        await pilot.press("c")
        await pilot.pause()
        table = app.screen.query_one("#records-table", DataTable)
        assert table.row_count == 1
        assert table.get_row("1001")[1] == "Acme"
