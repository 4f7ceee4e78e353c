from __future__ import annotations

import pytest
from textual.widgets import Button

from billbook.tui.app import BillbookApp
from billbook.tui.screens.dashboard import DashboardScreen
from billbook.tui.screens.help import HelpScreen


@pytest.mark.asyncio
async def test_help_screen_opens(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("h")
        assert isinstance(app.screen, HelpScreen)


@pytest.mark.asyncio
async def test_help_screen_closes_on_escape(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("h")
        assert isinstance(app.screen, HelpScreen)
        await pilot.press("escape")
        assert isinstance(app.screen, DashboardScreen)


@pytest.mark.asyncio
async def test_help_screen_closes_on_button(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test() as pilot:
        await pilot.press("h")
        app.screen.query_one("#btn-close", Button).press()
        await pilot.pause()
        assert isinstance(app.screen, DashboardScreen)
