from __future__ import annotations

from unittest.mock import patch

import pytest

from billbook.tui.app import BillbookApp


@pytest.mark.asyncio
async def test_app_launches(ledger):
    app = BillbookApp(ledger=ledger)
    async with app.run_test():
        assert app.title == "billbook"


@pytest.mark.asyncio
async def test_app_default_screen_is_dashboard(ledger):
    from billbook.tui.screens.dashboard import DashboardScreen

    app = BillbookApp(ledger=ledger)
    async with app.run_test():
        assert isinstance(app.screen, DashboardScreen)


def test_app_opens_configured_ledger(ledger):
    with patch("billbook.tui.app.Ledger.open", return_value=ledger) as mock_open:
        app = BillbookApp()
    mock_open.assert_called_once_with()
    assert app.ledger is ledger
