"""
Flight + Hotel search UI tests (async, live site, `-m e2e`).
"""

import allure
import pytest

from tripcheck.ui_testing.pages.flight_search_page import FlightSearchPage


@allure.epic("UI Testing")
@allure.feature("Flight + Hotel Search")
class TestFlightSearch:

    @allure.story("Happy Path")
    @allure.title("Round trip Chennai → Bengaluru, 2 adults + 1 child, Business")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.P0
    @pytest.mark.e2e
    @pytest.mark.flight
    @pytest.mark.asyncio
    async def test_round_trip_search(self, flight_page: FlightSearchPage, runtime_store):
        await flight_page.open_round_trip()
        await flight_page.select_dates(return_days=5)
        await flight_page.select_passengers_and_search()

        assert runtime_store.get("AdultCounts") == "2"
        assert runtime_store.has("SelectedFlightDate")
        assert runtime_store.has("SelectedReturnDate")
