"""
================================================================================
Flight + Hotel Search Page Object (Async / Playwright)
================================================================================

Round-trip Flight + Hotel search: airports, travel dates, passengers and
cabin class, then search and wait for the results loader to go away.

Runtime keys:
  SelectedFlightDate, SelectedReturnDate, AdultCounts

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from tripcheck.ui_testing.framework.config_loader import get_config
from tripcheck.ui_testing.framework.date_utils import format_date_after_days, format_today
from tripcheck.ui_testing.framework.page_base import BasePage


class FlightSearchPage(BasePage):
    """Flight + Hotel search page object (async)."""

    PAGE_TITLE = "EaseMyTrip"

    # Results can take a while to render
    LOADER_TIMEOUT_MS = 60000

    def __init__(self, page, **kwargs):
        super().__init__(page, **kwargs)

        self.flight_hotel_tab = self.target(
            '(//*[text()="FLIGHT+HOTEL"])[1] | (//*[text()="Flight + Hotel"])[1]',
            "Flight + Hotel tab",
        )
        self.round_trip = self.target('//*[text()=" Round Trip "]', "Round trip")
        self.departure_airport = self.target('(//*[text()="Departure Airport"])[1]', "Departure airport")
        self.from_input = self.target('(//div[@id="fromautoFill_in"]//input[@type="text"])[1]', "From input")
        self.destination_airport = self.target('(//*[text()="Destination Airport"])[1]', "Destination airport")
        self.to_input = self.target('(//div[@id="toautoFill_in"]//input[@type="text"])[1]', "To input")
        self.travel_date = self.target('//*[@id="Oneway"]', "Travel date")
        self.return_date = self.target('//*[@id="roundTripDate"]', "Return date")
        self.guests = self.target('//*[text()="Guests & Class "]', "Guests & class")
        self.adult_count = self.target('//*[@name="quantity"]', "Adult count")
        self.adult_plus = self.target('//*[@class="add plus_box1"]', "Adult +")
        self.child_plus = self.target('(//*[@field="quantity1"])[2]', "Child +")
        self.business_class = self.target('//*[text()=" Business "]', "Business class")
        self.done = self.target('//*[text()="Done"]', "Guests done")
        self.search_button = self.target('//button[@type="submit"]', "Search")
        self.loader = self.target('//*[@id="Loader"]', "Results loader")

    def _airport_option(self, name: str):
        return self.target(f'//*[text()="{name}"]', f"Airport option {name}")

    @allure.step("Open Flight + Hotel round trip {origin} → {destination}")
    async def open_round_trip(
        self,
        origin: str = "chennai",
        origin_option: str = "Chennai(MAA)",
        destination: str = "bangalore",
        destination_option: str = "Bengaluru(BLR)",
    ) -> "FlightSearchPage":
        await self.navigate_to(get_config().get("app.easy_url", self.base_url))
        await self.click(self.flight_hotel_tab)
        await self.click(self.round_trip)

        await self.click(self.departure_airport)
        await self.type_text(self.from_input, origin)
        await self.click(self._airport_option(origin_option))

        await self.click(self.destination_airport)
        await self.type_text(self.to_input, destination)
        await self.click(self._airport_option(destination_option))
        return self

    @allure.step("Select travel dates (today, +{return_days}d)")
    async def select_dates(self, return_days: int = 5) -> None:
        await self.click(self.travel_date)
        self.store.set("SelectedFlightDate", format_today("dd"))
        day = int(self.store.get("SelectedFlightDate"))
        await self.click(self.target(f'(//span[contains(text(),"{day}")])[1]', f"Travel day {day}"))

        await self.click(self.return_date)
        self.store.set("SelectedReturnDate", format_date_after_days(return_days, "dd"))
        day = int(self.store.get("SelectedReturnDate"))
        await self.click(self.target(f'(//span[contains(text(),"{day}")])[2]', f"Return day {day}"))

    @allure.step("Select 2 adults + 1 child, Business class, and search")
    async def select_passengers_and_search(self) -> None:
        await self.click(self.guests)

        if await self.store_input_value(self.adult_count, "AdultCounts") == "1":
            await self.click(self.adult_plus)
            logger.info("Adult count increased to 2")

        if await self.store_input_value(self.adult_count, "AdultCounts") == "2":
            await self.click(self.child_plus)
            logger.info("Child count increased to 1")

        await self.click(self.business_class)
        await self.click(self.done)
        await self.click(self.search_button)
        await self.wait_for_disappear(self.loader, timeout=self.LOADER_TIMEOUT_MS)


__all__ = [
    "FlightSearchPage",
]
