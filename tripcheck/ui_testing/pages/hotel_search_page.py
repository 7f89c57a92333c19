"""
================================================================================
Hotel Search Page Object (Async / Playwright)
================================================================================

Hotel search flow on the travel site home page:
  city selection → check-in/check-out → rooms & guests → search
  → results summary verification → sort by price.

Captured values are written to the page's RuntimeStore so later steps can
compare what was selected with what the results page shows.

Runtime keys:
  HotelBookingTab, EnteredCityName, RawCheckIn, RawCheckOut,
  CleanCheckIn, CleanCheckOut, RoomsGuests, Check_In_Date, Check_Out_Date

================================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

import allure
from loguru import logger
from playwright.async_api import expect

from tripcheck.ui_testing.framework.config_loader import get_config
from tripcheck.ui_testing.framework.date_utils import (
    clean_and_convert_to_ddmmyyyy,
    format_date_after_days,
    random_in_range,
)
from tripcheck.ui_testing.framework.page_base import BasePage
from tripcheck.ui_testing.framework.target import Target


def _count(text: str) -> int:
    digits = re.sub(r"[^0-9]", "", text or "")
    return int(digits) if digits else 0


class HotelSearchPage(BasePage):
    """Hotel search page object (async)."""

    PAGE_TITLE = "EaseMyTrip"

    def __init__(self, page, **kwargs):
        super().__init__(page, **kwargs)

        # Search form
        self.hotel_tab = self.target('(//span[text()="HOTELS"])[1] | (//span[text()="Hotels"])[1]', "Hotels tab")
        self.city_box = self.target("//div[contains(@class,'selectHtlCity')]", "City selector")
        self.city_input = self.target("//input[@id='txtCity']", "City input")
        self.selected_city = self.target('//span[@class="hp_city"]', "Selected city")
        self.check_in = self.target("//span[@id='txtcid']", "Check-in field")
        self.check_out = self.target("//span[@id='txtcod']", "Check-out field")
        self.check_in_text = self.target('(//p[contains(@class,"fnt")])[1]', "Check-in date text")
        self.check_out_text = self.target('(//p[contains(@class,"fnt")])[2]', "Check-out date text")

        # Rooms & guests panel
        self.rooms_guests = self.target("//span[text()=' Room ']", "Rooms & guests")
        self.adult_plus = self.target('//a[@id="Adults_room_1_1_plus"]', "Room 1 adult +")
        self.adult_count = self.target('//span[@id="Adults_room_1_1"]', "Room 1 adult count")
        self.child_plus = self.target('//a[@id="Children_room_1_1_plus"]', "Room 1 child +")
        self.child_count = self.target('//span[contains(@id,"Children_room_1_1")]', "Room 1 child count")
        self.child_age = self.target('//select[contains(@id,"Child_Age_1_1")]', "Room 1 child age")
        self.add_room = self.target('//a[@id="addhotelRoom"]', "Add room")
        self.room_2 = self.target("//span[text()='Room 2:']", "Room 2 header")
        self.adult_plus_2 = self.target('//a[@id="Adults_room_2_2_plus"]', "Room 2 adult +")
        self.adult_count_2 = self.target('//span[@id="Adults_room_2_2"]', "Room 2 adult count")
        self.child_plus_2 = self.target('//a[@id="Children_room_2_2_plus"]', "Room 2 child +")
        self.child_count_2 = self.target('//span[contains(@id,"Children_room_2_2")]', "Room 2 child count")
        self.done = self.target('//a[@id="exithotelroom"]', "Rooms done")
        self.pax_panel = self.target('//div[@id="divPaxPanel"]', "Rooms & guests summary")
        self.search_button = self.target('//input[@id="btnSearch"]', "Search hotels")

        # Results page
        self.result_city = self.target(
            '//label[contains(text(),"City name, Location or Specific hotel")]/..//input[@type="text"]',
            "Results city input",
        )
        self.result_rooms_guests = self.target(
            '//span[contains(@class,"guests_selected guests-selected")]',
            "Results rooms & guests",
        )
        self.result_check_in = self.target('//div[text()="Check-In"]/../..//input[@type="text"]', "Results check-in")
        self.result_check_out = self.target('//div[text()="Check-Out"]/../..//input[@type="text"]', "Results check-out")
        self.popularity = self.target('//*[text()="Popularity"]', "Sort: Popularity")
        self.price_high_to_low = self.target(
            '//*[text()="High to Low"]/../..//input[@type="radio"]',
            "Sort: Price high to low",
        )
        self.hotel_names = self.target(
            '//div[contains(@class,"d-flex gap-10 aradjstfull")]/../..//div[contains(@class,"htl-nm hand")]',
            "Hotel names",
        )
        self.hotel_reviews = self.target(
            '//div[contains(@class,"htl-rating d-flex align-items-center ng-star")]',
            "Hotel reviews",
        )
        self.hotel_prices = self.target(
            '//div[@class="prcntx ng-star-inserted"]/..//div[contains(@class,"htlprc")]',
            "Hotel prices",
        )

    def _calendar_day(self, day: str, label: str) -> Target:
        # The calendar renders days without leading zeros
        return self.target(f'(//a[text()="{int(day)}"])[1]', f"{label} day {int(day)}")

    @allure.step("Open travel site home page")
    async def open(self) -> "HotelSearchPage":
        await self.navigate_to(get_config().get("app.easy_url", self.base_url))
        return self

    @allure.step("Select city {city} ({option})")
    async def select_city(self, city: str = "Goa", option: str = "North Goa") -> str:
        """Open the Hotels tab, search for `city` and pick the `option` suggestion."""
        await self.wait_for_visible(self.hotel_tab)
        await self.store_text_content(self.hotel_tab, "HotelBookingTab")
        await self.click(self.hotel_tab)

        await self.wait_for_visible(self.city_box)
        await self.click(self.city_box)
        await self.type_text(self.city_input, city)
        await self.click(self.target(f'//div[contains(text(),"{option}")]', f"City suggestion {option}"))

        entered = await self.store_text_content(self.selected_city, "EnteredCityName")
        logger.info(f"Entered City Name: {entered}")
        return entered

    @allure.step("Select check-in (+{check_in_days}d) and check-out (+{check_out_days}d)")
    async def select_dates(self, check_in_days: int = 2, check_out_days: int = 3) -> None:
        await self.click(self.check_in)
        await self.click(self._calendar_day(format_date_after_days(check_in_days, "dd"), "Check-in"))
        await self.click(self.check_out)
        await self.click(self._calendar_day(format_date_after_days(check_out_days, "dd"), "Check-out"))

        raw_in = await self.store_text_content(self.check_in_text, "RawCheckIn")
        raw_out = await self.store_text_content(self.check_out_text, "RawCheckOut")
        self.store.set("CleanCheckIn", clean_and_convert_to_ddmmyyyy(raw_in))
        self.store.set("CleanCheckOut", clean_and_convert_to_ddmmyyyy(raw_out))

    async def _increase_to(self, count: Target, plus: Target, wanted: int) -> None:
        current = _count(await self.get_text(count))
        logger.debug(f"{count.label}: {current} → {wanted}")
        for _ in range(max(wanted - current, 0)):
            await self.click(plus)

    @allure.step("Select 2 rooms: 2 adults + 1 child each")
    async def select_rooms_and_guests(self) -> str:
        """
        Configure two rooms with two adults and one child each, then search.

        Returns:
            Rooms/guests summary text shown before searching
        """
        await self.wait_for_visible(self.rooms_guests)
        if not await self.is_visible(self.adult_count, timeout=2000):
            await self.click(self.rooms_guests)

        await self.wait_for_visible(self.adult_count)
        await self.wait_for_visible(self.child_count)
        await self._increase_to(self.adult_count, self.adult_plus, 2)
        await self._increase_to(self.child_count, self.child_plus, 1)

        await self.wait_for_visible(self.child_age)
        await self.select_option(self.child_age, str(random_in_range(2, 12)))

        await self.click(self.add_room)
        await self.wait_for_visible(self.room_2)
        await self._increase_to(self.adult_count_2, self.adult_plus_2, 2)
        await self._increase_to(self.child_count_2, self.child_plus_2, 1)

        await self.click(self.done)
        summary = await self.get_text(self.pax_panel)
        summary = re.sub(r"Room\s+(\d+)\s+Guests", r"Room, \1 Guests", summary)
        self.store.set("RoomsGuests", summary)
        logger.info(f"Room and Guests Selected: {summary}")

        await self.wait_for_visible(self.search_button)
        await self.click(self.search_button)
        return summary

    @allure.step("Verify search summary on results page")
    async def verify_search_summary(self) -> None:
        """Check city, rooms/guests and dates on the results page match the selection."""
        await self.wait_for_visible(self.result_city)
        actual_city = await self.store_input_value(self.result_city, "ResultCityName")
        if not actual_city:
            actual_city = await self.store_attribute_value(self.result_city, "value", "ResultCityName")
        expected_city = self.store.get("EnteredCityName", "")
        logger.info(f"City name → expected: {expected_city} | actual: {actual_city}")
        assert expected_city.lower() in actual_city.lower(), (
            f"Results city '{actual_city}' does not contain '{expected_city}'"
        )

        await self.wait_for_visible(self.result_rooms_guests)
        await expect(self.result_rooms_guests.locator).to_contain_text(re.compile(r"2\s*Room"))
        await expect(self.result_rooms_guests.locator).to_contain_text(re.compile(r"6\s*Guests"))

        check_in = await self.store_input_value(self.result_check_in, "Check_In_Date")
        check_out = await self.store_input_value(self.result_check_out, "Check_Out_Date")
        assert self.store.get("CleanCheckIn") == check_in, (
            f"Check-in mismatch: selected {self.store.get('CleanCheckIn')} | shown {check_in}"
        )
        assert self.store.get("CleanCheckOut") == check_out, (
            f"Check-out mismatch: selected {self.store.get('CleanCheckOut')} | shown {check_out}"
        )
        logger.info("Search summary verification passed")

    @allure.step("Sort hotels by price (high to low)")
    async def sort_by_price_high_to_low(self) -> List[Dict[str, Any]]:
        """
        Apply the price sort and collect the visible hotels.

        Returns:
            [{"name": str, "price": int, "reviews": str}, ...] sorted by price, descending
        """
        await self.wait_for_visible(self.popularity)
        await self.click(self.popularity)
        await self.wait_for_visible(self.price_high_to_low)
        await self.click(self.price_high_to_low)
        await self.wait_for_visible(self.hotel_names.first)

        count = await self.actions.count(self.hotel_names)
        logger.info(f"Total Hotels Found: {count}")

        hotels: List[Dict[str, Any]] = []
        for i in range(count):
            hotels.append({
                "name": await self.get_text(self.hotel_names.nth(i)),
                "price": _count(await self.get_text(self.hotel_prices.nth(i))),
                "reviews": await self.get_text(self.hotel_reviews.nth(i)),
            })

        hotels.sort(key=lambda h: h["price"], reverse=True)
        logger.debug(f"Hotels sorted by price (high to low): {hotels}")
        return hotels


__all__ = [
    "HotelSearchPage",
]
