"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the travel booking flows.

Each page class encapsulates:
    - Labelled element targets
    - Flow steps (retried actions, waits, runtime capture)
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .hotel_search_page import HotelSearchPage
from .flight_search_page import FlightSearchPage

__all__ = [
    "HotelSearchPage",
    "FlightSearchPage",
]
