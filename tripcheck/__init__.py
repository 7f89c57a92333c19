"""
tripcheck: Playwright UI automation for travel booking flows.

Packages:
    - ui_testing.framework: retry, waits, actions, page base, config, logging
    - ui_testing.pages: booking page objects
"""

__version__ = "1.0.0"
