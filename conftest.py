"""
Repository-level pytest configuration.

Why this exists:
  - Provide safe defaults for local runs (no secrets embedded)
  - Initialise Loguru once per session (console + daily log file)
  - Keep behavior explicit and discoverable

Real CI jobs override these through environment variables
(ENVIRONMENT, BASE_URL, EASY_URL, TIMEOUT_*).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from tripcheck.ui_testing.framework.log_config import init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI,
    then configure logging from the resulting configuration.
    """
    defaults = {
        "ENVIRONMENT": "qa",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    init_logger()

    yield
