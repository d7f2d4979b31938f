"""
Test Configuration
==================

Pytest fixtures for MSME Compass tests.
"""

import os
from typing import Any

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "testing"


@pytest.fixture
def restaurant_profile() -> dict[str, Any]:
    """Small restaurant in Karnataka."""
    return {
        "businessType": "restaurant",
        "employees": 5,
        "annualTurnover": 6_000_000,
        "state": "Karnataka",
    }


@pytest.fixture
def manufacturing_profile() -> dict[str, Any]:
    """Manufacturing unit in Karnataka with no turnover given."""
    return {
        "businessType": "manufacturing",
        "employees": 25,
        "state": "KA",
    }


@pytest.fixture
def empty_profile() -> dict[str, Any]:
    """Profile with no fields at all."""
    return {}
