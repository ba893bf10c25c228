"""
Pytest configuration and shared fixtures.
"""

import os

# Keep test runs from writing daily log files into the working directory
os.environ.setdefault("STOCKMATCH_LOG_TO_FILE", "0")

import pytest
from pathlib import Path
from typing import Any, Dict, List

from stockmatch.logger import reset_logger
from stockmatch.models import Candidate, TargetSpec
from stockmatch.seed import seed_catalog
from stockmatch.storage import StockCatalog


class FakeCatalog:
    """In-memory catalog returning candidates in the given order."""

    def __init__(self, candidates: List[Candidate]):
        self.candidates = candidates
        self.calls = 0

    def fetch_available_stock(self) -> List[Candidate]:
        self.calls += 1
        return list(self.candidates)


@pytest.fixture(autouse=True)
def fresh_logger():
    """Start every test with empty metrics."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def make_catalog():
    """Factory for in-memory catalogs."""
    return FakeCatalog


@pytest.fixture
def range_rover_target() -> TargetSpec:
    """Target used by the STOCK-001 / STOCK-004 scenarios."""
    return TargetSpec(
        features={"model": "Range Rover", "fuel_type": "Petrol"},
        options={"pano_roof": "Yes"},
    )


@pytest.fixture
def range_rover_payload() -> Dict[str, Any]:
    """Raw request body equivalent to range_rover_target, with blanks."""
    return {
        "features": {"model": "Range Rover", "paint": "", "fuel_type": "Petrol", "derivative": "", "trim_code": ""},
        "options": {"pano_roof": "Yes", "heated_seats": ""},
    }


@pytest.fixture
def stock_001() -> Candidate:
    return Candidate(
        id=1,
        order_number="STOCK-001",
        features=(
            ("model", "Range Rover"),
            ("paint", "Santorini Black"),
            ("fuel_type", "Petrol"),
            ("derivative", "HSE"),
            ("trim_code", "LUX-2024"),
        ),
        options=(
            ("pano_roof", "Yes"),
            ("heated_seats", "Yes"),
            ("navigation", "Yes"),
            ("leather_seats", "Yes"),
        ),
    )


@pytest.fixture
def stock_004() -> Candidate:
    return Candidate(
        id=4,
        order_number="STOCK-004",
        features=(
            ("model", "Range Rover Evoque"),
            ("paint", "Byron Blue"),
            ("fuel_type", "Hybrid"),
            ("derivative", "Dynamic"),
            ("trim_code", "STD-2024"),
        ),
        options=(
            ("pano_roof", "No"),
            ("heated_seats", "No"),
            ("navigation", "Yes"),
        ),
    )


@pytest.fixture
def seeded_db(tmp_path) -> Path:
    """Database populated with the sample orders and stock."""
    db_path = tmp_path / "stock.db"
    seed_catalog(db_path)
    return db_path


@pytest.fixture
def seeded_catalog(seeded_db) -> StockCatalog:
    return StockCatalog(seeded_db)
