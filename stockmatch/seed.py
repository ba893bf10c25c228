"""
Sample unfulfilled orders and Range Rover stock vehicles.

Used by `stockmatch seed` to populate a fresh database for demos and tests.
"""

from pathlib import Path
from typing import Any, Dict, List, Tuple

from .database import init_database, get_session
from .logger import get_logger
from .storage import DuplicateOrderError, create_order

SAMPLE_ORDERS: List[Dict[str, Any]] = [
    {
        "order_number": "ORD-001",
        "customer_name": "John Smith",
        "type": "order",
        "status": "unfulfilled",
        "features": {
            "model": "Range Rover",
            "paint": "Santorini Black",
            "fuel_type": "Petrol",
            "derivative": "HSE",
            "trim_code": "LUX-2024",
        },
        "options": {"pano_roof": "Yes", "heated_seats": "Yes", "navigation": "Yes", "leather_seats": "Yes"},
    },
    {
        "order_number": "ORD-002",
        "customer_name": "Sarah Johnson",
        "type": "order",
        "status": "unfulfilled",
        "features": {
            "model": "Range Rover Sport",
            "paint": "Fuji White",
            "fuel_type": "Electric",
            "derivative": "Autobiography",
            "trim_code": "PRE-2024",
        },
        "options": {"pano_roof": "No", "heated_seats": "Yes", "navigation": "Yes", "leather_seats": "No"},
    },
]


def _stock(number: str, model: str, paint: str, fuel: str, derivative: str, trim: str, **options) -> Dict[str, Any]:
    return {
        "order_number": number,
        "customer_name": None,
        "type": "stock",
        "status": "available",
        "features": {
            "model": model,
            "paint": paint,
            "fuel_type": fuel,
            "derivative": derivative,
            "trim_code": trim,
        },
        "options": options,
    }


SAMPLE_STOCK: List[Dict[str, Any]] = [
    _stock("STOCK-001", "Range Rover", "Santorini Black", "Petrol", "HSE", "LUX-2024",
           pano_roof="Yes", heated_seats="Yes", navigation="Yes", leather_seats="Yes",
           air_suspension="Yes", parking_sensors="Yes"),
    _stock("STOCK-002", "Range Rover", "Santorini Black", "Petrol", "HSE", "LUX-2024",
           pano_roof="Yes", heated_seats="Yes", navigation="No", leather_seats="Yes",
           air_suspension="Yes"),
    _stock("STOCK-003", "Range Rover Sport", "Fuji White", "Electric", "Autobiography", "PRE-2024",
           pano_roof="No", heated_seats="Yes", navigation="Yes", leather_seats="No",
           meridian_sound="Yes"),
    _stock("STOCK-004", "Range Rover Evoque", "Byron Blue", "Hybrid", "Dynamic", "STD-2024",
           pano_roof="No", heated_seats="No", navigation="Yes", leather_seats="No",
           parking_sensors="Yes"),
    _stock("STOCK-005", "Range Rover", "Santorini Black", "Petrol", "HSE", "LUX-2024",
           pano_roof="Yes", heated_seats="Yes", navigation="Yes", leather_seats="No",
           adaptive_cruise="Yes", terrain_response="Yes"),
    _stock("STOCK-006", "Range Rover Velar", "Firenze Red", "PHEV", "SV", "SV-2024",
           pano_roof="Yes", heated_seats="Yes", navigation="Yes", leather_seats="Yes",
           meridian_sound="Yes", air_suspension="Yes"),
    _stock("STOCK-007", "Range Rover Discovery", "Carpathian Grey", "Diesel", "HSE", "STD-2024",
           pano_roof="No", heated_seats="Yes", navigation="Yes", leather_seats="Yes",
           tow_pack="Yes", terrain_response="Yes"),
    _stock("STOCK-008", "Range Rover Sport", "Lantau Bronze", "Petrol", "S", "PRE-2024",
           pano_roof="Yes", heated_seats="Yes", navigation="Yes", leather_seats="Yes",
           adaptive_cruise="Yes", meridian_sound="Yes"),
    _stock("STOCK-009", "Range Rover", "Aurora Borealis", "Hybrid", "Autobiography", "LUX-2024",
           pano_roof="Yes", heated_seats="Yes", navigation="Yes", leather_seats="Yes",
           air_suspension="Yes", meridian_sound="Yes", terrain_response="Yes"),
    _stock("STOCK-010", "Range Rover Discovery Sport", "Namib Orange", "Diesel", "HSE", "STD-2024",
           pano_roof="No", heated_seats="Yes", navigation="Yes", leather_seats="No",
           parking_sensors="Yes"),
]


def seed_catalog(db_path: Path) -> Tuple[int, int]:
    """
    Create tables and insert the sample orders and stock.

    Records whose order number already exists are skipped.

    Returns:
        Tuple of (created, skipped)
    """
    logger = get_logger()
    init_database(db_path)
    session = get_session(db_path)
    created = skipped = 0
    try:
        for record in SAMPLE_ORDERS + SAMPLE_STOCK:
            try:
                create_order(session, record)
                created += 1
            except DuplicateOrderError:
                logger.info(f"{record['order_number']} already exists, skipping")
                skipped += 1
    finally:
        session.close()

    logger.info("Seeding complete", created=created, skipped=skipped, db_path=str(db_path))
    return created, skipped
