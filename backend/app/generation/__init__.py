"""Generation of AI-derived trip artifacts."""

from .workflow import (
    generate_flight_suggestions,
    generate_hotel_suggestions,
    generate_itinerary,
    generate_safety_report,
    get_flight_suggestions,
    get_hotel_suggestions,
    get_itinerary,
    get_safety_report,
)

__all__ = [
    "generate_itinerary",
    "generate_safety_report",
    "generate_hotel_suggestions",
    "generate_flight_suggestions",
    "get_itinerary",
    "get_safety_report",
    "get_hotel_suggestions",
    "get_flight_suggestions",
]
