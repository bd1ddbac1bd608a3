"""ORM models for database tables."""

from .itinerary import Activity, Itinerary, ItineraryDay
from .safety_profile import SafetyProfile
from .safety_report import SafetyReport, SafetySection
from .trip import Trip
from .user import User

__all__ = [
    "User",
    "SafetyProfile",
    "Trip",
    "Itinerary",
    "ItineraryDay",
    "Activity",
    "SafetyReport",
    "SafetySection",
]
