"""Convenient imports for all model types."""

# Common types and enums
from .common import (
    ActivityCategory,
    BudgetLevel,
    CamelModel,
    Pace,
    SafetyLevel,
    TravelStyle,
    TripStatus,
)

# Generation inputs and normalized outputs
from .generation import (
    ItineraryPreferences,
    NormalizedActivity,
    NormalizedDay,
    NormalizedItinerary,
    NormalizedSafetyReport,
    NormalizedSafetySection,
    TravelerProfile,
    TripContext,
)

__all__ = [
    "ActivityCategory",
    "BudgetLevel",
    "CamelModel",
    "Pace",
    "SafetyLevel",
    "TravelStyle",
    "TripStatus",
    "ItineraryPreferences",
    "NormalizedActivity",
    "NormalizedDay",
    "NormalizedItinerary",
    "NormalizedSafetyReport",
    "NormalizedSafetySection",
    "TravelerProfile",
    "TripContext",
]
