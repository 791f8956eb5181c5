"""
Journey Booking Module

Train selection per route segment, downstream regeneration of offers,
transfer checks, itinerary summaries and booking confirmation.
"""

from .journey_service import ItineraryBuilder, JourneyPlanningService
from .schemas import (
    TransferPolicy, LegOffers, ItineraryState, LegSummary, TransferSummary,
    ItinerarySummary, BookingValidation, JourneyRequest, JourneyResponse,
    JourneyFareRequest, ConfirmationRequest
)

__all__ = [
    "ItineraryBuilder",
    "JourneyPlanningService",
    "TransferPolicy",
    "LegOffers",
    "ItineraryState",
    "LegSummary",
    "TransferSummary",
    "ItinerarySummary",
    "BookingValidation",
    "JourneyRequest",
    "JourneyResponse",
    "JourneyFareRequest",
    "ConfirmationRequest"
]
