from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import time
from enum import Enum

from metro_booking.routes.schemas import Leg, PassengerCounts, PathResult, StationKey
from metro_booking.schedules.schemas import TrainOffer

class TransferPolicy(str, Enum):
    """How tight transfers affect booking confirmation"""
    STRICT = "strict"
    WARN_ONLY = "warn-only"

# Itinerary state
class LegOffers(BaseModel):
    """Offers and current selection for one leg"""
    leg: Leg
    offers: List[TrainOffer]
    selected: Optional[TrainOffer] = None

class ItineraryState(BaseModel):
    """Snapshot of the selection state machine"""
    path: PathResult
    legs: List[LegOffers]
    is_complete: bool
    transfer_warnings: List[int]  # leg indices with a tight incoming transfer
    unavailable_legs: List[int]  # legs whose offer generation came back empty

# Summary projection
class LegSummary(BaseModel):
    from_station: str
    to_station: str
    depart: time
    arrive: time
    duration_min: int

class TransferSummary(BaseModel):
    at_station: str
    wait_min: int
    tight: bool

class ItinerarySummary(BaseModel):
    """Plain data for the presentation layer to format"""
    legs: List[LegSummary]
    transfers: List[TransferSummary]
    total_minutes: int

class BookingValidation(BaseModel):
    """Result of confirming a selection"""
    is_valid: bool
    errors: List[str] = []
    warnings: List[str] = []
    tight_transfers: List[int] = []

# Requests
class JourneyRequest(BaseModel):
    """Request to start planning a journey"""
    origin: StationKey
    destination: StationKey
    desired_time: time
    now: Optional[time] = None

class JourneyResponse(BaseModel):
    journey_id: str
    state: ItineraryState

class JourneyFareRequest(BaseModel):
    """Request to price the selected itinerary"""
    passengers: PassengerCounts = Field(default_factory=lambda: PassengerCounts(adult=1))
    is_round_trip: bool = False
    reference_time: Optional[time] = None

class ConfirmationRequest(BaseModel):
    policy: Optional[TransferPolicy] = None
