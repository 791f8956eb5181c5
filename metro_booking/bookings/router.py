from fastapi import APIRouter, Depends, HTTPException, status
from datetime import datetime
from typing import Dict, List, Optional
import logging
import uuid

from metro_booking.config import Settings
from metro_booking.dependencies import get_route_service, get_settings, to_http_exception
from metro_booking.exceptions import BookingError
from metro_booking.routes.schemas import FareQuote
from metro_booking.routes.service import RouteService
from metro_booking.schedules.schemas import OfferRequest, TrainOffer
from metro_booking.bookings.journey_service import JourneyPlanningService
from metro_booking.bookings.schemas import (
    BookingValidation, ConfirmationRequest, ItineraryState, ItinerarySummary,
    JourneyFareRequest, JourneyRequest, JourneyResponse
)

router = APIRouter()
logger = logging.getLogger(__name__)

# In-memory journey sessions; bookings are not persisted
journey_sessions: Dict[str, JourneyPlanningService] = {}

def cleanup_expired_journeys(max_age_minutes: int, current_time: Optional[datetime] = None) -> int:
    """Drop journey sessions older than ``max_age_minutes``"""
    current_time = current_time or datetime.now()
    expired_ids = [
        journey_id for journey_id, journey in journey_sessions.items()
        if (current_time - journey.created_at).total_seconds() / 60 > max_age_minutes
    ]

    for journey_id in expired_ids:
        del journey_sessions[journey_id]

    if expired_ids:
        logger.info("Removed %d expired journeys", len(expired_ids))
    return len(expired_ids)

def get_journey(journey_id: str) -> JourneyPlanningService:
    journey = journey_sessions.get(journey_id)
    if journey is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Journey with ID {journey_id} not found"
        )
    return journey

@router.post("", response_model=JourneyResponse, status_code=status.HTTP_201_CREATED)
def plan_journey(
    request: JourneyRequest,
    route_service: RouteService = Depends(get_route_service),
    config: Settings = Depends(get_settings)
):
    """Start a journey: route it and offer trains for the first segment"""
    now = request.now or datetime.now().time().replace(second=0, microsecond=0)

    journey = JourneyPlanningService(route_service, config)
    try:
        state = journey.plan_journey(
            request.origin, request.destination, request.desired_time, now=now
        )
    except BookingError as e:
        raise to_http_exception(e)

    cleanup_expired_journeys(config.JOURNEY_TTL_MINUTES)
    journey_id = str(uuid.uuid4())
    journey_sessions[journey_id] = journey

    return JourneyResponse(journey_id=journey_id, state=state)

@router.get("/{journey_id}", response_model=ItineraryState)
def get_journey_state(journey: JourneyPlanningService = Depends(get_journey)):
    return journey.state()

@router.post("/{journey_id}/legs/{leg_index}/offers", response_model=List[TrainOffer])
def regenerate_offers(
    leg_index: int,
    request: OfferRequest,
    journey: JourneyPlanningService = Depends(get_journey)
):
    """Regenerate train offers for a segment from a new baseline time"""
    try:
        return journey.generate_leg_offers(leg_index, request.baseline, now=request.now)
    except BookingError as e:
        raise to_http_exception(e)

@router.post("/{journey_id}/legs/{leg_index}/select", response_model=ItineraryState)
def select_offer(
    leg_index: int,
    offer: TrainOffer,
    journey: JourneyPlanningService = Depends(get_journey)
):
    """Choose a train for a segment; later segments are offered again"""
    try:
        return journey.select_offer(leg_index, offer)
    except BookingError as e:
        raise to_http_exception(e)

@router.post("/{journey_id}/auto-select", response_model=ItineraryState)
def auto_select(journey: JourneyPlanningService = Depends(get_journey)):
    """Choose the earliest train on every open segment"""
    try:
        return journey.auto_select_earliest()
    except BookingError as e:
        raise to_http_exception(e)

@router.get("/{journey_id}/summary", response_model=ItinerarySummary)
def get_summary(journey: JourneyPlanningService = Depends(get_journey)):
    return journey.render_summary()

@router.post("/{journey_id}/fare", response_model=FareQuote)
def quote_fare(
    request: JourneyFareRequest,
    journey: JourneyPlanningService = Depends(get_journey)
):
    try:
        return journey.quote_fare(
            request.passengers,
            is_round_trip=request.is_round_trip,
            reference_time=request.reference_time
        )
    except BookingError as e:
        raise to_http_exception(e)

@router.delete("/{journey_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_journey(journey_id: str):
    """Discard a journey session"""
    if journey_sessions.pop(journey_id, None) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Journey with ID {journey_id} not found"
        )

@router.post("/{journey_id}/confirm", response_model=BookingValidation)
def confirm_journey(
    request: ConfirmationRequest,
    journey: JourneyPlanningService = Depends(get_journey)
):
    """Validate the selection for booking under the transfer policy"""
    return journey.confirm(request.policy)
