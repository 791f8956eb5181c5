from fastapi import APIRouter, Depends
from typing import List
import time

from metro_booking.dependencies import get_fare_service, get_route_service, to_http_exception
from metro_booking.exceptions import BookingError
from metro_booking.routes.fare_service import FareCalculationService
from metro_booking.routes.schemas import (
    FareCalculationRequest, FareQuote, RouteRequest, RouteResponse, Station
)
from metro_booking.routes.service import RouteService

router = APIRouter()

@router.get("/stations", response_model=List[Station])
def list_stations(route_service: RouteService = Depends(get_route_service)):
    """All stations of the network"""
    return route_service.graph.stations

@router.post("/plan", response_model=RouteResponse)
def plan_route(
    request: RouteRequest,
    route_service: RouteService = Depends(get_route_service)
):
    """Shortest route between two stations.

    An empty path in the response means the stations are not connected.
    """
    start_time = time.time()

    try:
        path = route_service.compute_route(request.origin, request.destination)
    except BookingError as e:
        raise to_http_exception(e)

    calculation_time = int((time.time() - start_time) * 1000)

    return RouteResponse(
        path=path,
        legs=route_service.legs_for(path),
        calculation_time_ms=calculation_time
    )

@router.post("/fare-calculate", response_model=FareQuote)
def calculate_fare(
    request: FareCalculationRequest,
    fare_service: FareCalculationService = Depends(get_fare_service)
):
    """Fare for a distance and passenger mix"""
    try:
        return fare_service.quote(
            request.distance_km,
            request.passengers,
            is_peak=request.is_peak,
            is_round_trip=request.is_round_trip
        )
    except BookingError as e:
        raise to_http_exception(e)
