from typing import Dict

from fastapi import Depends, HTTPException, status

from metro_booking.config import Settings, settings
from metro_booking.exceptions import (
    BookingError, IncompleteItinerary, InvalidPassengerCount, InvalidSelection,
    NoOffersForLeg, NoRouteFound, OutsideOperatingHours, SameStationRequested,
    UnknownStation
)
from metro_booking.routes.fare_service import FareCalculationService
from metro_booking.routes.service import RouteService

ERROR_STATUS: Dict[type, int] = {
    SameStationRequested: status.HTTP_400_BAD_REQUEST,
    InvalidPassengerCount: status.HTTP_400_BAD_REQUEST,
    InvalidSelection: status.HTTP_400_BAD_REQUEST,
    UnknownStation: status.HTTP_400_BAD_REQUEST,
    OutsideOperatingHours: status.HTTP_400_BAD_REQUEST,
    IncompleteItinerary: status.HTTP_409_CONFLICT,
    NoOffersForLeg: status.HTTP_409_CONFLICT,
    NoRouteFound: status.HTTP_404_NOT_FOUND,
}


def get_settings() -> Settings:
    return settings


# one route service per settings object, shared by all requests
_route_services: Dict[int, RouteService] = {}


def get_route_service(config: Settings = Depends(get_settings)) -> RouteService:
    """Route service over the default network"""
    route_service = _route_services.get(id(config))
    if route_service is None:
        route_service = RouteService(config=config)
        _route_services[id(config)] = route_service
    return route_service


def get_fare_service(config: Settings = Depends(get_settings)) -> FareCalculationService:
    return FareCalculationService(config)


def to_http_exception(error: BookingError) -> HTTPException:
    """Convert a booking error into an HTTP error with a code/message detail"""
    return HTTPException(
        status_code=ERROR_STATUS.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail=error.to_detail(),
    )
