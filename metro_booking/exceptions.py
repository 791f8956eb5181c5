"""
Booking error taxonomy.

Every error is a local, recoverable condition reported back to the caller.
``error_code`` mirrors the codes used in HTTP error details.
"""

from typing import Optional


class BookingError(Exception):
    """Base class for all booking errors"""

    error_code = "BOOKING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"code": self.error_code, "message": self.message}


class NoRouteFound(BookingError):
    """Origin and destination are not connected"""

    error_code = "NO_ROUTE"


class NoOffersForLeg(BookingError):
    """Timetable generation found no train for a leg"""

    error_code = "NO_TRAINS_FOR_SEGMENT"

    def __init__(self, message: str, leg_index: Optional[int] = None):
        super().__init__(message)
        self.leg_index = leg_index

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["leg_index"] = self.leg_index
        return detail


class InvalidSelection(BookingError):
    """Offer is not part of the current offer set for the leg"""

    error_code = "INVALID_SELECTION"


class InvalidPassengerCount(BookingError):
    """Passenger total outside the allowed range"""

    error_code = "INVALID_PASSENGER_COUNT"


class SameStationRequested(BookingError):
    """Origin and destination are the same station"""

    error_code = "SAME_STATION"


class UnknownStation(BookingError):
    """Station index or name is not part of the network"""

    error_code = "UNKNOWN_STATION"


class OutsideOperatingHours(BookingError):
    """Requested start time falls outside train operating hours"""

    error_code = "OUTSIDE_OPERATING_HOURS"


class IncompleteItinerary(BookingError):
    """Operation needs a train selected on every leg"""

    error_code = "INCOMPLETE_SELECTION"
