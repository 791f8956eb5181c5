from typing import Tuple

from metro_booking.exceptions import InvalidPassengerCount, SameStationRequested
from metro_booking.routes.schemas import PassengerCounts, Station, StationKey

def validate_passenger_counts(counts: PassengerCounts, max_passengers: int) -> int:
    """Return the passenger total, or reject it when out of range"""
    total = counts.total
    if total < 1:
        raise InvalidPassengerCount("At least 1 passenger required")
    if total > max_passengers:
        raise InvalidPassengerCount(
            f"Maximum {max_passengers} passengers per booking"
        )
    return total

class RouteValidator:
    """Validation of routing requests at the service boundary"""

    def __init__(self, graph):
        self.graph = graph

    def validate_route_request(
        self, origin: StationKey, destination: StationKey
    ) -> Tuple[Station, Station]:
        """Resolve both stations and reject identical endpoints"""
        from_station = self.graph.station(origin)
        to_station = self.graph.station(destination)

        if from_station.index == to_station.index:
            raise SameStationRequested(
                "Origin and destination stations cannot be the same"
            )

        return from_station, to_station
