from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union
from decimal import Decimal

StationKey = Union[int, str]

class Station(BaseModel):
    """Network station, identified by its index"""
    model_config = ConfigDict(frozen=True)

    index: int
    name: str

class PathResult(BaseModel):
    """Ordered stations from origin to destination; empty means no route"""
    model_config = ConfigDict(frozen=True)

    stations: List[Station] = []
    total_distance: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return not self.stations

class Leg(BaseModel):
    """Direct segment between two adjacent stations of a path"""
    model_config = ConfigDict(frozen=True)

    index: int
    origin: Station
    destination: Station
    distance_km: float
    travel_minutes: int

class RouteRequest(BaseModel):
    """Request schema for route planning"""
    origin: StationKey
    destination: StationKey

class RouteResponse(BaseModel):
    """Response schema for route planning"""
    path: PathResult
    legs: List[Leg]
    calculation_time_ms: int

class PassengerCounts(BaseModel):
    """Passenger count per fare category"""
    adult: int = Field(0, ge=0)
    student: int = Field(0, ge=0)
    senior: int = Field(0, ge=0)
    child: int = Field(0, ge=0)

    @property
    def total(self) -> int:
        return self.adult + self.student + self.senior + self.child

class FareCalculationRequest(BaseModel):
    """Request schema for a fare quote by distance"""
    distance_km: float = Field(..., ge=0)
    passengers: PassengerCounts
    is_peak: bool = False
    is_round_trip: bool = False

class FareQuote(BaseModel):
    """Priced itinerary"""
    distance_km: float
    base_fare: Decimal  # per adult, peak surcharge included
    is_peak: bool
    category_subtotals: Dict[str, Decimal]
    category_sum: Decimal
    is_round_trip: bool
    total: Decimal
    passenger_count: int
