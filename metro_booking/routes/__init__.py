"""
Route Planning Module

- Station graph and shortest routes using Dijkstra's algorithm
- Leg derivation with running times
- Fare calculation per passenger category with peak and round trip rules

Key Components:
- service.py: StationGraph, RouteCalculator and RouteService
- fare_service.py: fare quotes
- validation.py: request validation at the service boundary
- router.py: FastAPI endpoints for route planning and fares (mounted by main.py)
- schemas.py: Pydantic models
"""

from .service import RouteService, RouteCalculator, StationGraph, build_default_graph
from .fare_service import FareCalculationService
from .validation import RouteValidator, validate_passenger_counts
from .schemas import (
    Station, PathResult, Leg, RouteRequest, RouteResponse,
    PassengerCounts, FareCalculationRequest, FareQuote
)

__all__ = [
    "RouteService",
    "RouteCalculator",
    "StationGraph",
    "build_default_graph",
    "FareCalculationService",
    "RouteValidator",
    "validate_passenger_counts",
    "Station",
    "PathResult",
    "Leg",
    "RouteRequest",
    "RouteResponse",
    "PassengerCounts",
    "FareCalculationRequest",
    "FareQuote"
]
