"""Shared fixtures: timetable settings and networks used across the tests."""

from datetime import time

import pytest
from fastapi.testclient import TestClient

from metro_booking.bookings.journey_service import JourneyPlanningService
from metro_booking.config import Settings
from metro_booking.dependencies import get_route_service, get_settings
from metro_booking.main import create_app
from metro_booking.routes.service import RouteService, StationGraph, build_default_graph


@pytest.fixture
def scenario_config() -> Settings:
    """30 km/h, 10 min dwell, a train every 10 minutes, 06:00-20:00"""
    return Settings(
        TRAIN_SPEED_KMH=30,
        STATION_DWELL_MINUTES=10,
        MIN_TRANSFER_MINUTES=5,
        FIRST_TRAIN=time(6, 0),
        LAST_TRAIN=time(20, 0),
        TRAIN_INTERVAL_MINUTES=10,
        SEARCH_WINDOW_MINUTES=60,
        MAX_OFFERS=6,
        RATE_PER_KM=2.0,
        PEAK_MULTIPLIER=1.25,
        PEAK_WINDOWS=[(time(7, 0), time(9, 0)), (time(17, 0), time(19, 0))],
        ROUND_TRIP_MULTIPLIER=1.9,
        MAX_PASSENGERS=10,
        TRANSFER_POLICY="strict",
    )


@pytest.fixture
def scenario_graph() -> StationGraph:
    """A-B:10, B-D:9 plus an isolated station X"""
    return StationGraph(["A", "B", "D", "X"], [("A", "B", 10), ("B", "D", 9)])


@pytest.fixture
def default_graph() -> StationGraph:
    return build_default_graph()


@pytest.fixture
def route_service(scenario_graph: StationGraph, scenario_config: Settings) -> RouteService:
    return RouteService(scenario_graph, scenario_config)


@pytest.fixture
def journey(route_service: RouteService, scenario_config: Settings) -> JourneyPlanningService:
    return JourneyPlanningService(route_service, scenario_config)


@pytest.fixture
def client(route_service: RouteService, scenario_config: Settings):
    app = create_app()
    app.dependency_overrides[get_route_service] = lambda: route_service
    app.dependency_overrides[get_settings] = lambda: scenario_config
    with TestClient(app) as test_client:
        yield test_client
