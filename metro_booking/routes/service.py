from typing import Iterable, List, Optional, Sequence, Tuple
import heapq
import logging
import math

from metro_booking.config import Settings, settings
from metro_booking.exceptions import UnknownStation
from metro_booking.network_data import DEFAULT_CONNECTIONS, DEFAULT_STATIONS
from metro_booking.routes.schemas import Leg, PathResult, Station, StationKey
from metro_booking.routes.validation import RouteValidator

logger = logging.getLogger(__name__)

Connection = Tuple[StationKey, StationKey, float]

class StationGraph:
    """Weighted undirected graph of the metro network.

    Distances live in an adjacency matrix; ``None`` marks "no direct
    connection".
    """

    def __init__(self, station_names: Sequence[str], connections: Iterable[Connection] = ()):
        if len(set(station_names)) != len(station_names):
            raise ValueError("Station names must be unique")

        self.stations: List[Station] = [
            Station(index=i, name=name) for i, name in enumerate(station_names)
        ]
        self._by_name = {station.name: station for station in self.stations}

        size = len(self.stations)
        self._matrix: List[List[Optional[float]]] = [[None] * size for _ in range(size)]
        for i in range(size):
            self._matrix[i][i] = 0

        for station_a, station_b, distance in connections:
            self.add_connection(station_a, station_b, distance)

    @classmethod
    def from_connections(cls, connections: Iterable[Connection]) -> "StationGraph":
        """Build a graph whose stations are named by the connection triples"""
        connections = list(connections)
        names: List[str] = []
        for station_a, station_b, _ in connections:
            for name in (station_a, station_b):
                if name not in names:
                    names.append(name)
        return cls(names, connections)

    def __len__(self) -> int:
        return len(self.stations)

    def add_connection(self, station_a: StationKey, station_b: StationKey, distance: float):
        """Add a bidirectional connection between two stations"""
        if distance < 0:
            raise ValueError(f"Distance must be non-negative, got {distance}")

        a = self.station(station_a)
        b = self.station(station_b)
        if a.index == b.index and distance != 0:
            raise ValueError(f"Self-loop at station {a.name} must have zero distance")

        self._matrix[a.index][b.index] = distance
        self._matrix[b.index][a.index] = distance

    def station(self, key: StationKey) -> Station:
        """Look up a station by index or by name"""
        if isinstance(key, str):
            station = self._by_name.get(key)
            if station is None:
                raise UnknownStation(f"Station '{key}' not found")
            return station

        if not 0 <= key < len(self.stations):
            raise UnknownStation(f"Station with index {key} not found")
        return self.stations[key]

    def distance(self, station_a: StationKey, station_b: StationKey) -> Optional[float]:
        """Direct distance between two stations, None if not connected"""
        return self._matrix[self.station(station_a).index][self.station(station_b).index]

    def neighbors(self, index: int) -> List[Tuple[int, float]]:
        """Directly connected stations in index order, excluding the station itself"""
        return [
            (other, distance)
            for other, distance in enumerate(self._matrix[index])
            if distance is not None and other != index
        ]


def build_default_graph() -> StationGraph:
    """Graph of the default six-station network"""
    return StationGraph(DEFAULT_STATIONS, DEFAULT_CONNECTIONS)


def travel_minutes(distance_km: float, speed_kmh: float) -> int:
    """Running time of a train over a distance, rounded up to whole minutes"""
    return math.ceil(distance_km * 60 / speed_kmh)


class RouteCalculator:
    """Shortest path calculation using Dijkstra's algorithm"""

    def __init__(self, graph: StationGraph):
        self.graph = graph

    def shortest_paths(self, origin: int) -> Tuple[List[Optional[float]], List[Optional[int]]]:
        """Distances and predecessors from ``origin`` to every station.

        Unreachable stations keep a distance and predecessor of ``None``.
        Ties are settled by lowest station index.
        """
        size = len(self.graph)
        distances: List[Optional[float]] = [None] * size
        previous: List[Optional[int]] = [None] * size
        visited = [False] * size

        distances[origin] = 0
        pq = [(0, origin)]

        while pq:
            current_distance, current = heapq.heappop(pq)
            if visited[current]:
                continue
            visited[current] = True

            for neighbor, weight in self.graph.neighbors(current):
                if visited[neighbor]:
                    continue
                new_distance = current_distance + weight
                if distances[neighbor] is None or new_distance < distances[neighbor]:
                    distances[neighbor] = new_distance
                    previous[neighbor] = current
                    heapq.heappush(pq, (new_distance, neighbor))

        return distances, previous

    def reconstruct_path(
        self,
        previous: List[Optional[int]],
        origin: int,
        destination: int,
        total_distance: Optional[float] = None,
    ) -> PathResult:
        """Walk predecessors back from destination; empty path if origin is never reached"""
        indices = []
        at: Optional[int] = destination
        while at is not None and len(indices) <= len(previous):
            indices.append(at)
            at = previous[at]
        indices.reverse()

        if not indices or indices[0] != origin:
            return PathResult()

        if total_distance is None:
            total_distance = sum(
                self.graph.distance(a, b) for a, b in zip(indices, indices[1:])
            )

        return PathResult(
            stations=[self.graph.stations[i] for i in indices],
            total_distance=total_distance,
        )

    def route(self, origin: StationKey, destination: StationKey) -> PathResult:
        """Shortest path between two stations"""
        start = self.graph.station(origin)
        end = self.graph.station(destination)

        distances, previous = self.shortest_paths(start.index)
        if distances[end.index] is None:
            return PathResult()

        return self.reconstruct_path(previous, start.index, end.index, distances[end.index])


class RouteService:
    """High-level route planning service"""

    def __init__(self, graph: Optional[StationGraph] = None, config: Settings = settings):
        self.graph = graph or build_default_graph()
        self.config = config
        self.calculator = RouteCalculator(self.graph)
        self.validator = RouteValidator(self.graph)

    def compute_route(self, origin: StationKey, destination: StationKey) -> PathResult:
        """Validated shortest route; an empty path means the stations are not connected"""
        from_station, to_station = self.validator.validate_route_request(origin, destination)

        path = self.calculator.route(from_station.index, to_station.index)
        if path.is_empty:
            logger.info("No route between %s and %s", from_station.name, to_station.name)
        else:
            logger.debug(
                "Route %s: %.1f km",
                "-".join(s.name for s in path.stations),
                path.total_distance,
            )
        return path

    def legs_for(self, path: PathResult) -> List[Leg]:
        """Legs between consecutive stations of a path"""
        legs = []
        for i, (origin, destination) in enumerate(zip(path.stations, path.stations[1:])):
            distance = self.graph.distance(origin.index, destination.index)
            legs.append(Leg(
                index=i,
                origin=origin,
                destination=destination,
                distance_km=distance,
                travel_minutes=travel_minutes(distance, self.config.TRAIN_SPEED_KMH),
            ))
        return legs
