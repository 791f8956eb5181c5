"""Default metro network: six stations, ten bidirectional connections."""

from typing import List, Tuple

DEFAULT_STATIONS: List[str] = ["A", "B", "C", "D", "E", "F"]

# (station A, station B, distance in km)
DEFAULT_CONNECTIONS: List[Tuple[str, str, float]] = [
    ("A", "B", 10),
    ("A", "C", 22),
    ("A", "E", 8),
    ("B", "C", 15),
    ("B", "D", 9),
    ("B", "F", 7),
    ("C", "D", 9),
    ("D", "E", 5),
    ("D", "F", 12),
    ("E", "F", 16),
]
