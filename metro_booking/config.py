from datetime import time
from typing import List, Literal, Optional, Tuple

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Application
    PROJECT_NAME: str = "Metro Ticket Booking System"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Network & timetable
    TRAIN_SPEED_KMH: float = 30
    STATION_DWELL_MINUTES: int = 10
    MIN_TRANSFER_MINUTES: int = 5
    FIRST_TRAIN: time = time(6, 0)
    LAST_TRAIN: time = time(20, 0)
    TRAIN_INTERVAL_MINUTES: int = 20
    SEARCH_WINDOW_MINUTES: int = 60
    MAX_OFFERS: int = 6

    # Fares
    RATE_PER_KM: float = 2.0
    PEAK_MULTIPLIER: float = 1.25
    PEAK_WINDOWS: List[Tuple[time, time]] = [
        (time(7, 0), time(9, 0)),
        (time(17, 0), time(19, 0)),
    ]
    ROUND_TRIP_MULTIPLIER: float = 1.9  # return leg at a 10% discount
    MAX_PASSENGERS: int = 10

    # Booking
    TRANSFER_POLICY: Literal["strict", "warn-only"] = "strict"
    JOURNEY_TTL_MINUTES: int = 30

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

settings = Settings()
