from typing import List, Optional
from datetime import time
import logging

from metro_booking.config import Settings, settings
from metro_booking.schedules.schemas import TrainOffer

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def to_minutes(value: time) -> int:
    """Minutes since midnight, rounding any seconds up to the next minute"""
    minutes = value.hour * 60 + value.minute
    if value.second or value.microsecond:
        minutes += 1
    return minutes


def from_minutes(minutes: int) -> time:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"{minutes} minutes is outside a single service day")
    return time(minutes // 60, minutes % 60)


class TimetableGenerator:
    """Generates train offers from operating hours and a fixed train interval"""

    def __init__(self, config: Settings = settings):
        if not 0 < config.TRAIN_INTERVAL_MINUTES <= 60:
            raise ValueError("Train interval must be between 1 and 60 minutes")
        self.config = config

    def next_departure_slot(self, start: int) -> int:
        """Round a minute-of-day up to the next train slot of its hour"""
        interval = self.config.TRAIN_INTERVAL_MINUTES
        hour, minute = divmod(start, 60)
        rounded = -(-minute // interval) * interval
        if rounded >= 60:
            return (hour + 1) * 60
        return hour * 60 + rounded

    def offers(
        self,
        baseline: time,
        travel_minutes: int,
        now: Optional[time] = None,
    ) -> List[TrainOffer]:
        """Offers departing no earlier than ``max(baseline, now)``.

        Departures stay within operating hours and every arrival
        (departure + travel + dwell) is no later than the last train.
        An empty list means no train fits the search window.
        """
        effective_start = to_minutes(baseline)
        if now is not None:
            effective_start = max(effective_start, to_minutes(now))

        first_train = to_minutes(self.config.FIRST_TRAIN)
        last_train = to_minutes(self.config.LAST_TRAIN)
        window_end = effective_start + self.config.SEARCH_WINDOW_MINUTES

        offers: List[TrainOffer] = []
        departure = self.next_departure_slot(effective_start)

        while departure <= window_end and len(offers) < self.config.MAX_OFFERS:
            arrival = departure + travel_minutes + self.config.STATION_DWELL_MINUTES
            if first_train <= departure <= last_train and arrival <= last_train:
                offers.append(TrainOffer(
                    departure=from_minutes(departure),
                    arrival=from_minutes(arrival),
                ))
            departure += self.config.TRAIN_INTERVAL_MINUTES

        if not offers:
            logger.info(
                "No trains between %s and %s for a %d minute segment",
                from_minutes(effective_start % MINUTES_PER_DAY),
                self.config.LAST_TRAIN.strftime("%H:%M"),
                travel_minutes,
            )
        return offers
