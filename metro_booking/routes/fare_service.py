from typing import Dict, Optional
from datetime import time
from decimal import Decimal, ROUND_HALF_UP
import logging

from metro_booking.config import Settings, settings
from metro_booking.routes.schemas import FareQuote, PassengerCounts
from metro_booking.routes.validation import validate_passenger_counts

logger = logging.getLogger(__name__)

# Share of the base fare paid per passenger category
CATEGORY_FACTORS: Dict[str, Decimal] = {
    "adult": Decimal("1.0"),
    "student": Decimal("0.5"),
    "senior": Decimal("0.6"),
    "child": Decimal("0.3"),
}

CENT = Decimal("0.01")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class FareCalculationService:
    """Service for pricing itineraries per passenger category"""

    def __init__(self, config: Settings = settings):
        self.config = config

    def is_peak(self, reference_time: Optional[time]) -> bool:
        """Check whether a time of day falls inside a peak window"""
        if reference_time is None:
            return False
        return any(
            start <= reference_time < end
            for start, end in self.config.PEAK_WINDOWS
        )

    def quote(
        self,
        distance_km: float,
        counts: PassengerCounts,
        is_peak: bool = False,
        is_round_trip: bool = False,
    ) -> FareQuote:
        """Calculate the fare for a journey of ``distance_km``.

        Rules, in order: distance rate, peak surcharge, category discount
        per passenger, then the round trip multiplier on the category sum.
        """
        passenger_count = validate_passenger_counts(counts, self.config.MAX_PASSENGERS)

        base = Decimal(str(distance_km)) * Decimal(str(self.config.RATE_PER_KM))
        if is_peak:
            base *= Decimal(str(self.config.PEAK_MULTIPLIER))

        # per-passenger fare is rounded before multiplying by the count
        subtotals = {
            category: getattr(counts, category) * _money(base * factor)
            for category, factor in CATEGORY_FACTORS.items()
        }
        category_sum = sum(subtotals.values(), Decimal("0"))

        total = category_sum
        if is_round_trip:
            total = category_sum * Decimal(str(self.config.ROUND_TRIP_MULTIPLIER))

        quote = FareQuote(
            distance_km=distance_km,
            base_fare=_money(base),
            is_peak=is_peak,
            category_subtotals=subtotals,
            category_sum=_money(category_sum),
            is_round_trip=is_round_trip,
            total=_money(total),
            passenger_count=passenger_count,
        )
        logger.debug(
            "Fare for %.1f km, %d passengers (peak=%s, round trip=%s): %s",
            distance_km, passenger_count, is_peak, is_round_trip, quote.total,
        )
        return quote
