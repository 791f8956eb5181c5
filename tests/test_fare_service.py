"""Fare quotes per passenger category"""

from datetime import time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from metro_booking.exceptions import InvalidPassengerCount
from metro_booking.routes.fare_service import FareCalculationService
from metro_booking.routes.schemas import PassengerCounts
from metro_booking.routes.validation import validate_passenger_counts


@pytest.fixture
def fare_service(scenario_config) -> FareCalculationService:
    return FareCalculationService(scenario_config)


class TestFareQuote:
    def test_adults_and_student(self, fare_service):
        quote = fare_service.quote(19, PassengerCounts(adult=2, student=1))
        assert quote.base_fare == Decimal("38.00")
        assert quote.category_subtotals["adult"] == Decimal("76.00")
        assert quote.category_subtotals["student"] == Decimal("19.00")
        assert quote.total == Decimal("95.00")
        assert quote.passenger_count == 3

    def test_category_factors(self, fare_service):
        quote = fare_service.quote(19, PassengerCounts(senior=1, child=1))
        assert quote.category_subtotals["senior"] == Decimal("22.80")
        assert quote.category_subtotals["child"] == Decimal("11.40")
        assert quote.total == Decimal("34.20")

    def test_peak_surcharge(self, fare_service):
        quote = fare_service.quote(19, PassengerCounts(adult=2, student=1), is_peak=True)
        assert quote.base_fare == Decimal("47.50")
        assert quote.total == Decimal("118.75")

    def test_round_trip(self, fare_service):
        quote = fare_service.quote(19, PassengerCounts(adult=2, student=1), is_round_trip=True)
        assert quote.category_sum == Decimal("95.00")
        assert quote.total == Decimal("180.50")

    def test_linear_in_counts(self, fare_service):
        for category in ("adult", "student", "senior", "child"):
            one = fare_service.quote(13, PassengerCounts(**{category: 1}))
            four = fare_service.quote(13, PassengerCounts(**{category: 4}))
            assert four.total == one.total * 4

    def test_linear_in_counts_with_fractional_peak_fare(self, fare_service):
        for category in ("adult", "student", "senior", "child"):
            one = fare_service.quote(1.05, PassengerCounts(**{category: 1}), is_peak=True)
            three = fare_service.quote(1.05, PassengerCounts(**{category: 3}), is_peak=True)
            assert three.total == one.total * 3

    def test_per_passenger_fare_rounded_before_count(self, fare_service):
        # base 2.625, child share 0.7875
        one = fare_service.quote(1.05, PassengerCounts(child=1), is_peak=True)
        three = fare_service.quote(1.05, PassengerCounts(child=3), is_peak=True)
        assert one.total == Decimal("0.79")
        assert three.category_subtotals["child"] == Decimal("2.37")
        assert three.total == Decimal("2.37")

    def test_flags_increase_total(self, fare_service):
        counts = PassengerCounts(adult=1, child=2)
        plain = fare_service.quote(22, counts).total
        assert fare_service.quote(22, counts, is_peak=True).total > plain
        assert fare_service.quote(22, counts, is_round_trip=True).total > plain

    def test_zero_passengers(self, fare_service):
        with pytest.raises(InvalidPassengerCount):
            fare_service.quote(19, PassengerCounts())

    def test_passenger_cap(self, fare_service):
        fare_service.quote(19, PassengerCounts(adult=6, child=4))
        with pytest.raises(InvalidPassengerCount):
            fare_service.quote(19, PassengerCounts(adult=6, child=5))

    def test_negative_count_is_malformed(self):
        with pytest.raises(ValidationError):
            PassengerCounts(adult=-1)


class TestPassengerCountValidation:
    def test_total_returned(self):
        assert validate_passenger_counts(PassengerCounts(adult=2, child=1), 10) == 3

    def test_empty_booking_rejected(self):
        with pytest.raises(InvalidPassengerCount):
            validate_passenger_counts(PassengerCounts(), 10)

    def test_cap_is_inclusive(self):
        assert validate_passenger_counts(PassengerCounts(adult=4), 4) == 4
        with pytest.raises(InvalidPassengerCount):
            validate_passenger_counts(PassengerCounts(adult=5), 4)


class TestPeakWindows:
    @pytest.mark.parametrize("reference, expected", [
        (time(7, 0), True),
        (time(8, 59), True),
        (time(9, 0), False),
        (time(12, 0), False),
        (time(17, 30), True),
        (None, False),
    ])
    def test_is_peak(self, fare_service, reference, expected):
        assert fare_service.is_peak(reference) is expected
